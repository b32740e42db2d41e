"""Keyword matching for search boxes over listings."""

import re


def word_matches(text: str, word: str, prefix: bool = False) -> bool:
    """
    Word-boundary match for a single word.
    With prefix=True the word only needs to start a word in the text ("dev" finds "developer").
    """
    if not word or not text:
        return False
    pattern = rf"\b{re.escape(word.lower().strip())}"
    if not prefix:
        pattern += r"\b"
    return bool(re.search(pattern, text.lower()))


def query_terms(query: str) -> list[str]:
    """Split a search box query into lowercase terms; quoted phrases stay together."""
    if not query:
        return []
    terms = []
    for quoted, bare in re.findall(r'"([^"]+)"|(\S+)', query.lower()):
        term = (quoted or bare).strip()
        if term:
            terms.append(term)
    return terms


def phrase_matches(text: str, phrase: str, prefix: bool = False) -> bool:
    """Multi-word phrase: the whole phrase at word boundaries, else every word separately."""
    phrase = phrase.lower().strip()
    if not phrase:
        return False
    words = phrase.split()
    if len(words) == 1:
        return word_matches(text, words[0], prefix=prefix)
    if word_matches(text, phrase, prefix=prefix):
        return True
    return all(word_matches(text, w, prefix=prefix) for w in words)


def matches_query(fields: list[str], query: str, prefix: bool = True) -> bool:
    """Every term of the query must appear in at least one field. Empty query matches."""
    terms = query_terms(query)
    if not terms:
        return True
    haystack = "\n".join(f for f in fields if f)
    return all(phrase_matches(haystack, term, prefix=prefix) for term in terms)
