"""API client, envelope normalization and resource registry."""

from student_hub.client.base import ApiClient
from student_hub.client.envelope import normalize_envelope, parse_pagination
from student_hub.client.registry import ResourceRegistry, ResourceSpec

__all__ = [
    "ApiClient",
    "ResourceRegistry",
    "ResourceSpec",
    "normalize_envelope",
    "parse_pagination",
]
