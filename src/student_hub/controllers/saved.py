"""Saved/applied relationships between the signed-in user and opportunities."""

import logging
from datetime import datetime, timezone
from typing import Optional

from student_hub.client.base import ApiClient
from student_hub.client.registry import ResourceRegistry, ResourceSpec
from student_hub.controllers.resource import RemoteResourceController, Result
from student_hub.models.opportunity import OPPORTUNITY_TYPES, SavedOpportunity
from student_hub.session import Session

logger = logging.getLogger(__name__)


class SavedOpportunityController(RemoteResourceController[SavedOpportunity]):
    """
    Relationship records keyed by (user, opportunity type, opportunity id).
    The user comes from the session given at construction.
    """

    def __init__(
        self,
        api: ApiClient,
        session: Optional[Session] = None,
        spec: Optional[ResourceSpec] = None,
    ):
        super().__init__(api, spec or ResourceRegistry.get("saved"), session)

    def _check_type(self, opportunity_type: str) -> None:
        if opportunity_type not in OPPORTUNITY_TYPES:
            raise ValueError(
                f"Unknown opportunity type: {opportunity_type}. Expected one of {OPPORTUNITY_TYPES}"
            )

    def _find(self, opportunity_type: str, opportunity_id: str) -> Optional[SavedOpportunity]:
        key = (opportunity_type, opportunity_id)
        return next((s for s in self.state.items if s.key == key), None)

    def is_saved(self, opportunity_type: str, opportunity_id: str) -> bool:
        return self._find(opportunity_type, opportunity_id) is not None

    def saved_ids(self, opportunity_type: str) -> set[str]:
        return {s.opportunity_id for s in self.state.items if s.opportunity_type == opportunity_type}

    def save(
        self,
        opportunity_type: str,
        opportunity_id: str,
        notes: Optional[str] = None,
    ) -> Result[SavedOpportunity]:
        """Save an opportunity; already-saved is a local no-op."""
        self._check_type(opportunity_type)
        existing = self._find(opportunity_type, opportunity_id)
        if existing is not None:
            return Result.success(existing)
        payload = {
            "userId": self.session.user_id,
            "opportunityType": opportunity_type,
            "opportunityId": opportunity_id,
        }
        if notes:
            payload["notes"] = notes
        return self.create(payload)

    def unsave(self, opportunity_type: str, opportunity_id: str) -> Result[None]:
        """Remove a saved relationship; not-saved is a local no-op."""
        self._check_type(opportunity_type)
        existing = self._find(opportunity_type, opportunity_id)
        if existing is None or existing.id is None:
            return Result.success(None)
        return self.remove(existing.id)

    def toggle(self, opportunity_type: str, opportunity_id: str) -> Result:
        if self.is_saved(opportunity_type, opportunity_id):
            return self.unsave(opportunity_type, opportunity_id)
        return self.save(opportunity_type, opportunity_id)

    def mark_applied(self, opportunity_type: str, opportunity_id: str) -> Result[SavedOpportunity]:
        """Flag a saved opportunity as applied, saving it first when needed."""
        self._check_type(opportunity_type)
        existing = self._find(opportunity_type, opportunity_id)
        if existing is None or existing.id is None:
            result = self.save(opportunity_type, opportunity_id)
            if not result.ok:
                return result
            existing = self._find(opportunity_type, opportunity_id)
            if existing is None or existing.id is None:
                logger.warning(
                    "Saved %s %s not found after refetch", opportunity_type, opportunity_id
                )
                return result
        if existing.applied:
            return Result.success(existing)
        applied_at = datetime.now(timezone.utc).isoformat()
        return self.update(existing.id, {"applied": True, "appliedAt": applied_at})
