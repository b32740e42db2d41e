"""Controllers owning server-backed state."""

from student_hub.controllers.paginated import PaginatedResourceController
from student_hub.controllers.resource import RemoteResourceController, ResourceState, Result
from student_hub.controllers.saved import SavedOpportunityController

__all__ = [
    "PaginatedResourceController",
    "RemoteResourceController",
    "ResourceState",
    "Result",
    "SavedOpportunityController",
]
