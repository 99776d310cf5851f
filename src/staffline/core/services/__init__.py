"""
Service layer for staffline.

Services are stateless orchestrators that compose domain operations into
clean API surfaces. They accept typed inputs, return typed outputs, and raise
typed exceptions; presentation is the caller's job.
"""

from staffline.core.services.timeline import (
    TimelineService,
    TimelineServiceError,
    UnknownOwnerError,
)

__all__ = [
    "TimelineService",
    "TimelineServiceError",
    "UnknownOwnerError",
]
