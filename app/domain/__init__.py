"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import OverviewSortField, UploadStep
from app.domain.exceptions import (
    AuthenticationException,
    DuplicateResourceException,
    IntakeException,
    InvalidTokenException,
    NotificationException,
    PersistenceException,
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    # Enums
    "OverviewSortField",
    "UploadStep",
    # Exceptions
    "AuthenticationException",
    "DuplicateResourceException",
    "IntakeException",
    "InvalidTokenException",
    "NotificationException",
    "PersistenceException",
    "ResourceNotFoundException",
    "ValidationException",
]
