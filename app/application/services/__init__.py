"""Application services: token registry, reference data and administrator auth."""

from app.application.services.admin_auth_service import AdminAuthService
from app.application.services.reference_data_service import ReferenceDataService
from app.application.services.token_registry import TokenRegistry

__all__ = [
    "AdminAuthService",
    "ReferenceDataService",
    "TokenRegistry",
]
