"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers; repositories, stores and services
are built here from infrastructure implementations.
"""

from app.api.v1.dependencies.audit import (
    get_audit_operations,
    get_audit_operations_reader,
    get_audit_view_builder,
    get_orphan_sweeper,
)
from app.api.v1.dependencies.auth import (
    CurrentAdmin,
    get_admin_auth_service,
    get_admin_auth_service_for_write,
    get_current_admin,
    get_current_admin_optional,
)
from app.api.v1.dependencies.db import (
    ReadSession,
    StepSession,
    WriteSession,
    get_admin_user_repo,
    get_admin_user_repo_for_write,
    get_category_repo,
)
from app.api.v1.dependencies.infrastructure import (
    get_blob_store,
    get_notification_channel,
    get_notification_renderer,
)
from app.api.v1.dependencies.intake import get_intake_service
from app.api.v1.dependencies.reference_data import (
    get_reference_data_reader,
    get_reference_data_service,
)

__all__ = [
    "CurrentAdmin",
    "ReadSession",
    "StepSession",
    "WriteSession",
    "get_admin_auth_service",
    "get_admin_auth_service_for_write",
    "get_admin_user_repo",
    "get_admin_user_repo_for_write",
    "get_audit_operations",
    "get_audit_operations_reader",
    "get_audit_view_builder",
    "get_blob_store",
    "get_category_repo",
    "get_current_admin",
    "get_current_admin_optional",
    "get_intake_service",
    "get_notification_channel",
    "get_notification_renderer",
    "get_orphan_sweeper",
    "get_reference_data_reader",
    "get_reference_data_service",
]
