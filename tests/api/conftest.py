"""Fixtures for API tests: an authenticated administrator via dependency override."""

import pytest

from app.api.v1.dependencies import get_current_admin
from app.application.dtos.admin_user import AdminUserResult
from app.main import app
from tests.factories import ADMIN


@pytest.fixture
def as_admin() -> AdminUserResult:
    """Bypass bearer token checks for the duration of the test."""
    app.dependency_overrides[get_current_admin] = lambda: ADMIN
    return ADMIN
