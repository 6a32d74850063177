"""Request context management using contextvars.

Async-safe storage for request-scoped data: the request id (set by
RequestIDMiddleware, read by the logging filter) and the authenticated
administrator, if any.

Usage:
    set_request_id("3f2a...")
    request_id = get_request_id()
"""

from contextvars import ContextVar

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_current_admin_id: ContextVar[str | None] = ContextVar("current_admin_id", default=None)


def set_request_id(request_id: str | None) -> None:
    """Bind the request id for the current task."""
    _request_id.set(request_id)


def get_request_id() -> str | None:
    return _request_id.get()


def set_current_admin(admin_id: str | None) -> None:
    """Bind the authenticated administrator id (used in audit log lines)."""
    _current_admin_id.set(admin_id)


def get_current_admin_id() -> str | None:
    return _current_admin_id.get()
