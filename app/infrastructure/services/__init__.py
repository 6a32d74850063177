"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.notification_channels import (
    HttpEmailNotificationChannel,
    LogOnlyNotificationChannel,
    create_notification_channel,
)
from app.infrastructure.services.notification_template_renderer import (
    UploadNotificationRenderer,
)

__all__ = [
    "HttpEmailNotificationChannel",
    "LogOnlyNotificationChannel",
    "UploadNotificationRenderer",
    "create_notification_channel",
]
