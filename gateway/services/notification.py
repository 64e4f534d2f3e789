"""
gateway/services/notification.py

Push notification service for reminder alerts.
Used when a reminder fires but the alarm cannot sound on this host.
Currently implements a stub for FCM/APNs integration.
"""

import structlog

from config import settings

logger = structlog.get_logger(__name__)


async def send_push(reminder_id: str, message: str) -> None:
    """
    Send a reminder push notification.

    In production, this would integrate with FCM or APNs.
    """
    logger.info(
        "push_notification_sent",
        reminder_id=reminder_id,
        message_length=len(message),
        fcm_key_present=bool(settings.fcm_server_key),
    )
    # TODO: Integrate with FCM/APNs using settings.fcm_server_key
