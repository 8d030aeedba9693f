"""
Notification Service - in-app notifications for applications, recruitment and messages.
"""

import logging
from typing import Optional

from skillshub.models import Notification
from skillshub.models.enums import NotificationType

logger = logging.getLogger(__name__)


def notify(db, user_id: int, type: NotificationType, title: str, message: str,
           link: Optional[str] = None) -> Notification:
    """Queue a notification on the open session."""
    notification = Notification(
        user_id=user_id,
        type=type.value,
        title=title,
        message=message,
        link=link,
        read=False,
    )
    db.add(notification)
    logger.debug(f"Notification {type.value} queued for user {user_id}")
    return notification


def serialize_notification(n: Notification) -> dict:
    return {
        "id": n.id,
        "type": n.type,
        "title": n.title,
        "message": n.message,
        "link": n.link,
        "read": n.read,
        "createdAt": n.created_at,
    }
