"""
Notification Routes

GET /notifications - Latest 50 notifications + unread count
PATCH /notifications - Mark one (notificationId) or all (markAllAsRead) as read
"""

from fastapi import APIRouter, HTTPException, Depends, Query

from skillshub.db.database import get_db_session
from skillshub.core.auth import get_current_user
from skillshub.models import Notification
from skillshub.services.notification_service import serialize_notification
from skillshub.schemas.schemas import NotificationUpdate, MessageResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("")
async def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    user: dict = Depends(get_current_user)
):
    with get_db_session() as db:
        query = db.query(Notification).filter(Notification.user_id == user["user_id"])
        if unread_only:
            query = query.filter(Notification.read.is_(False))
        notifications = query.order_by(Notification.created_at.desc(), Notification.id.desc()).limit(50).all()

        unread = (
            db.query(Notification)
            .filter(Notification.user_id == user["user_id"], Notification.read.is_(False))
            .count()
        )
        return {
            "notifications": [serialize_notification(n) for n in notifications],
            "unreadCount": unread,
        }


@router.patch("", response_model=MessageResponse)
async def update_notifications(data: NotificationUpdate, user: dict = Depends(get_current_user)):
    """Only the owner's notifications can be changed."""
    with get_db_session() as db:
        if data.mark_all_as_read:
            db.query(Notification).filter(
                Notification.user_id == user["user_id"], Notification.read.is_(False)
            ).update({Notification.read: True}, synchronize_session=False)
            return MessageResponse(message="All notifications marked as read")

        if data.notification_id is None:
            raise HTTPException(status_code=400, detail="notificationId or markAllAsRead is required")

        notification = (
            db.query(Notification)
            .filter(Notification.id == data.notification_id, Notification.user_id == user["user_id"])
            .first()
        )
        if not notification:
            raise HTTPException(status_code=404, detail="Notification not found")
        notification.read = data.read

    return MessageResponse(message="Notification updated")
