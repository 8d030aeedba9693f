"""
Messaging Service - one thread per user pair, plain-text messages.
"""

import logging
from typing import Optional

from sqlalchemy import and_

from skillshub.models import DirectMessageThread, DirectMessage, User
from skillshub.models.enums import NotificationType, UserRole
from skillshub.services.notification_service import notify
from skillshub.utils.helpers import utcnow

logger = logging.getLogger(__name__)


def get_or_create_thread(db, user_a: int, user_b: int) -> DirectMessageThread:
    """Find the thread for a pair of users, creating it if needed."""
    p1, p2 = min(user_a, user_b), max(user_a, user_b)
    thread = (
        db.query(DirectMessageThread)
        .filter(and_(DirectMessageThread.participant1_id == p1, DirectMessageThread.participant2_id == p2))
        .first()
    )
    if thread:
        return thread

    thread = DirectMessageThread(participant1_id=p1, participant2_id=p2)
    db.add(thread)
    db.flush()
    logger.info(f"Created message thread {thread.id} between users {p1} and {p2}")
    return thread


def send_message(db, thread: DirectMessageThread, sender: User, body: str,
                 notify_recipient: bool = True) -> DirectMessage:
    """Store a message, bump the thread and (optionally) notify the other side."""
    now = utcnow()
    message = DirectMessage(thread_id=thread.id, sender_id=sender.id, body=body, created_at=now)
    db.add(message)
    thread.updated_at = now

    if notify_recipient:
        recipient = thread.other_participant(sender.id)
        area = "employer" if recipient.role == UserRole.employer.value else "seeker"
        notify(
            db, recipient.id, NotificationType.message,
            title="New Message",
            message=f"{sender.full_name} sent you a message",
            link=f"/dashboard/{area}/messages",
        )

    db.flush()
    return message


def unread_count(db, thread_id: int, user_id: int) -> int:
    """Messages in the thread sent by the other party and not yet read."""
    return (
        db.query(DirectMessage)
        .filter(
            DirectMessage.thread_id == thread_id,
            DirectMessage.sender_id != user_id,
            DirectMessage.read_at.is_(None),
        )
        .count()
    )


def mark_thread_read(db, thread_id: int, user_id: int) -> int:
    return (
        db.query(DirectMessage)
        .filter(
            DirectMessage.thread_id == thread_id,
            DirectMessage.sender_id != user_id,
            DirectMessage.read_at.is_(None),
        )
        .update({DirectMessage.read_at: utcnow()}, synchronize_session=False)
    )


def serialize_participant(user: Optional[User]) -> Optional[dict]:
    if not user:
        return None
    return {
        "id": user.id,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "name": user.full_name,
        "email": user.email,
        "role": user.role,
    }


def serialize_message(m: DirectMessage) -> dict:
    return {
        "id": m.id,
        "threadId": m.thread_id,
        "senderId": m.sender_id,
        "body": m.body,
        "readAt": m.read_at,
        "createdAt": m.created_at,
    }
