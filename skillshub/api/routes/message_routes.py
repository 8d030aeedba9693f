"""
Message Routes

GET /messages - List my threads (latest activity first)
POST /messages - Start (or reuse) a thread with another user
GET /messages/{thread_id} - Thread with messages; marks incoming as read
POST /messages/{thread_id} - Send a message
"""

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import or_

from skillshub.db.database import get_db_session
from skillshub.core.auth import get_current_user
from skillshub.models import DirectMessage, DirectMessageThread, User
from skillshub.services.messaging_service import (
    get_or_create_thread, send_message, unread_count, mark_thread_read,
    serialize_participant, serialize_message
)
from skillshub.schemas.schemas import StartThreadRequest, SendMessageRequest

router = APIRouter(prefix="/messages", tags=["Messages"])


def _get_thread_for(db, thread_id: int, user_id: int) -> DirectMessageThread:
    thread = db.get(DirectMessageThread, thread_id)
    if not thread or not thread.has_participant(user_id):
        raise HTTPException(status_code=404, detail="Thread not found or access denied")
    return thread


def _clean_body(text: str) -> str:
    body = (text or "").strip()
    if not body:
        raise HTTPException(status_code=400, detail="Message cannot be empty")
    return body


@router.get("")
async def list_threads(user: dict = Depends(get_current_user)):
    """All threads the user takes part in."""
    user_id = user["user_id"]
    with get_db_session() as db:
        threads = (
            db.query(DirectMessageThread)
            .filter(or_(DirectMessageThread.participant1_id == user_id,
                        DirectMessageThread.participant2_id == user_id))
            .order_by(DirectMessageThread.updated_at.desc(), DirectMessageThread.id.desc())
            .all()
        )

        result = []
        for thread in threads:
            last = (
                db.query(DirectMessage)
                .filter(DirectMessage.thread_id == thread.id)
                .order_by(DirectMessage.id.desc())
                .first()
            )
            result.append({
                "id": thread.id,
                "otherParticipant": serialize_participant(thread.other_participant(user_id)),
                "lastMessage": serialize_message(last) if last else None,
                "unreadCount": unread_count(db, thread.id, user_id),
                "updatedAt": thread.updated_at,
            })
        return {"threads": result}


@router.post("", status_code=201)
async def start_thread(data: StartThreadRequest, user: dict = Depends(get_current_user)):
    """Message another user directly, creating the thread if needed."""
    if data.recipient_id == user["user_id"]:
        raise HTTPException(status_code=400, detail="You cannot message yourself")
    body = _clean_body(data.message)

    with get_db_session() as db:
        recipient = db.get(User, data.recipient_id)
        if not recipient:
            raise HTTPException(status_code=404, detail="Recipient not found")

        sender = db.get(User, user["user_id"])
        thread = get_or_create_thread(db, sender.id, recipient.id)
        message = send_message(db, thread, sender, body)
        return {"success": True, "threadId": thread.id, "message": serialize_message(message)}


@router.get("/{thread_id}")
async def get_thread(thread_id: int, user: dict = Depends(get_current_user)):
    """Thread with its messages in order. Incoming messages are marked read."""
    user_id = user["user_id"]
    with get_db_session() as db:
        thread = _get_thread_for(db, thread_id, user_id)
        mark_thread_read(db, thread.id, user_id)
        db.flush()
        db.expire(thread, ["messages"])

        return {
            "thread": {
                "id": thread.id,
                "otherParticipant": serialize_participant(thread.other_participant(user_id)),
                "createdAt": thread.created_at,
                "updatedAt": thread.updated_at,
            },
            "messages": [serialize_message(m) for m in thread.messages],
        }


@router.post("/{thread_id}", status_code=201)
async def post_message(thread_id: int, data: SendMessageRequest, user: dict = Depends(get_current_user)):
    """Send a message in an existing thread and notify the other participant."""
    body = _clean_body(data.message)
    with get_db_session() as db:
        thread = _get_thread_for(db, thread_id, user["user_id"])
        sender = db.get(User, user["user_id"])
        message = send_message(db, thread, sender, body)
        return {"success": True, "message": serialize_message(message)}
