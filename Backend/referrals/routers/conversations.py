# backend/referrals/routers/conversations.py

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..models import User
from ..schemas.common import success
from ..schemas.conversation import ConversationCreate, MessageCreate, MessageOut
from ..security.deps import require_user
from ..services import conversations as conversation_service

router = APIRouter(prefix="/api/conversations", tags=["Conversations"])


@router.get("")
def list_conversations(
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    The caller's conversations, most recently active first, with the last
    message and how many messages the caller has not read yet.
    """
    conversations = conversation_service.list_conversations(db, user)
    return success({"conversations": conversations}, results=len(conversations))


@router.post("")
def start_conversation(
    body: ConversationCreate,
    response: Response,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Returns the caller's conversation with `recipient_id`, creating it on
    first contact (201). Later calls return the same conversation (200).
    """
    conversation, created = conversation_service.get_or_create(db, user, body.recipient_id)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return success(
        {"conversation": conversation_service.to_conversation_out(db, conversation, user, with_summary=False)}
    )


@router.get("/{conversation_id}/messages")
def list_messages(
    conversation_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    messages = conversation_service.list_messages(db, conversation_id, user)
    return success({"messages": [MessageOut.model_validate(m) for m in messages]}, results=len(messages))


@router.post("/{conversation_id}/messages", status_code=status.HTTP_201_CREATED)
def post_message(
    conversation_id: str,
    body: MessageCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    message = conversation_service.post_message(db, conversation_id, user, body.content)
    return success({"message": MessageOut.model_validate(message)})


@router.put("/{conversation_id}/read")
def mark_conversation_read(
    conversation_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    updated = conversation_service.mark_read(db, conversation_id, user)
    return success({"updated": updated})
