# backend/referrals/services/conversations.py

import logging
from typing import List, Tuple

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..errors import ForbiddenError, NotFoundError, ValidationError
from ..models import Conversation, ConversationParticipant, Message, User, pair_key
from ..models._common import utcnow
from ..schemas.conversation import ConversationOut, ConversationUser, MessageOut
from ..schemas.user import UserPublic
from . import notifications

logger = logging.getLogger(__name__)


def _conversation_user(user: User) -> ConversationUser:
    public = UserPublic.from_user(user)
    return ConversationUser(id=public.id, first_name=public.first_name, last_name=public.last_name, profile=public.profile)


def _load_for_participant(db: Session, conversation_id: str, user: User, action: str) -> Conversation:
    conversation = db.get(Conversation, conversation_id)
    if not conversation:
        raise NotFoundError("Conversation not found")
    if user.id not in conversation.participant_ids:
        raise ForbiddenError(f"You are not authorized to {action} this conversation")
    return conversation


def _messages(db: Session, conversation_id: str) -> List[Message]:
    rows = db.execute(select(Message).where(Message.conversation_id == conversation_id)).scalars().all()
    # Stable sort keeps insertion order for equal timestamps
    return sorted(rows, key=lambda m: m.created_at)


def get_or_create(db: Session, user: User, recipient_id: str) -> Tuple[Conversation, bool]:
    """
    Returns the conversation between `user` and `recipient_id`, creating it
    on first contact. The second element tells whether it was just created.
    """
    if recipient_id == user.id:
        raise ValidationError("You cannot start a conversation with yourself")
    recipient = db.get(User, recipient_id)
    if not recipient:
        raise NotFoundError("Recipient not found")

    key = pair_key(user.id, recipient_id)
    existing = db.execute(select(Conversation).where(Conversation.pair_key == key)).scalar_one_or_none()
    if existing:
        return existing, False

    now = utcnow()
    conversation = Conversation(pair_key=key, created_at=now, updated_at=now)
    conversation.participants = [
        ConversationParticipant(user_id=user.id),
        ConversationParticipant(user_id=recipient_id),
    ]
    db.add(conversation)
    db.commit()
    logger.info(f"Conversation {conversation.id} created between {user.id} and {recipient_id}")
    return conversation, True


def to_conversation_out(db: Session, conversation: Conversation, viewer: User, with_summary: bool = True) -> ConversationOut:
    """Shapes a conversation for `viewer`: the viewer first, then the other participant."""
    others = [uid for uid in conversation.participant_ids if uid != viewer.id]
    users = [_conversation_user(viewer)]
    for uid in others:
        other = db.get(User, uid)
        if other:
            users.append(_conversation_user(other))

    last_message = None
    unread_count = 0
    if with_summary:
        messages = _messages(db, conversation.id)
        if messages:
            last_message = MessageOut.model_validate(messages[-1])
        unread_count = sum(1 for m in messages if m.sender_id != viewer.id and not m.is_read)

    return ConversationOut(
        id=conversation.id,
        users=users,
        last_message=last_message,
        unread_count=unread_count,
        created_at=conversation.created_at,
        updated_at=conversation.updated_at,
    )


def list_conversations(db: Session, user: User) -> List[ConversationOut]:
    conversations = db.execute(
        select(Conversation)
        .join(ConversationParticipant, ConversationParticipant.conversation_id == Conversation.id)
        .where(ConversationParticipant.user_id == user.id)
        .order_by(Conversation.updated_at.desc())
    ).scalars().all()
    return [to_conversation_out(db, c, user) for c in conversations]


def post_message(db: Session, conversation_id: str, sender: User, content: str) -> Message:
    if not content or not content.strip():
        raise ValidationError("Please provide message content")
    conversation = _load_for_participant(db, conversation_id, sender, "send messages in")

    now = utcnow()
    message = Message(
        conversation_id=conversation.id,
        sender_id=sender.id,
        content=content,
        is_read=False,
        created_at=now,
    )
    db.add(message)
    conversation.updated_at = now
    for uid in conversation.participant_ids:
        if uid != sender.id:
            notifications.send_message_notification(db, uid, sender, conversation.id)
    db.commit()
    logger.info(f"Message posted to conversation {conversation.id} by {sender.id}")
    return message


def list_messages(db: Session, conversation_id: str, user: User) -> List[Message]:
    _load_for_participant(db, conversation_id, user, "view")
    return _messages(db, conversation_id)


def mark_read(db: Session, conversation_id: str, user: User) -> int:
    """Marks everything the other participant sent as read; returns how many changed."""
    _load_for_participant(db, conversation_id, user, "view")
    result = db.execute(
        update(Message)
        .where(
            Message.conversation_id == conversation_id,
            Message.sender_id != user.id,
            Message.is_read.is_(False),
        )
        .values(is_read=True)
    )
    db.commit()
    return result.rowcount or 0
