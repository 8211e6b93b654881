# In backend/referrals/schemas/conversation.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .user import UserProfile


class ConversationCreate(BaseModel):
    recipient_id: str = Field(..., min_length=1)


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1)

    @field_validator('content')
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message content cannot be empty")
        return v


class MessageOut(BaseModel):
    id: str
    conversation_id: str
    sender_id: str
    content: str
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ConversationUser(BaseModel):
    id: str
    first_name: str
    last_name: str
    profile: UserProfile


class ConversationOut(BaseModel):
    id: str
    users: List[ConversationUser]
    last_message: Optional[MessageOut] = None
    unread_count: int = 0
    created_at: datetime
    updated_at: datetime
