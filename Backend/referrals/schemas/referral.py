# In backend/referrals/schemas/referral.py

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class ReferralCreate(BaseModel):
    job_id: str = Field(..., min_length=1)
    referrer_id: str = Field(..., min_length=1)
    message: Optional[str] = None
    resume_url: Optional[str] = None
    linkedin_profile: Optional[str] = None


class NoteCreate(BaseModel):
    content: str = Field(..., min_length=1)

    @field_validator('content')
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Note content cannot be empty")
        return v.strip()


class Note(BaseModel):
    id: str
    author_id: str
    content: str
    created_at: datetime


class ReferralOut(BaseModel):
    id: str
    job_id: str
    referrer_id: str
    seeker_id: str
    message: Optional[str] = None
    resume_url: Optional[str] = None
    linkedin_profile: Optional[str] = None
    status: str
    notes: List[Note] = []
    job: Dict[str, Any]
    referrer: Dict[str, Any]
    seeker: Dict[str, Any]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReferralStats(BaseModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
    completed: int = 0


class ReferralUpdate(BaseModel):
    """Fields the seeker may still edit on a pending request."""
    message: Optional[str] = None
    resume_url: Optional[str] = None
    linkedin_profile: Optional[str] = None
