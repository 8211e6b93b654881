# awesome-referrals/backend/referrals/models/referral.py

import enum
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..db.base import Base
from ._common import new_id, utcnow


class ReferralStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


class ReferralRequest(Base):
    __tablename__ = "referral_requests"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    job_id: Mapped[str] = mapped_column(ForeignKey("jobs.id"), index=True)
    referrer_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)
    seeker_id: Mapped[str] = mapped_column(ForeignKey("users.id"), index=True)

    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    resume_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    linkedin_profile: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=ReferralStatus.PENDING.value, index=True)

    # Appended to, never edited. Reassign the list to persist a change.
    notes: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)

    # Snapshots taken at creation time
    job: Mapped[Dict[str, Any]] = mapped_column(JSON)
    referrer: Mapped[Dict[str, Any]] = mapped_column(JSON)
    seeker: Mapped[Dict[str, Any]] = mapped_column(JSON)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
