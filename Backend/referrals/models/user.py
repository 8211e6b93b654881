# awesome-referrals/backend/referrals/models/user.py

from __future__ import annotations
import enum
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from ..db.base import Base
from ._common import new_id, utcnow


class UserType(str, enum.Enum):
    JOB_SEEKER = "job_seeker"
    REFERRER = "referrer"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    # --- Base Columns ---
    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    user_type: Mapped[str] = mapped_column(String(20), nullable=False, default=UserType.JOB_SEEKER.value)
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # --- Profile ---
    avatar_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    current_position: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    resume_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    linkedin_profile: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    skills: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False)

    # The employer a referrer can refer into
    company_id: Mapped[Optional[str]] = mapped_column(ForeignKey("companies.id"), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
