# In backend/referrals/schemas/user.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.user import User, UserType

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


def _check_password_length(v: str) -> str:
    if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes long")
    return v


class UserProfile(BaseModel):
    avatar_url: Optional[str] = None
    current_position: Optional[str] = None
    resume_url: Optional[str] = None
    linkedin_profile: Optional[str] = None
    skills: List[str] = []


class UserPublic(BaseModel):
    """What other users get to see: name, email and profile. No role details, no password."""
    id: str
    first_name: str
    last_name: str
    email: str
    profile: UserProfile

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            profile=_profile(user),
        )


class UserOut(UserPublic):
    user_type: str
    verified: bool
    company_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            profile=_profile(user),
            user_type=user.user_type,
            verified=user.verified,
            company_id=user.company_id,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


def _profile(user: User) -> UserProfile:
    return UserProfile(
        avatar_url=user.avatar_url,
        current_position=user.current_position,
        resume_url=user.resume_url,
        linkedin_profile=user.linkedin_profile,
        skills=list(user.skills or []),
    )


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    user_type: UserType

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("must be an email address")
        return v

    @field_validator('password')
    @classmethod
    def password_length(cls, v: str) -> str:
        return _check_password_length(v)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ProfileUpdate(BaseModel):
    """Every field is optional; only the ones sent are changed."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    avatar_url: Optional[str] = None
    current_position: Optional[str] = None
    resume_url: Optional[str] = None
    linkedin_profile: Optional[str] = None
    skills: Optional[List[str]] = None
    company_id: Optional[str] = None


class PasswordUpdate(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)

    @field_validator('new_password')
    @classmethod
    def password_length(cls, v: str) -> str:
        return _check_password_length(v)
