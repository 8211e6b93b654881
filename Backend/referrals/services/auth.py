import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import NotFoundError, UnauthorizedError, ValidationError
from ..models import Company, User, UserType
from ..models._common import utcnow
from ..schemas.user import LoginRequest, PasswordUpdate, ProfileUpdate, RegisterRequest
from ..security.passwords import get_password_hash, verify_password

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def register_user(db: Session, body: RegisterRequest) -> User:
    """
    Creates a new account. Email addresses are unique across all users.
    """
    if get_user_by_email(db, body.email):
        raise ValidationError("Email already in use")

    now = utcnow()
    user = User(
        email=body.email,
        password_hash=get_password_hash(body.password),
        first_name=body.first_name,
        last_name=body.last_name,
        user_type=body.user_type.value,
        verified=False,
        skills=[],
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    db.commit()
    logger.info(f"Registered {user.user_type} {user.id}")
    return user


def authenticate(db: Session, body: LoginRequest) -> User:
    user = get_user_by_email(db, body.email)
    if not user or not verify_password(body.password, user.password_hash):
        logger.warning("Failed login attempt")
        raise UnauthorizedError("Incorrect email or password")
    return user


def change_password(db: Session, user: User, body: PasswordUpdate) -> User:
    if not verify_password(body.current_password, user.password_hash):
        logger.warning(f"Rejected password change for user {user.id}")
        raise UnauthorizedError("Your current password is wrong")

    user.password_hash = get_password_hash(body.new_password)
    user.updated_at = utcnow()
    db.commit()
    logger.info(f"Password changed for user {user.id}")
    return user


def update_profile(db: Session, user: User, body: ProfileUpdate) -> User:
    changes = body.model_dump(exclude_unset=True)

    if changes.get("company_id") is not None and not db.get(Company, changes["company_id"]):
        raise NotFoundError("Company not found")

    for key, value in changes.items():
        if key in ("first_name", "last_name") and value is None:
            continue
        if key == "skills":
            value = [s.strip() for s in value or [] if s and s.strip()]
        setattr(user, key, value)

    user.updated_at = utcnow()
    db.add(user)
    db.commit()
    logger.info(f"Updated profile of user {user.id}")
    return user


def list_referrers(db: Session, company_id: Optional[str] = None) -> List[User]:
    query = select(User).where(User.user_type == UserType.REFERRER.value)
    if company_id:
        query = query.where(User.company_id == company_id)
    return list(db.execute(query.order_by(User.created_at.asc())).scalars())
