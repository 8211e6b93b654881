# In backend/referrals/security/deps.py

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..errors import UnauthorizedError
from ..models.user import User
from .jwt import verify_jwt


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_session(request: Request) -> dict:
    token = _bearer_token(request)
    if not token:
        raise UnauthorizedError("You are not logged in. Please log in to get access")
    return verify_jwt(token)


def require_user(claims: dict = Depends(get_current_session), db: Session = Depends(get_db)) -> User:
    user = db.get(User, claims["id"])
    if not user:
        raise UnauthorizedError("The user belonging to this token no longer exists")
    return user


def optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    """
    Resolves the caller when a valid bearer token is present. A missing,
    malformed or expired token makes the caller anonymous rather than failing.
    """
    token = _bearer_token(request)
    if not token:
        return None
    try:
        claims = verify_jwt(token)
    except UnauthorizedError:
        return None
    return db.get(User, claims["id"])

