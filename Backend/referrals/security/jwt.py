# awesome-referrals/backend/referrals/security/jwt.py

import logging
from datetime import datetime, timedelta, timezone

import jwt

from ..config import settings
from ..errors import UnauthorizedError

logger = logging.getLogger(__name__)


def issue_jwt(user_id: str) -> str:
    """
    Creates a new access token carrying the user's id.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "iat": now,
        "exp": now + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_jwt(token: str) -> dict:
    """
    Verifies a token and returns its payload.
    Raises UnauthorizedError if the token is invalid or expired.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected expired token")
        raise UnauthorizedError("Your token has expired. Please log in again")
    except jwt.InvalidTokenError:
        logger.warning("Rejected invalid token")
        raise UnauthorizedError("Invalid token. Please log in again")

    if not payload.get("id"):
        raise UnauthorizedError("Invalid token. Please log in again")
    return payload
