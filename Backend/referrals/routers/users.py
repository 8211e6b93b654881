# backend/referrals/routers/users.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..models import User
from ..schemas.common import success
from ..schemas.user import ProfileUpdate, UserOut, UserPublic
from ..security.deps import require_user
from ..services import auth as auth_service

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.put("/me")
def update_me(
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Updates the caller's name and profile. Fields left out are untouched.
    """
    user = auth_service.update_profile(db, user, body)
    return success({"user": UserOut.from_user(user)})


@router.get("/referrers")
def list_referrers(
    company_id: Optional[str] = Query(None, description="Only referrers working at this company"),
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Lists users who can refer, so a seeker can pick whom to ask.
    """
    referrers = auth_service.list_referrers(db, company_id)
    return success(
        {"referrers": [dict(UserPublic.from_user(r).model_dump(), company_id=r.company_id) for r in referrers]},
        results=len(referrers),
    )


@router.get("/{user_id}")
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    return success({"user": UserPublic.from_user(auth_service.get_user(db, user_id))})
