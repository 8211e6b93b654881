# awesome-referrals/backend/referrals/routers/auth.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..models import User
from ..schemas.common import success
from ..schemas.user import LoginRequest, PasswordUpdate, RegisterRequest, UserOut
from ..security.deps import require_user
from ..security.jwt import issue_jwt
from ..services import auth as auth_service

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """
    Creates an account and logs the new user straight in.
    """
    user = auth_service.register_user(db, body)
    return success(token=issue_jwt(user.id), user=UserOut.from_user(user))


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchanges email and password for a bearer token.
    """
    user = auth_service.authenticate(db, body)
    return success(token=issue_jwt(user.id), user=UserOut.from_user(user))


@router.get("/me")
def get_me(user: User = Depends(require_user)):
    return success({"user": UserOut.from_user(user)})


@router.patch("/updatepassword")
def update_password(
    body: PasswordUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Changes the caller's password and hands back a fresh token.
    """
    user = auth_service.change_password(db, user, body)
    return success(message="Password updated successfully", token=issue_jwt(user.id))
