# backend/referrals/routers/referrals.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..models import ReferralStatus, User
from ..schemas.common import Pagination, success
from ..schemas.referral import NoteCreate, ReferralCreate, ReferralOut, ReferralUpdate
from ..security.deps import require_user
from ..services import referrals as referral_service
from ..services.job_search import paginate

router = APIRouter(prefix="/api/referrals", tags=["Referrals"])


def _one(referral) -> dict:
    return success({"referralRequest": ReferralOut.model_validate(referral)})


@router.post("", status_code=status.HTTP_201_CREATED)
def create_referral_request(
    body: ReferralCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Asks `referrer_id` for a referral to `job_id` on behalf of the caller.
    """
    return _one(referral_service.create_referral(db, body, user))


@router.get("/requests")
def list_referral_requests(
    sent: bool = Query(False, description="Requests the caller sent as a seeker"),
    received: bool = Query(False, description="Requests addressed to the caller as referrer"),
    status_filter: Optional[ReferralStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    rows = referral_service.list_by_role(
        db, user, sent=sent, received=received, status=status_filter.value if status_filter else None
    )
    result = paginate(rows, page, limit)
    return success(
        {"referralRequests": [ReferralOut.model_validate(r) for r in result.items]},
        results=len(result.items),
        pagination=Pagination.build(result.total, result.page, result.limit),
    )


@router.get("/stats")
def referral_stats(
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    result = referral_service.stats(db, user)
    return success(
        {
            "stats": result["stats"],
            "recentActivity": [ReferralOut.model_validate(r) for r in result["recentActivity"]],
        }
    )


@router.get("/{referral_id}")
def get_referral_request(
    referral_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    return _one(referral_service.get_referral_for(db, referral_id, user))


@router.patch("/{referral_id}")
def update_referral_request(
    referral_id: str,
    body: ReferralUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Lets the seeker revise the message, resume or LinkedIn link of a pending request.
    """
    return _one(referral_service.update_referral(db, referral_id, body, user))


@router.put("/requests/{referral_id}/approve")
def approve_referral_request(
    referral_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    return _one(referral_service.transition(db, referral_id, ReferralStatus.APPROVED, user))


@router.put("/requests/{referral_id}/reject")
def reject_referral_request(
    referral_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    return _one(referral_service.transition(db, referral_id, ReferralStatus.REJECTED, user))


@router.put("/requests/{referral_id}/complete")
def complete_referral_request(
    referral_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Marks an approved referral as done once the referrer has submitted it.
    """
    return _one(referral_service.transition(db, referral_id, ReferralStatus.COMPLETED, user))


@router.post("/{referral_id}/notes", status_code=status.HTTP_201_CREATED)
def add_referral_note(
    referral_id: str,
    body: NoteCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    return _one(referral_service.add_note(db, referral_id, body.content, user))


@router.delete("/{referral_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_referral_request(
    referral_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    referral_service.withdraw(db, referral_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
