"""
Referral request lifecycle.

A request is created `pending` by a job seeker and is then moved along by the
referrer named on it:

    pending --approve--> approved --complete--> completed
    pending --reject---> rejected

`rejected` and `completed` are terminal. Re-applying the current status is a
no-op; every other transition is refused.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..errors import ForbiddenError, NotFoundError, ValidationError
from ..models import Job, ReferralRequest, ReferralStatus, User, UserType
from ..models._common import new_id, utcnow
from ..schemas.referral import ReferralCreate, ReferralStats, ReferralUpdate
from ..schemas.user import UserPublic
from . import notifications
from .catalog import job_snapshot

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    (ReferralStatus.PENDING.value, ReferralStatus.APPROVED.value),
    (ReferralStatus.PENDING.value, ReferralStatus.REJECTED.value),
    (ReferralStatus.APPROVED.value, ReferralStatus.COMPLETED.value),
}

REFERRER_ROLES = (UserType.REFERRER.value, UserType.ADMIN.value)


def _user_snapshot(user: User) -> dict:
    return UserPublic.from_user(user).model_dump(mode="json")


def _is_participant(referral: ReferralRequest, user: User) -> bool:
    return user.id in (referral.seeker_id, referral.referrer_id)


def create_referral(db: Session, body: ReferralCreate, seeker: User) -> ReferralRequest:
    """
    Files a new request from `seeker` to `body.referrer_id` for `body.job_id`.
    The job and both users are copied onto the record as they are right now.
    """
    job = db.get(Job, body.job_id)
    if not job:
        raise NotFoundError("Job not found")
    referrer = db.get(User, body.referrer_id)
    if not referrer:
        raise NotFoundError("Referrer not found")
    if referrer.id == seeker.id:
        raise ValidationError("You cannot request a referral from yourself")
    if referrer.user_type not in REFERRER_ROLES:
        raise ValidationError("Selected user is not a referrer")

    duplicate = db.execute(
        select(ReferralRequest.id).where(
            ReferralRequest.job_id == job.id,
            ReferralRequest.seeker_id == seeker.id,
            ReferralRequest.referrer_id == referrer.id,
        )
    ).first()
    if duplicate is not None:
        raise ValidationError("You have already requested a referral for this job from this referrer")

    now = utcnow()
    referral = ReferralRequest(
        id=new_id(),
        job_id=job.id,
        referrer_id=referrer.id,
        seeker_id=seeker.id,
        message=body.message,
        resume_url=body.resume_url,
        linkedin_profile=body.linkedin_profile,
        status=ReferralStatus.PENDING.value,
        notes=[],
        job=job_snapshot(db, job),
        referrer=_user_snapshot(referrer),
        seeker=_user_snapshot(seeker),
        created_at=now,
        updated_at=now,
    )
    db.add(referral)
    notifications.send_referral_request_notification(db, referral)
    db.commit()
    logger.info(f"Referral request {referral.id} created by {seeker.id} for job {job.id} (referrer {referrer.id})")
    return referral


def get_referral(db: Session, referral_id: str) -> ReferralRequest:
    referral = db.get(ReferralRequest, referral_id)
    if not referral:
        raise NotFoundError("Referral request not found")
    return referral


def get_referral_for(db: Session, referral_id: str, actor: User) -> ReferralRequest:
    """A request is visible to its seeker, its referrer and admins."""
    referral = get_referral(db, referral_id)
    if actor.user_type != UserType.ADMIN.value and not _is_participant(referral, actor):
        raise ForbiddenError("You do not have permission to view this referral request")
    return referral


def list_by_role(
    db: Session,
    actor: User,
    sent: bool = False,
    received: bool = False,
    status: Optional[str] = None,
) -> List[ReferralRequest]:
    """
    sent=True lists the requests the actor filed as a seeker, received=True
    the ones addressed to the actor as referrer. `sent` wins if both are set;
    with neither the result is empty.
    """
    if sent:
        query = select(ReferralRequest).where(ReferralRequest.seeker_id == actor.id)
    elif received:
        query = select(ReferralRequest).where(ReferralRequest.referrer_id == actor.id)
    else:
        return []

    if status:
        query = query.where(ReferralRequest.status == status)
    return list(db.execute(query.order_by(ReferralRequest.created_at.desc())).scalars())


def transition(db: Session, referral_id: str, new_status: ReferralStatus, actor: User) -> ReferralRequest:
    referral = get_referral(db, referral_id)

    if referral.referrer_id != actor.id:
        verb = {
            ReferralStatus.APPROVED: "approve",
            ReferralStatus.REJECTED: "reject",
            ReferralStatus.COMPLETED: "complete",
        }.get(new_status, "update")
        raise ForbiddenError(f"You are not authorized to {verb} this referral request")

    if referral.status == new_status.value:
        return referral

    if (referral.status, new_status.value) not in ALLOWED_TRANSITIONS:
        raise ValidationError(f"Cannot move a referral request from {referral.status} to {new_status.value}")

    previous = referral.status
    referral.status = new_status.value
    referral.updated_at = utcnow()
    notifications.send_referral_status_notification(db, referral)
    db.commit()
    logger.info(f"Referral request {referral.id}: {previous} -> {referral.status} by {actor.id}")
    return referral


def update_referral(db: Session, referral_id: str, body: ReferralUpdate, actor: User) -> ReferralRequest:
    """
    The seeker may edit what they sent while the request is still pending.
    Status changes go through `transition`.
    """
    referral = get_referral(db, referral_id)
    is_admin = actor.user_type == UserType.ADMIN.value

    if not is_admin and referral.seeker_id != actor.id:
        raise ForbiddenError("You do not have permission to update this referral request")
    if not is_admin and referral.status != ReferralStatus.PENDING.value:
        raise ValidationError("Cannot update referral request that is not pending")

    changes = body.model_dump(exclude_unset=True)
    if not changes:
        return referral

    for key, value in changes.items():
        setattr(referral, key, value)
    referral.updated_at = utcnow()
    db.commit()
    logger.info(f"Referral request {referral.id} updated by {actor.id}: {', '.join(sorted(changes))}")
    return referral


def add_note(db: Session, referral_id: str, content: str, actor: User) -> ReferralRequest:
    referral = get_referral(db, referral_id)
    if not _is_participant(referral, actor):
        raise ForbiddenError("You are not authorized to add notes to this referral request")

    now = utcnow()
    note = {"id": new_id(), "author_id": actor.id, "content": content, "created_at": now.isoformat()}
    # New list so the JSON column is flagged dirty
    referral.notes = [*(referral.notes or []), note]
    referral.updated_at = now
    db.commit()
    logger.info(f"Note added to referral request {referral.id} by {actor.id}")
    return referral


def withdraw(db: Session, referral_id: str, actor: User) -> None:
    """The seeker may delete a request while it is still pending."""
    referral = get_referral(db, referral_id)
    is_admin = actor.user_type == UserType.ADMIN.value

    if not is_admin and referral.seeker_id != actor.id:
        raise ForbiddenError("You do not have permission to delete this referral request")
    if not is_admin and referral.status != ReferralStatus.PENDING.value:
        raise ValidationError("Cannot delete referral request that is not pending")

    db.delete(referral)
    db.commit()
    logger.info(f"Referral request {referral_id} withdrawn by {actor.id}")


def stats(db: Session, actor: User) -> Dict:
    """Per-status counts plus the five most recently updated requests."""
    base = select(ReferralRequest)
    if actor.user_type == UserType.REFERRER.value:
        condition = ReferralRequest.referrer_id == actor.id
    elif actor.user_type == UserType.JOB_SEEKER.value:
        condition = ReferralRequest.seeker_id == actor.id
    else:
        condition = None

    counts_query = select(ReferralRequest.status, func.count(ReferralRequest.id)).group_by(ReferralRequest.status)
    if condition is not None:
        counts_query = counts_query.where(condition)
        base = base.where(condition)

    counts = {row[0]: row[1] for row in db.execute(counts_query)}
    summary = ReferralStats(
        total=sum(counts.values()),
        pending=counts.get(ReferralStatus.PENDING.value, 0),
        approved=counts.get(ReferralStatus.APPROVED.value, 0),
        rejected=counts.get(ReferralStatus.REJECTED.value, 0),
        completed=counts.get(ReferralStatus.COMPLETED.value, 0),
    )
    recent = list(db.execute(base.order_by(ReferralRequest.updated_at.desc()).limit(5)).scalars())
    return {"stats": summary, "recentActivity": recent}
