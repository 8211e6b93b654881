"""
Notification service.

Other services call the `send_*` helpers when something happens that a user
should hear about. Notifications are added to the caller's session and are
committed together with the change that triggered them.
"""

import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..errors import NotFoundError
from ..models import Notification, ReferralRequest, ReferralStatus, User
from ..models._common import utcnow

logger = logging.getLogger(__name__)


def create_notification(
    db: Session,
    user_id: str,
    type: str,
    title: str,
    message: str,
    related_entity_id: Optional[str] = None,
    related_entity_type: Optional[str] = None,
) -> Notification:
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        related_entity_id=related_entity_id,
        related_entity_type=related_entity_type,
        read=False,
        created_at=utcnow(),
    )
    db.add(notification)
    logger.info(f"Notification created for user {user_id}: {type}")
    return notification


def _job_label(referral: ReferralRequest) -> str:
    job = referral.job or {}
    company = (job.get("company") or {}).get("name")
    title = job.get("title", "a")
    return f"the {title} position at {company}" if company else f"the {title} position"


def _name(snapshot: dict) -> str:
    return f"{snapshot.get('first_name', '')} {snapshot.get('last_name', '')}".strip() or "Someone"


def send_referral_request_notification(db: Session, referral: ReferralRequest) -> Notification:
    return create_notification(
        db,
        user_id=referral.referrer_id,
        type="referral_request",
        title="New Referral Request",
        message=f"{_name(referral.seeker)} has requested a referral for {_job_label(referral)}.",
        related_entity_id=referral.id,
        related_entity_type="referral",
    )


_STATUS_MESSAGES = {
    ReferralStatus.APPROVED.value: ("referral_approved", "Referral Request Approved", "has approved"),
    ReferralStatus.REJECTED.value: ("referral_rejected", "Referral Request Declined", "has declined"),
    ReferralStatus.COMPLETED.value: ("referral_completed", "Referral Completed", "has completed"),
}


def send_referral_status_notification(db: Session, referral: ReferralRequest) -> Optional[Notification]:
    if referral.status not in _STATUS_MESSAGES:
        return None
    type_, title, verb = _STATUS_MESSAGES[referral.status]
    return create_notification(
        db,
        user_id=referral.seeker_id,
        type=type_,
        title=title,
        message=f"{_name(referral.referrer)} {verb} your referral request for {_job_label(referral)}.",
        related_entity_id=referral.id,
        related_entity_type="referral",
    )


def send_message_notification(db: Session, recipient_id: str, sender: User, conversation_id: str) -> Notification:
    return create_notification(
        db,
        user_id=recipient_id,
        type="new_message",
        title="New Message",
        message=f"{sender.full_name} sent you a message.",
        related_entity_id=conversation_id,
        related_entity_type="conversation",
    )


def list_notifications(db: Session, user: User) -> List[Notification]:
    return list(
        db.execute(
            select(Notification)
            .where(Notification.user_id == user.id)
            .order_by(Notification.created_at.desc())
        ).scalars()
    )


def mark_read(db: Session, notification_id: str, user: User) -> Notification:
    notification = db.get(Notification, notification_id)
    # Someone else's notification is reported as missing, not forbidden
    if not notification or notification.user_id != user.id:
        raise NotFoundError("Notification not found")
    notification.read = True
    db.commit()
    return notification


def mark_all_read(db: Session, user: User) -> int:
    result = db.execute(
        update(Notification)
        .where(Notification.user_id == user.id, Notification.read.is_(False))
        .values(read=True)
    )
    db.commit()
    return result.rowcount or 0
