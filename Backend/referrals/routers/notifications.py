# backend/referrals/routers/notifications.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..models import User
from ..schemas.common import success
from ..schemas.notification import NotificationOut
from ..security.deps import require_user
from ..services import notifications as notification_service

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("")
def list_notifications(
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    rows = notification_service.list_notifications(db, user)
    return success(
        {
            "notifications": [NotificationOut.model_validate(n) for n in rows],
            "unread_count": sum(1 for n in rows if not n.read),
        },
        results=len(rows),
    )


@router.put("/read-all")
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    return success({"updated": notification_service.mark_all_read(db, user)})


@router.put("/{notification_id}/read")
def mark_notification_read(
    notification_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    notification = notification_service.mark_read(db, notification_id, user)
    return success({"notification": NotificationOut.model_validate(notification)})
