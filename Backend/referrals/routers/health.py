from fastapi import APIRouter

from ..config import settings
from ..models._common import utcnow

router = APIRouter(prefix="/api", tags=["Health"])

APIS = ("auth", "users", "jobs", "companies", "referrals", "conversations", "messages", "notifications")


@router.get("/health")
def health():
    return {
        "status": "success",
        "message": "Server is up and running",
        "environment": settings.APP_ENV,
        "timestamp": utcnow().isoformat(),
        "version": settings.APP_VERSION,
        "apis": {name: "READY" for name in APIS},
    }
