import uuid
from datetime import datetime, timezone


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # Naive UTC: SQLite drops tzinfo on the way back, so everything stays naive.
    return datetime.now(timezone.utc).replace(tzinfo=None)
