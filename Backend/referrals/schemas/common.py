# In backend/referrals/schemas/common.py

import math
from typing import Any, Dict, Optional

from pydantic import BaseModel


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, limit=limit, total_pages=math.ceil(total / limit))


def success(data: Optional[Dict[str, Any]] = None, **extra: Any) -> Dict[str, Any]:
    """Wraps a payload in the {status: 'success', data: {...}} envelope."""
    body: Dict[str, Any] = {"status": "success"}
    body.update(extra)
    if data is not None:
        body["data"] = data
    return body
