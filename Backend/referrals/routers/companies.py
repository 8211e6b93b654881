# backend/referrals/routers/companies.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..models import User
from ..schemas.common import Pagination, success
from ..schemas.job import CompanyOut
from ..security.deps import optional_user
from ..services import catalog
from ..services.job_search import paginate

router = APIRouter(prefix="/api/companies", tags=["Companies"])


@router.get("")
def list_companies(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    result = paginate(catalog.list_companies(db), page, limit)
    return success(
        {"companies": [CompanyOut.model_validate(c) for c in result.items]},
        results=len(result.items),
        pagination=Pagination.build(result.total, result.page, result.limit),
    )


@router.get("/{company_id}")
def get_company(
    company_id: str,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(optional_user),
):
    """
    A company with its open jobs, each flagged with the caller's save state.
    """
    return success({"company": catalog.company_detail(db, company_id, user)})
