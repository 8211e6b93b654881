# backend/referrals/routers/jobs.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..models import User
from ..schemas.common import Pagination, success
from ..security.deps import optional_user, require_user
from ..services import catalog
from ..services.job_search import (
    JobFilters,
    SearchFilters,
    filter_jobs,
    paginate,
    search_jobs as run_search,
    sort_jobs,
    sort_search_results,
)

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])

TRENDING_COUNT = 3


def _page_response(db: Session, jobs, page: int, limit: int, user: Optional[User]):
    result = paginate(jobs, page, limit)
    views = catalog.job_views(db, result.items, user)
    return success(
        {"jobs": views},
        results=len(views),
        pagination=Pagination.build(result.total, result.page, result.limit),
    )


@router.get("")
def list_jobs(
    title: Optional[str] = Query(None, description="Substring of the job title"),
    company: Optional[str] = Query(None, description="Substring of the company name"),
    location: Optional[str] = Query(None),
    remote: Optional[str] = Query(None, description="'true' or 'false'"),
    job_type: Optional[str] = Query(None, alias="type"),
    experience_level: Optional[str] = Query(None),
    salary_min: Optional[int] = Query(None, ge=0),
    salary_max: Optional[int] = Query(None, ge=0),
    skills: Optional[str] = Query(None, description="Comma-separated; matches any"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str = Query("id"),
    sort_dir: str = Query("DESC"),
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(optional_user),
):
    """
    Filtered, sorted and paginated catalog, each job joined with its company.
    """
    filters = JobFilters(
        title=title,
        company=company,
        location=location,
        remote=remote,
        job_type=job_type,
        experience_level=experience_level,
        salary_min=salary_min,
        salary_max=salary_max,
        skills=skills,
    )
    jobs = filter_jobs(catalog.list_jobs(db), filters, catalog.list_companies(db))
    jobs = sort_jobs(jobs, sort_by, sort_dir)
    return _page_response(db, jobs, page, limit, user)


@router.get("/search")
def search_jobs(
    query: Optional[str] = Query(None, description="Free text matched against title, description and requirements"),
    location: Optional[str] = Query(None),
    remote: Optional[str] = Query(None),
    company_ids: Optional[str] = Query(None, description="Comma-separated company ids"),
    job_types: Optional[str] = Query(None, description="Comma-separated job types"),
    experience_levels: Optional[str] = Query(None, description="Comma-separated experience levels"),
    salary_min: Optional[int] = Query(None, ge=0),
    salary_max: Optional[int] = Query(None, ge=0),
    skills: Optional[str] = Query(None),
    posted_within: Optional[int] = Query(None, ge=0, description="Only jobs posted in the last N days"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str = Query("relevance", description="'relevance', 'date' or 'salary'"),
    sort_dir: str = Query("DESC"),
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(optional_user),
):
    filters = SearchFilters(
        query=query,
        location=location,
        remote=remote,
        company_ids=company_ids,
        job_types=job_types,
        experience_levels=experience_levels,
        salary_min=salary_min,
        salary_max=salary_max,
        skills=skills,
        posted_within=posted_within,
    )
    jobs = run_search(catalog.list_jobs(db), filters)
    jobs = sort_search_results(jobs, sort_by, sort_dir, query)
    return _page_response(db, jobs, page, limit, user)


@router.get("/trending")
def trending_jobs(
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(optional_user),
):
    views = catalog.job_views(db, catalog.list_jobs(db)[:TRENDING_COUNT], user)
    return success({"jobs": views}, results=len(views))


@router.get("/saved")
def saved_jobs(
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    views = catalog.list_saved_jobs(db, user)
    return success({"jobs": views}, results=len(views))


@router.get("/{job_id}")
def get_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(optional_user),
):
    job = catalog.get_job(db, job_id)
    return success({"job": catalog.job_views(db, [job], user)[0]})


@router.post("/{job_id}/save")
def save_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    """
    Bookmarks a job. Saving an already-saved job is not an error.
    """
    created = catalog.save_job(db, job_id, user)
    return success(message="Job saved successfully" if created else "Job already saved")


@router.delete("/{job_id}/save")
def unsave_job(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(require_user),
):
    catalog.unsave_job(db, job_id, user)
    return success(message="Job removed from saved jobs")
