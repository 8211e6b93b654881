# backend/referrals/services/catalog.py

import logging
from typing import Dict, List, Optional, Sequence, Set

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..errors import NotFoundError
from ..models import Company, Job, SavedJob, User
from ..models._common import utcnow
from ..schemas.job import CompanyDetail, CompanyJobView, CompanyOut, JobOut, JobView
from .job_search import companies_by_id

logger = logging.getLogger(__name__)


# ----------------------------
# Reads
# ----------------------------
def list_companies(db: Session) -> List[Company]:
    return list(db.execute(select(Company)).scalars())


def get_company(db: Session, company_id: str) -> Company:
    company = db.get(Company, company_id)
    if not company:
        raise NotFoundError("Company not found")
    return company


def list_jobs(db: Session) -> List[Job]:
    """Every job in catalog (insertion) order."""
    return list(db.execute(select(Job)).scalars())


def get_job(db: Session, job_id: str) -> Job:
    job = db.get(Job, job_id)
    if not job:
        raise NotFoundError("Job not found")
    return job


# ----------------------------
# Enrichment
# ----------------------------
def saved_job_ids(db: Session, user: Optional[User]) -> Set[str]:
    """Job ids the caller has saved; empty for anonymous callers."""
    if user is None:
        return set()
    return set(db.execute(select(SavedJob.job_id).where(SavedJob.user_id == user.id)).scalars())


def to_job_views(jobs: Sequence[Job], companies: Dict[str, Company], saved_ids: Set[str]) -> List[JobView]:
    views = []
    for job in jobs:
        company = companies.get(job.company_id)
        views.append(
            JobView(
                **JobOut.model_validate(job).model_dump(),
                company=CompanyOut.model_validate(company) if company else None,
                is_saved=job.id in saved_ids,
            )
        )
    return views


def job_views(db: Session, jobs: Sequence[Job], user: Optional[User]) -> List[JobView]:
    return to_job_views(jobs, companies_by_id(list_companies(db)), saved_job_ids(db, user))


def company_detail(db: Session, company_id: str, user: Optional[User]) -> CompanyDetail:
    company = get_company(db, company_id)
    saved_ids = saved_job_ids(db, user)
    jobs = db.execute(select(Job).where(Job.company_id == company_id)).scalars()
    return CompanyDetail(
        **CompanyOut.model_validate(company).model_dump(),
        jobs=[
            CompanyJobView(**JobOut.model_validate(job).model_dump(), is_saved=job.id in saved_ids)
            for job in jobs
        ],
    )


def job_snapshot(db: Session, job: Job) -> dict:
    """JSON-safe copy of a job with its company, for denormalized records."""
    company = db.get(Company, job.company_id)
    snapshot = JobOut.model_validate(job).model_dump(mode="json")
    snapshot["company"] = CompanyOut.model_validate(company).model_dump(mode="json") if company else None
    return snapshot


# ----------------------------
# Saved jobs
# ----------------------------
def save_job(db: Session, job_id: str, user: User) -> bool:
    """
    Bookmarks a job for the user. Returns False when the pair was already
    saved, in which case nothing changes.
    """
    get_job(db, job_id)
    existing = db.execute(
        select(SavedJob).where(SavedJob.job_id == job_id, SavedJob.user_id == user.id)
    ).scalar_one_or_none()
    if existing:
        return False

    db.add(SavedJob(user_id=user.id, job_id=job_id, created_at=utcnow()))
    db.commit()
    logger.info(f"User {user.id} saved job {job_id}")
    return True


def unsave_job(db: Session, job_id: str, user: User) -> None:
    saved = db.execute(
        select(SavedJob).where(SavedJob.job_id == job_id, SavedJob.user_id == user.id)
    ).scalar_one_or_none()
    if not saved:
        raise NotFoundError("Job not found in saved jobs")
    db.delete(saved)
    db.commit()
    logger.info(f"User {user.id} removed job {job_id} from saved jobs")


def list_saved_jobs(db: Session, user: User) -> List[JobView]:
    rows = db.execute(
        select(Job)
        .join(SavedJob, SavedJob.job_id == Job.id)
        .where(SavedJob.user_id == user.id)
        .order_by(SavedJob.created_at.asc())
    ).scalars().all()
    return job_views(db, rows, user)
