"""
Job catalog query engine.

Stateless functions that turn query-string parameters and an in-memory list
of jobs into a filtered, sorted and paginated page. Filters are AND-combined.
Text matches are case-insensitive substring tests unless noted otherwise.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, TypeVar

from ..errors import ValidationError
from ..models import Company, Job
from ..models._common import utcnow

T = TypeVar("T")

# Scalar job fields that can be used as sort keys on /api/jobs
SORTABLE_FIELDS = {
    "id",
    "title",
    "location",
    "job_type",
    "experience_level",
    "salary_min",
    "salary_max",
    "company_id",
    "is_remote",
    "created_at",
}


def parse_csv(value: Optional[str]) -> List[str]:
    """'a, b,,c' -> ['a', 'b', 'c']"""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_remote(value: Optional[str]) -> Optional[bool]:
    """Only the literal strings 'true' and 'false' filter; anything else is ignored."""
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def _contains(haystack: Optional[str], needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def _has_any_skill(job: Job, wanted: Iterable[str]) -> bool:
    wanted_lower = {s.lower() for s in wanted}
    return any(skill.lower() in wanted_lower for skill in job.skills or [])


@dataclass
class JobFilters:
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    remote: Optional[str] = None
    job_type: Optional[str] = None
    experience_level: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    skills: Optional[str] = None


@dataclass
class SearchFilters:
    query: Optional[str] = None
    location: Optional[str] = None
    remote: Optional[str] = None
    company_ids: Optional[str] = None
    job_types: Optional[str] = None
    experience_levels: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    skills: Optional[str] = None
    posted_within: Optional[int] = None


def _apply_common(
    jobs: List[Job],
    location: Optional[str],
    remote: Optional[str],
    salary_min: Optional[int],
    salary_max: Optional[int],
    skills: Optional[str],
) -> List[Job]:
    if location:
        jobs = [job for job in jobs if _contains(job.location, location)]

    is_remote = parse_remote(remote)
    if is_remote is not None:
        jobs = [job for job in jobs if bool(job.is_remote) is is_remote]

    # "Fits within" semantics: the posting's own range must sit inside the
    # requested bounds, it is not an overlap test.
    if salary_min is not None:
        jobs = [job for job in jobs if job.salary_min >= salary_min]
    if salary_max is not None:
        jobs = [job for job in jobs if job.salary_max <= salary_max]

    wanted_skills = parse_csv(skills)
    if wanted_skills:
        jobs = [job for job in jobs if _has_any_skill(job, wanted_skills)]

    return jobs


def filter_jobs(jobs: Sequence[Job], filters: JobFilters, companies: Sequence[Company]) -> List[Job]:
    """Applies the /api/jobs filters."""
    result = list(jobs)

    if filters.title:
        result = [job for job in result if _contains(job.title, filters.title)]

    if filters.company:
        company_ids = {c.id for c in companies if _contains(c.name, filters.company)}
        result = [job for job in result if job.company_id in company_ids]

    if filters.job_type:
        result = [job for job in result if job.job_type == filters.job_type]

    if filters.experience_level:
        result = [job for job in result if job.experience_level == filters.experience_level]

    return _apply_common(
        result,
        location=filters.location,
        remote=filters.remote,
        salary_min=filters.salary_min,
        salary_max=filters.salary_max,
        skills=filters.skills,
    )


def _descending(sort_dir: Optional[str]) -> bool:
    direction = (sort_dir or "DESC").upper()
    if direction not in ("ASC", "DESC"):
        raise ValidationError("sort_dir must be either ASC or DESC")
    return direction == "DESC"


def sort_jobs(jobs: Sequence[Job], sort_by: str = "id", sort_dir: str = "DESC") -> List[Job]:
    """
    Orders jobs by a single field with plain < / > comparison. Strings compare
    lexicographically (seed ids are strings), numbers numerically. There is
    no secondary key.
    """
    if sort_by not in SORTABLE_FIELDS:
        raise ValidationError(f"Cannot sort by '{sort_by}'. Allowed fields: {', '.join(sorted(SORTABLE_FIELDS))}")
    return sorted(jobs, key=lambda job: getattr(job, sort_by), reverse=_descending(sort_dir))


def search_jobs(jobs: Sequence[Job], filters: SearchFilters, now: Optional[datetime] = None) -> List[Job]:
    """Applies the /api/jobs/search filters."""
    result = list(jobs)

    if filters.query:
        q = filters.query
        result = [
            job for job in result
            if _contains(job.title, q) or _contains(job.description, q) or _contains(job.requirements, q)
        ]

    company_ids = parse_csv(filters.company_ids)
    if company_ids:
        result = [job for job in result if job.company_id in company_ids]

    job_types = parse_csv(filters.job_types)
    if job_types:
        result = [job for job in result if job.job_type in job_types]

    levels = parse_csv(filters.experience_levels)
    if levels:
        result = [job for job in result if job.experience_level in levels]

    if filters.posted_within is not None:
        cutoff = (now or utcnow()) - timedelta(days=filters.posted_within)
        result = [job for job in result if job.created_at >= cutoff]

    return _apply_common(
        result,
        location=filters.location,
        remote=filters.remote,
        salary_min=filters.salary_min,
        salary_max=filters.salary_max,
        skills=filters.skills,
    )


def sort_search_results(
    jobs: Sequence[Job],
    sort_by: str = "relevance",
    sort_dir: str = "DESC",
    query: Optional[str] = None,
) -> List[Job]:
    """
    'relevance' with a query is a two-bucket partition: jobs whose title
    contains the query come first, everything else after, each bucket keeping
    catalog order. It is not a scored ranking.
    """
    if sort_by == "relevance" and query:
        return sorted(jobs, key=lambda job: not _contains(job.title, query))
    if sort_by == "date":
        return sorted(jobs, key=lambda job: job.created_at, reverse=_descending(sort_dir))
    if sort_by == "salary":
        return sorted(jobs, key=lambda job: job.salary_max, reverse=_descending(sort_dir))
    return list(jobs)


@dataclass
class Page:
    items: List = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10


def paginate(items: Sequence[T], page: int = 1, limit: int = 10) -> Page:
    """1-based page of `limit` items; `total` is the count before slicing."""
    if page < 1:
        raise ValidationError("page must be greater than or equal to 1")
    if limit < 1:
        raise ValidationError("limit must be greater than or equal to 1")
    start = (page - 1) * limit
    return Page(items=list(items[start:start + limit]), total=len(items), page=page, limit=limit)


def companies_by_id(companies: Iterable[Company]) -> Dict[str, Company]:
    return {c.id: c for c in companies}
