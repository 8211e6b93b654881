# In backend/referrals/schemas/job.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class CompanyOut(BaseModel):
    id: str
    name: str
    logo_url: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None

    class Config:
        from_attributes = True


class JobOut(BaseModel):
    id: str
    title: str
    description: str
    requirements: str
    location: str
    job_type: str
    experience_level: str
    salary_min: int
    salary_max: int
    application_url: Optional[str] = None
    company_id: str
    is_remote: bool
    skills: List[str]
    created_at: datetime

    class Config:
        from_attributes = True


class CompanyJobView(JobOut):
    """A job listed under its company, annotated with the caller's save state."""
    is_saved: bool = Field(False, serialization_alias="isSaved")


class JobView(CompanyJobView):
    """A job joined with its company record and the caller's save state."""
    company: Optional[CompanyOut] = None


class CompanyDetail(CompanyOut):
    jobs: List[CompanyJobView] = []
