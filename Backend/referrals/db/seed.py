# backend/referrals/db/seed.py

import logging
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .base import Base
from ..models import Company, Job, User, UserType
from ..models._common import utcnow
from ..security.passwords import get_password_hash

logger = logging.getLogger(__name__)

COMPANIES = [
    {
        "id": "1",
        "name": "Google",
        "logo_url": "https://upload.wikimedia.org/wikipedia/commons/thumb/5/53/Google_%22G%22_Logo.svg/1200px-Google_%22G%22_Logo.svg.png",
        "website": "https://google.com",
        "industry": "Technology",
        "location": "Mountain View, CA",
        "description": "A multinational technology company specializing in Internet-related services and products.",
    },
    {
        "id": "2",
        "name": "Microsoft",
        "logo_url": "https://upload.wikimedia.org/wikipedia/commons/thumb/4/44/Microsoft_logo.svg/1200px-Microsoft_logo.svg.png",
        "website": "https://microsoft.com",
        "industry": "Technology",
        "location": "Redmond, WA",
        "description": "A multinational technology company that develops, manufactures, licenses, supports, and sells computer software, consumer electronics, personal computers, and related services.",
    },
    {
        "id": "3",
        "name": "Amazon",
        "logo_url": "https://upload.wikimedia.org/wikipedia/commons/thumb/a/a9/Amazon_logo.svg/1200px-Amazon_logo.svg.png",
        "website": "https://amazon.com",
        "industry": "Technology",
        "location": "Seattle, WA",
        "description": "An American multinational technology company which focuses on e-commerce, cloud computing, digital streaming, and artificial intelligence.",
    },
]

JOBS = [
    {
        "id": "1",
        "title": "Software Engineer",
        "description": "We are looking for a Software Engineer to join our team.",
        "requirements": "Bachelor's degree in Computer Science or related field. 3+ years of experience in software development.",
        "location": "Mountain View, CA",
        "job_type": "full-time",
        "experience_level": "mid",
        "salary_min": 120000,
        "salary_max": 180000,
        "application_url": "https://google.com/careers",
        "company_id": "1",
        "is_remote": False,
        "skills": ["JavaScript", "React", "Node.js"],
    },
    {
        "id": "2",
        "title": "Product Manager",
        "description": "We are looking for a Product Manager to join our team.",
        "requirements": "Bachelor's degree in Computer Science or related field. 5+ years of experience in product management.",
        "location": "Seattle, WA",
        "job_type": "full-time",
        "experience_level": "senior",
        "salary_min": 140000,
        "salary_max": 200000,
        "application_url": "https://microsoft.com/careers",
        "company_id": "2",
        "is_remote": False,
        "skills": ["Product Management", "Agile", "Scrum"],
    },
    {
        "id": "3",
        "title": "Frontend Developer",
        "description": "We are looking for a Frontend Developer to join our team.",
        "requirements": "Bachelor's degree in Computer Science or related field. 2+ years of experience in frontend development.",
        "location": "Remote",
        "job_type": "full-time",
        "experience_level": "entry",
        "salary_min": 100000,
        "salary_max": 150000,
        "application_url": "https://amazon.com/careers",
        "company_id": "3",
        "is_remote": True,
        "skills": ["JavaScript", "React", "CSS", "HTML"],
    },
    {
        "id": "4",
        "title": "Backend Developer",
        "description": "We are looking for a Backend Developer to join our team.",
        "requirements": "Bachelor's degree in Computer Science or related field. 3+ years of experience in backend development.",
        "location": "Remote",
        "job_type": "full-time",
        "experience_level": "mid",
        "salary_min": 110000,
        "salary_max": 170000,
        "application_url": "https://amazon.com/careers",
        "company_id": "3",
        "is_remote": True,
        "skills": ["Java", "Spring", "AWS", "Microservices"],
    },
    {
        "id": "5",
        "title": "Data Scientist",
        "description": "We are looking for a Data Scientist to join our team.",
        "requirements": "Master's or PhD in Computer Science, Statistics, or related field. 3+ years of experience in data science.",
        "location": "Mountain View, CA",
        "job_type": "full-time",
        "experience_level": "senior",
        "salary_min": 150000,
        "salary_max": 220000,
        "application_url": "https://google.com/careers",
        "company_id": "1",
        "is_remote": False,
        "skills": ["Python", "Machine Learning", "TensorFlow", "Data Analysis"],
    },
]

DEMO_USERS = [
    {
        "id": "1",
        "email": "user@example.com",
        "password": "password",
        "first_name": "Test",
        "last_name": "User",
        "user_type": UserType.JOB_SEEKER.value,
    },
    {
        "id": "2",
        "email": "referrer@example.com",
        "password": "password",
        "first_name": "Riley",
        "last_name": "Referrer",
        "user_type": UserType.REFERRER.value,
        "company_id": "1",
        "current_position": "Staff Engineer",
    },
]


def seed_catalog(db: Session) -> None:
    """
    Loads the static companies and jobs. Job n is posted (5 - n) days before
    now, so posting-date order matches id order.
    """
    if db.execute(select(Company.id).limit(1)).first() is not None:
        return

    now = utcnow()
    for data in COMPANIES:
        db.add(Company(**data))
    for data in JOBS:
        posted_days_ago = len(JOBS) - int(data["id"])
        db.add(Job(**data, created_at=now - timedelta(days=posted_days_ago)))
    db.flush()
    logger.info(f"Seeded {len(COMPANIES)} companies and {len(JOBS)} jobs")


def seed_demo_users(db: Session) -> None:
    for data in DEMO_USERS:
        if db.execute(select(User.id).where(User.email == data["email"])).first() is not None:
            continue
        fields = dict(data)
        password = fields.pop("password")
        db.add(User(**fields, password_hash=get_password_hash(password)))
    db.flush()


def init_db(engine: Engine, seed: bool = True) -> None:
    """Creates every table and, optionally, loads the seed data."""
    Base.metadata.create_all(bind=engine)
    if not seed:
        return
    with Session(engine) as db:
        seed_catalog(db)
        seed_demo_users(db)
        db.commit()
