# awesome-referrals/backend/referrals/main.py

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings, setup_logging
from .db.seed import init_db
from .db.session import engine
from .errors import register_exception_handlers
from .routers import auth, companies, conversations, health, jobs, notifications, referrals, users

setup_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Awesome Referrals API",
    description="Job seekers browse postings and request referrals from employees at target companies.",
    version=settings.APP_VERSION,
)

# --- CORS Middleware Configuration ---
origins = [
    settings.FRONTEND_BASE_URL,
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)

# --- API Routers ---
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(jobs.router)
app.include_router(companies.router)
app.include_router(referrals.router)
app.include_router(conversations.router)
app.include_router(notifications.router)

# The store lives in process memory, so tables and seed data are rebuilt on every start.
init_db(engine, seed=settings.SEED_DEMO_DATA)


if __name__ == "__main__":
    logger.info(f"Server running on port {settings.PORT}")
    uvicorn.run(
        "referrals.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.APP_ENV == "dev",
    )
