import logging
import os
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from abtech import __version__
from abtech.adapters.sqlite.migrator import SQLiteMigrator
from abtech.api.deps import get_rules, get_settings
from abtech.api.middleware import admin_guard
from abtech.core.errors import AppError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules on startup (fail-fast)
    try:
        get_rules()
        logger.info("Rules loaded from %s", settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)

    os.makedirs(settings.data_dir, exist_ok=True)
    applied = SQLiteMigrator(settings.db_path, settings.migrations_dir).run_migrations()
    if applied:
        logger.info("Applied migrations: %s", ", ".join(applied))

    yield


app = FastAPI(
    title="AB TECH API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(exc.to_body(), status_code=exc.status_code)


# --- Routers ---
from abtech.api.routes import (  # noqa: E402
    admin_courses,
    admin_faqs,
    admin_jobs,
    admin_sections,
    admin_stats,
    articles,
    courses,
    dev_proxy,
    jobs,
    media,
    newsletter,
    public_sections,
    tags,
)

app.include_router(newsletter.router, prefix="/api/newsletter", tags=["Newsletter"])
app.include_router(tags.router, prefix="/api/tags", tags=["Tags"])
app.include_router(courses.router, prefix="/api/courses", tags=["Courses"])
app.include_router(jobs.router, prefix="/api/jobs", tags=["Jobs"])
app.include_router(articles.router, prefix="/api/articles", tags=["Articles"])
app.include_router(public_sections.router, prefix="/api", tags=["Sections"])
app.include_router(admin_stats.router, prefix="/api/admin/stats", tags=["Admin"])
app.include_router(admin_jobs.router, prefix="/api/admin/jobs", tags=["Admin"])
app.include_router(admin_courses.router, prefix="/api/admin/courses", tags=["Admin"])
app.include_router(admin_faqs.pricing_router, prefix="/api/admin/pricing/faqs", tags=["Admin"])
app.include_router(admin_faqs.contact_router, prefix="/api/admin/contact/faqs", tags=["Admin"])
app.include_router(admin_sections.help_router, prefix="/api/admin/help/sections", tags=["Admin"])
app.include_router(
    admin_sections.community_router, prefix="/api/admin/community/sections", tags=["Admin"]
)
app.include_router(media.router, prefix="/api/cloudinary", tags=["Media"])
app.include_router(dev_proxy.router, prefix="/api", tags=["Dev"])


# Admin page guard runs inside CORS
app.middleware("http")(admin_guard)

# CORS (Allow Frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_rules().cors.allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
