"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers and includes all API routers
under their role-gated prefixes. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from dpf_cms import __version__
from dpf_cms.core.database import async_session_maker, init_db
from dpf_cms.core.logging_config import get_logger, setup_logging
from dpf_cms.core.models.domain.enums import ADMIN_AREA_ROLES, EDITOR_AREA_ROLES, SUPERADMIN_AREA_ROLES
from dpf_cms.core.monitoring import initialize_logfire

from .api.v1 import (
    articles,
    auth,
    banners,
    dashboards,
    donations,
    editor_tasks,
    health,
    my_tasks,
    organization_members,
    partners,
    programs,
    public,
    reports,
    tags,
    task_feed,
    uploads,
    users,
)
from .core import constant
from .core.auth import require_roles
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware
from .services.bootstrap import ensure_superadmin

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Configures logging, ensures the database tables and the storage directory
    exist and provisions the bootstrap superadmin.
    """
    # Startup
    setup_logging()
    logger.info("Starting up DPF CMS Server...")
    Path(settings.storage.root_dir).mkdir(parents=True, exist_ok=True)
    try:
        await init_db()
        async with async_session_maker() as session:
            await ensure_superadmin(session, settings.bootstrap)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down DPF CMS Server...")


def _area(*roles) -> APIRouter:
    return APIRouter(dependencies=[Depends(require_roles(*roles))])


def build_api_router() -> APIRouter:
    """Assemble the ``/api/v1`` routes: public, auth and the three role areas."""
    api = APIRouter()
    api.include_router(public.router, tags=["public"])
    api.include_router(auth.router, prefix="/auth", tags=["auth"])

    # The task feed authenticates itself so the stream can take ?token=.
    # It must precede the editor task routes, which capture /tasks/{task_id}.
    api.include_router(task_feed.router, prefix="/editor/tasks", tags=["editor-tasks"])

    editor = _area(*EDITOR_AREA_ROLES)
    editor.include_router(dashboards.editor_router, prefix="/dashboard", tags=["dashboard"])
    editor.include_router(programs.router, prefix="/programs", tags=["programs"])
    editor.include_router(articles.router, prefix="/articles", tags=["articles"])
    editor.include_router(organization_members.router, prefix="/organization-members", tags=["organization"])
    editor.include_router(partners.router, prefix="/partners", tags=["partners"])
    editor.include_router(banners.router, prefix="/banners", tags=["banners"])
    editor.include_router(tags.router, prefix="/tags", tags=["tags"])
    editor.include_router(uploads.router, prefix="/uploads", tags=["uploads"])
    editor.include_router(my_tasks.router, prefix="/tasks", tags=["editor-tasks"])
    api.include_router(editor, prefix="/editor")

    admin = _area(*ADMIN_AREA_ROLES)
    admin.include_router(dashboards.admin_router, prefix="/dashboard", tags=["dashboard"])
    admin.include_router(programs.router, prefix="/programs", tags=["programs"])
    admin.include_router(programs.admin_router, prefix="/programs", tags=["programs"])
    admin.include_router(articles.router, prefix="/articles", tags=["articles"])
    admin.include_router(articles.admin_router, prefix="/articles", tags=["articles"])
    admin.include_router(organization_members.router, prefix="/organization-members", tags=["organization"])
    admin.include_router(partners.router, prefix="/partners", tags=["partners"])
    admin.include_router(banners.router, prefix="/banners", tags=["banners"])
    admin.include_router(tags.router, prefix="/tags", tags=["tags"])
    admin.include_router(donations.router, prefix="/donations", tags=["donations"])
    admin.include_router(reports.router, prefix="/reports/donations", tags=["reports"])
    admin.include_router(editor_tasks.router, prefix="/editor-tasks", tags=["editor-tasks"])
    api.include_router(admin, prefix="/admin")

    superadmin = _area(*SUPERADMIN_AREA_ROLES)
    superadmin.include_router(dashboards.superadmin_router, prefix="/dashboard", tags=["dashboard"])
    superadmin.include_router(users.router, prefix="/users", tags=["users"])
    superadmin.include_router(reports.router, prefix="/reports/donations", tags=["reports"])
    superadmin.include_router(editor_tasks.router, prefix="/editor-tasks", tags=["editor-tasks"])
    api.include_router(superadmin, prefix="/superadmin")
    return api


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    DPF CMS Server API

    Backend for the foundation's website and backoffice: fundraising programs, donations and
    donation reports, articles, organization structure, partners, banners, tags and editor tasks.
    """,
    version=__version__,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(build_api_router(), prefix=constant.API_V1_STR)
app.mount(
    constant.STORAGE_URL_PATH,
    StaticFiles(directory=settings.storage.root_dir, check_dir=False),
    name="storage",
)


def run() -> None:
    """Console entry point: serve the application with uvicorn."""
    uvicorn.run(
        "dpf_cms.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
