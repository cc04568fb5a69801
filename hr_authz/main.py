"""
FastAPI application factory.

Assembles the app, registers all routers and exception handlers, and
wires up lifecycle events.  Database schema is managed by Alembic —
NOT create_all.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from hr_authz.controllers.me_controller import router as me_router
from hr_authz.controllers.permission_controller import router as permission_router
from hr_authz.controllers.role_controller import router as role_router
from hr_authz.core.config import settings
from hr_authz.core.database import SessionLocal, engine
from hr_authz.core.exceptions import (
    InvalidPrincipalState,
    PermissionMissing,
    ResourceConflictError,
    ResourceNotFoundError,
)
from hr_authz.models import Base  # noqa: F401 — ensures all models are registered

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PermissionMissing)
    async def permission_missing(request: Request, exc: PermissionMissing):
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": "Insufficient permissions", "permission": exc.permission},
        )

    @app.exception_handler(InvalidPrincipalState)
    async def invalid_principal(request: Request, exc: InvalidPrincipalState):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Invalid principal state"},
        )

    @app.exception_handler(ResourceNotFoundError)
    async def not_found(request: Request, exc: ResourceNotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

    @app.exception_handler(ResourceConflictError)
    async def conflict(request: Request, exc: ResourceConflictError):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── Register routers ─────────────────────────────────────────────
    app.include_router(me_router)
    app.include_router(permission_router)
    app.include_router(role_router)
    register_exception_handlers(app)

    # ── Startup / Shutdown ───────────────────────────────────────────
    @app.on_event("startup")
    async def on_startup() -> None:
        """Seed catalog, system roles & menus on startup.

        NOTE: Database schema is managed by Alembic migrations.
        Run `alembic upgrade head` before starting the app.
        """
        if not settings.SEED_ON_STARTUP:
            return
        from hr_authz.rbac.permission_seed import seed

        async with SessionLocal() as session:
            await seed(session)
        logger.info("Permission seed complete.")

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        await engine.dispose()
        logger.info("Database engine disposed.")

    # ── Health check ─────────────────────────────────────────────────
    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
