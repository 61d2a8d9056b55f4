"""
Skill Assessment Engine

Backend for skill assessments on the internship matching platform:
authors publish multiple-choice banks per skill, students receive a random
answer-stripped subset, and scored submissions become per-skill competency
records on the student's profile.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from skillassess.common.logger import app_logger, configure_logger
from skillassess.config import Settings, get_settings

logger = app_logger.getChild("app")


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Acquire storage on startup and release it on shutdown.

        The delivery facade is created here and kept on ``app.state``.
        """
        from skillassess.services import build_delivery_service

        logger.info(f"Application startup with '{settings.STORAGE_BACKEND}' storage")
        if settings.STORAGE_BACKEND == "memory":
            from skillassess.domain.assessments import MemoryAssessmentRepository
            from skillassess.domain.competency import MemoryProfileRepository

            assessments, profiles = MemoryAssessmentRepository(), MemoryProfileRepository()
        else:
            from skillassess.database import (
                SQLAssessmentRepository,
                SQLProfileRepository,
                close_database,
                create_schema,
                get_session_factory,
                initialize_database,
            )

            await initialize_database(
                database_url=settings.DATABASE_URL,
                echo=settings.SQL_ECHO,
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
            )
            if settings.AUTO_CREATE_SCHEMA:
                await create_schema()
            factory = get_session_factory()
            assessments, profiles = SQLAssessmentRepository(factory), SQLProfileRepository(factory)

        app.state.delivery_service = build_delivery_service(settings, assessments, profiles)
        logger.info("Application startup complete")
        try:
            yield
        finally:
            if settings.STORAGE_BACKEND == "sql":
                await close_database()
            logger.info("Application shutdown complete")

    return lifespan


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Settings to use instead of the environment-derived ones

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    configure_logger(
        level=settings.LOG_LEVEL,
        use_json=settings.LOG_JSON,
        log_file=settings.LOG_FILE or None,
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Skill assessment delivery and scoring",
        version="0.1.0",
        lifespan=_build_lifespan(settings),
    )
    app.state.settings = settings

    from fastapi.middleware.cors import CORSMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from skillassess.api import APIResponse, install_exception_handlers, main_router, register_module
    from skillassess.routers import assessments_router

    register_module(name="assessments", router=assessments_router, prefix="/assessments")
    app.include_router(main_router, prefix=settings.API_PREFIX)
    install_exception_handlers(app)

    @app.get("/health")
    async def health():
        return APIResponse.success({"storage": settings.STORAGE_BACKEND}, "ok")

    logger.info(f"Application created with {len(app.routes)} routes")
    return app
