from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI

from .settings import Settings
from .logging_config import setup_logging
from .database import create_engine, create_session_factory, init_schema, shutdown_engine
from athar_service import __version__
from athar_service.services.analytics_service import AnalyticsService
from athar_service.services.doa_service import DoaService
from athar_service.services.health_service import HealthService
from athar_service.services.juz_service import JuzService
from athar_service.services.quran_repository import QuranRepository
from athar_service.services.surah_service import SurahService

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = getattr(app.state, "settings", None) or Settings()
    setup_logging(settings)
    app.state.settings = settings

    # Database
    app.state.db_engine = create_engine(settings.DATABASE_URL)
    app.state.db_session_factory = create_session_factory(app.state.db_engine)
    await init_schema(app.state.db_engine)
    logger.info("Database schema ready.")

    repository = QuranRepository(app.state.db_session_factory)
    app.state.surah_service = SurahService(repository)
    app.state.juz_service = JuzService(repository)
    app.state.doa_service = DoaService(app.state.db_session_factory)
    app.state.analytics_service = AnalyticsService(app.state.db_session_factory)
    app.state.health_service = HealthService(app.state.db_engine, __version__)

    logger.info(
        f"Athar API ready under {settings.API_PREFIX} "
        f"(environment={settings.ENVIRONMENT}, analytics={settings.ANALYTICS_ENABLED})"
    )

    try:
        yield
    finally:
        logger.info("Shutting down Athar API.")
        await app.state.analytics_service.drain()
        await shutdown_engine(app.state.db_engine)
