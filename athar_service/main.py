from typing import Optional

from fastapi import FastAPI

from athar_service import __version__
from athar_service.core.startup import lifespan
from athar_service.core.middleware import analytics_middleware, logging_middleware
from athar_service.core.exceptions import setup_exception_handlers
from athar_service.core.settings import Settings
from athar_service.models.common import ErrorResponse

from athar_service.api import analytics, doa, health, juz, surah

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    docs_enabled = settings.is_development

    app = FastAPI(
        title="Athar API",
        description="Read-only API for Quran surahs, verses, tafsir, juz and doa.",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.state.settings = settings

    # Registered last runs first: logging wraps analytics.
    app.middleware("http")(analytics_middleware)
    app.middleware("http")(logging_middleware)

    setup_exception_handlers(app)

    prefix = settings.API_PREFIX.rstrip("/")
    app.include_router(health.router, prefix=prefix, tags=["health"])
    app.include_router(surah.router, prefix=prefix, tags=["surah"], responses=ERROR_RESPONSES)
    app.include_router(juz.router, prefix=prefix, tags=["juz"], responses=ERROR_RESPONSES)
    app.include_router(doa.router, prefix=prefix, tags=["doa"], responses=ERROR_RESPONSES)
    app.include_router(analytics.router, prefix=f"{prefix}/analytics", tags=["analytics"], responses=ERROR_RESPONSES)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.PORT)
