from __future__ import annotations

from argparse import ArgumentParser
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable

import httpx

from athar_service.core.database import (
    create_engine,
    create_session_factory,
    init_schema,
    shutdown_engine,
)
from athar_service.core.logging_config import setup_logging
from athar_service.core.settings import Settings
from athar_service.services.importer import ContentImporter, ImportReport, create_importer


def base_parser(description: str, default_delay_ms: int) -> ArgumentParser:
    parser = ArgumentParser(description=description)
    parser.add_argument(
        "--delay-ms",
        type=int,
        default=default_delay_ms,
        help=f"Pause between upstream requests (default {default_delay_ms}ms)",
    )
    return parser


@asynccontextmanager
async def open_importer(delay_ms: int) -> AsyncIterator[ContentImporter]:
    """Yield an importer wired to the configured database and equran.id."""
    settings = Settings()
    setup_logging(settings)

    engine = create_engine(settings.DATABASE_URL)
    try:
        await init_schema(engine)
        async with httpx.AsyncClient(timeout=settings.IMPORT_TIMEOUT_SEC) as http_client:
            yield create_importer(
                http_client,
                create_session_factory(engine),
                base_url=settings.EQURAN_API_URL,
                delay_ms=delay_ms,
            )
    finally:
        await shutdown_engine(engine)


def print_reports(reports: Iterable[ImportReport]) -> int:
    """Print each report; return a non-zero exit code when anything failed."""
    failed = False
    for report in reports:
        print(report.summary())
        for error in report.errors[:20]:
            print(f"   - {error}")
        if len(report.errors) > 20:
            print(f"   ... and {len(report.errors) - 20} more")
        failed = failed or bool(report.errors)
    return 1 if failed else 0
