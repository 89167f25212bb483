"""Phonebook API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - The person store is constructed outside the app and injected via create_app;
      the lifespan owns its connect/close
    - Global error handlers map StorageError kinds → {"error": ...} responses
    - Unmatched routes answer 404 {"error": "unknown endpoint"}

Design Decisions:
    - Application factory so tests build an app around their own store
    - Module-level `app` for `uvicorn phonebook.main:app`, built from environment settings
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from phonebook.api.error_handlers import register_error_handlers
from phonebook.api.middleware import register_middleware
from phonebook.api.routes import health, info, persons
from phonebook.config import Settings, get_settings
from phonebook.infrastructure.observability import setup_logging
from phonebook.infrastructure.person_store import PersonStore

logger = logging.getLogger(__name__)


def build_person_store(settings: Settings) -> PersonStore:
    return PersonStore(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        create_schema=settings.database_create_schema,
    )


def create_app(
    store: PersonStore | None = None, settings: Settings | None = None,
) -> FastAPI:
    """Build the API around an explicitly constructed person store."""
    settings = settings or get_settings()
    store = store or build_person_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        await store.connect()
        logger.info(f"Phonebook API started on port {settings.port}")
        yield
        logger.info("Phonebook API shutting down")
        await store.close()

    app = FastAPI(title="Phonebook API", version="1.0.0", lifespan=lifespan)
    app.state.person_store = store

    register_middleware(app, settings.cors_origins)

    # Routes — explicit registration
    app.include_router(info.router)
    app.include_router(persons.router)
    app.include_router(health.router)

    register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the module-level app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
