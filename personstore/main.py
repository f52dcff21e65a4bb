"""Person Store API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PersonStoreError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Document store client and repository created once on startup via lifespan,
      stored on app.state, closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Repository injected through api/dependencies.py, never imported as a global
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from personstore.api.error_handlers import register_error_handlers
from personstore.api.routes import health, people
from personstore.config import get_settings
from personstore.infrastructure.database import DocumentStoreManager
from personstore.infrastructure.observability import setup_logging
from personstore.repositories.person_repository import PersonRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = DocumentStoreManager(
        settings.mongo_uri,
        settings.mongo_database,
        settings.mongo_collection,
        server_selection_timeout_ms=settings.mongo_server_selection_timeout_ms,
    )
    app.state.store = store
    app.state.repository = PersonRepository(store.collection())
    logger.info("Person store API started")
    yield
    logger.info("Person store API shutting down")
    await store.close()


app = FastAPI(
    title="Person Store API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(people.router)

register_error_handlers(app)
