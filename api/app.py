"""Main FastAPI application with modularized routes."""
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import config
from api.routes import markdown, questions, sync, tags
from core.logging_setup import setup_console_logging
from storage import DirectoryStorage
from sync_queue import SyncQueue


def create_app(
    questions_dir: Path | None = None,
    debounce_ms: int | None = None,
) -> FastAPI:
    """Build the app around one library directory and its sync queue."""
    setup_console_logging(config.LOG_LEVEL)

    app = FastAPI(title="Question Markdown API")

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    storage = DirectoryStorage(questions_dir or config.QUESTIONS_DIR)
    app.state.storage = storage
    app.state.default_language = config.DEFAULT_CODE_LANGUAGE
    app.state.sync_queue = SyncQueue(
        storage,
        debounce_seconds=(
            debounce_ms if debounce_ms is not None else config.SYNC_DEBOUNCE_MS
        ) / 1000,
        max_workers=config.SYNC_MAX_WORKERS,
        enable_code_formatting=config.ENABLE_CODE_FORMATTING,
        default_language=config.DEFAULT_CODE_LANGUAGE,
    )

    # Shutdown events
    @app.on_event("shutdown")
    def shutdown_events() -> None:
        """Write out queued edits before the process exits."""
        app.state.sync_queue.shutdown()

    # Include routers
    app.include_router(markdown.router)
    app.include_router(questions.router)
    app.include_router(sync.router)
    app.include_router(tags.router)
    return app


app = create_app()
