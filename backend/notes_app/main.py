from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from notes_app import config
from notes_app.api import login, notes, users
from notes_app.middleware import register_error_handlers, request_logger, unknown_endpoint
from notes_app.storage.database import Database
from notes_app.utils.logger import configure_logging

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(data_dir: Optional[Path] = None) -> FastAPI:
    configure_logging()

    app = FastAPI(title="Notes API")
    app.state.db = Database.connect(data_dir if data_dir is not None else config.data_dir())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_logger)
    register_error_handlers(app)

    app.include_router(login.router)
    app.include_router(users.router)
    app.include_router(notes.router)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def index():
        return "<h1>Hello World!</h1>"

    @app.get("/health")
    def health():
        return {"ok": True}

    # registered last so every real route matches first
    app.add_api_route("/{path:path}", unknown_endpoint, methods=ALL_METHODS, include_in_schema=False)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = config.port()
    logger.info("Server running on port %s", port)
    uvicorn.run(app, host="0.0.0.0", port=port)
