"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI

from referent.api.routes import router


def create_app() -> FastAPI:
    app = FastAPI(title="Referent", description="Article extraction and AI transformation API")
    app.include_router(router, prefix="/api")
    return app


app = create_app()
