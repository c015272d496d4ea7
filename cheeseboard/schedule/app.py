"""
FastAPI application for the pizza schedule.

Run with: uvicorn cheeseboard.schedule.app:app
    or:   python -m cheeseboard.schedule.app
"""
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .router import router
from .settings import get_settings


def create_app() -> FastAPI:
    """Build the app with CORS and the schedule router."""
    app = FastAPI(title="Cheeseboard Pizza Schedule", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8001))
    uvicorn.run("cheeseboard.schedule.app:app", host="127.0.0.1", port=port)
