# app/main.py

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.error_handlers import install_exception_handlers
from app.api.routes.api import api_router
from app.core.config import Settings, get_settings
from app.db.init_db import init_db
from app.db.session import build_engine, build_session_factory
from app.services.geocoding import GeocodingClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.PROJECT_NAME} {settings.VERSION}")
    init_db(app.state.engine)

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}")
    app.state.geocoder.close()
    app.state.engine.dispose()


def create_application(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # ---------- SHARED STATE ----------
    # built once, read by the dependencies in app/api/deps.py
    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.geocoder = GeocodingClient.from_settings(settings)

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=[
            "Origin",
            "X-Requested-With",
            "Content-Type",
            "Accept",
            "Authorization",
        ],
    )

    # ---------- ERRORS ----------
    install_exception_handlers(app)

    # ---------- STATIC FILES ----------
    # uploaded place / user images
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads/images", StaticFiles(directory=upload_dir), name="uploads")

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix="/api")

    @app.get("/healthz", tags=["health"])
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_application()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.PORT)
