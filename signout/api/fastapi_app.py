"""FastAPI application wiring for the signout census service."""

# ruff: noqa: E402

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def _truthy_env(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes")


# Exported environment variables win over `.env`; tests set SIGNOUT_SKIP_DOTENV=1.
if not _truthy_env("SIGNOUT_SKIP_DOTENV"):
    load_dotenv(dotenv_path=Path(__file__).resolve().parents[2] / ".env", override=False)

from config.settings import get_api_settings, get_logging_settings
from observability.logging_config import configure_logging, get_logger
from signout import __version__
from signout.api.routes.census import router as census_router

logger = get_logger("fastapi_app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    log_settings = get_logging_settings()
    configure_logging(level=log_settings.level, structured=log_settings.structured)
    logger.info("Census API starting", extra={"version": __version__})
    yield
    logger.info("Census API stopped")


def create_app() -> FastAPI:
    settings = get_api_settings()
    application = FastAPI(title=settings.title, version=__version__, lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(census_router)

    @application.get("/health")
    async def health() -> dict[str, bool]:
        return {"ok": True}

    return application


app = create_app()
