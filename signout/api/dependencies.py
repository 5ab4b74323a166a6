"""Shared FastAPI dependencies for the census routes."""

from __future__ import annotations

from fastapi import Depends, HTTPException

from config.settings import ApiSettings, get_api_settings
from observability.logging_config import get_logger
from signout.api.schemas import CensusRequest

logger = get_logger("api_dependencies")


def check_document_size(content: str, settings: ApiSettings) -> None:
    """Raise 413 when *content* is above ``max_document_chars``."""

    size = len(content)
    if size > settings.max_document_chars:
        logger.warning(
            "Rejected oversized census",
            extra={"chars": size, "limit": settings.max_document_chars},
        )
        raise HTTPException(
            status_code=413,
            detail=f"Census is {size} characters; the limit is {settings.max_document_chars}.",
        )


def enforce_document_size(
    payload: CensusRequest,
    settings: ApiSettings = Depends(get_api_settings),
) -> CensusRequest:
    check_document_size(payload.content, settings)
    return payload


__all__ = ["check_document_size", "enforce_document_size"]
