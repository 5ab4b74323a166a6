"""Request and response models for the census HTTP API."""

from signout.api.schemas.census import (
    CensusRequest,
    CleanResponse,
    DeletedSectionModel,
    DeleteSectionResponse,
    DocumentResponse,
    SectionsResponse,
    SectionUpdateRequest,
)

__all__ = [
    "CensusRequest",
    "CleanResponse",
    "DeletedSectionModel",
    "DeleteSectionResponse",
    "DocumentResponse",
    "SectionUpdateRequest",
    "SectionsResponse",
]
