"""Pydantic schemas for the census API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from signout_schemas.census import SectionView


class CensusRequest(BaseModel):
    content: str = Field("", description="Full signout census text.")


class SectionUpdateRequest(BaseModel):
    content: str = Field(..., description="Current census text the key was read from.")
    new_text: str = Field(..., description="Replacement section text, header included.")


class SectionsResponse(BaseModel):
    sections: list[SectionView] = Field(default_factory=list)


class DocumentResponse(BaseModel):
    content: str


class DeletedSectionModel(BaseModel):
    """Undo token: the removed section and where it was."""

    index: int
    header: str
    lines: list[str] = Field(default_factory=list)


class DeleteSectionResponse(BaseModel):
    content: str
    deleted: DeletedSectionModel


class CleanResponse(BaseModel):
    text: str
