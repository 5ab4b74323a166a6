"""Census route handlers: segmentation, records, stats and section edits."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from config.settings import ApiSettings, ExtractionSettings, get_api_settings, get_extraction_settings
from observability.logging_config import get_logger
from observability.metrics import get_metrics_client
from observability.timing import timed
from signout.api.dependencies import check_document_size, enforce_document_size
from signout.api.schemas import (
    CensusRequest,
    CleanResponse,
    DeletedSectionModel,
    DeleteSectionResponse,
    DocumentResponse,
    SectionsResponse,
    SectionUpdateRequest,
)
from signout.common.exceptions import SectionNotFound, TaskLineError
from signout.reporting.records import (
    compute_census_stats,
    dashboard_census,
    idr_census,
    summarize_census,
)
from signout.sectioning.editor import delete_section, toggle_section_task, update_section
from signout.sectioning.segmenter import Section, parse_sections
from signout.text_cleaning.emr_cleaner import clean_text_for_emr
from signout_schemas.census import (
    CensusStats,
    DashboardRecord,
    IDRRecord,
    PatientSummary,
    SectionView,
)

router = APIRouter(prefix="/v1/census", tags=["census"])
logger = get_logger("census_api")

_census_dep = Depends(enforce_document_size)
_extraction_settings_dep = Depends(get_extraction_settings)
_api_settings_dep = Depends(get_api_settings)


def _parse(content: str) -> list[Section]:
    with timed("census.parse", tags={"surface": "api"}) as timing:
        sections = parse_sections(content)
    get_metrics_client().observe("census.sections", len(sections), {"surface": "api"})
    logger.info(
        "Parsed census",
        extra={"sections": len(sections), "elapsed_ms": round(timing.elapsed_ms, 2)},
    )
    return sections


def _not_found(exc: SectionNotFound) -> HTTPException:
    logger.info("Section not found", extra={"key": exc.key})
    return HTTPException(status_code=404, detail=str(exc))


@router.post("/sections", response_model=SectionsResponse)
def list_sections(payload: CensusRequest = _census_dep) -> SectionsResponse:
    sections = _parse(payload.content)
    return SectionsResponse(sections=[SectionView.from_section(s) for s in sections])


@router.post("/summary", response_model=list[PatientSummary])
def census_summary(
    payload: CensusRequest = _census_dep,
    settings: ExtractionSettings = _extraction_settings_dep,
) -> list[PatientSummary]:
    return summarize_census(_parse(payload.content), settings)


@router.post("/idr", response_model=list[IDRRecord])
def census_idr(
    payload: CensusRequest = _census_dep,
    settings: ExtractionSettings = _extraction_settings_dep,
) -> list[IDRRecord]:
    return idr_census(_parse(payload.content), settings)


@router.post("/dashboard", response_model=list[DashboardRecord])
def census_dashboard(
    payload: CensusRequest = _census_dep,
    settings: ExtractionSettings = _extraction_settings_dep,
) -> list[DashboardRecord]:
    return dashboard_census(_parse(payload.content), settings)


@router.post("/stats", response_model=CensusStats)
def census_stats(
    payload: CensusRequest = _census_dep,
    settings: ExtractionSettings = _extraction_settings_dep,
) -> CensusStats:
    return compute_census_stats(summarize_census(_parse(payload.content), settings))


@router.post("/clean", response_model=CleanResponse)
def clean_census(payload: CensusRequest = _census_dep) -> CleanResponse:
    return CleanResponse(text=clean_text_for_emr(payload.content))


@router.post("/sections/{key}", response_model=DocumentResponse)
def update_census_section(
    key: str,
    payload: SectionUpdateRequest,
    settings: ApiSettings = _api_settings_dep,
) -> DocumentResponse:
    check_document_size(payload.content, settings)
    try:
        content = update_section(payload.content, key, payload.new_text)
    except SectionNotFound as exc:
        raise _not_found(exc) from exc
    return DocumentResponse(content=content)


@router.delete("/sections/{key}", response_model=DeleteSectionResponse)
def delete_census_section(key: str, payload: CensusRequest = _census_dep) -> DeleteSectionResponse:
    try:
        content, deleted = delete_section(payload.content, key)
    except SectionNotFound as exc:
        raise _not_found(exc) from exc
    return DeleteSectionResponse(
        content=content,
        deleted=DeletedSectionModel(index=deleted.index, header=deleted.header, lines=deleted.lines),
    )


@router.post("/sections/{key}/tasks/{line_index}/toggle", response_model=DocumentResponse)
def toggle_census_task(
    key: str,
    line_index: int,
    payload: CensusRequest = _census_dep,
) -> DocumentResponse:
    try:
        content = toggle_section_task(payload.content, key, line_index)
    except SectionNotFound as exc:
        raise _not_found(exc) from exc
    except TaskLineError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return DocumentResponse(content=content)


__all__ = ["router"]
