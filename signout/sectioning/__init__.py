"""Segmentation of census documents into patient sections, and section edits."""

from signout.sectioning.segmenter import (
    Section,
    parse_sections,
    patient_sections,
    reconstruct,
    section_key,
)

__all__ = ["Section", "parse_sections", "patient_sections", "reconstruct", "section_key"]
