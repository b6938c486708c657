"""Data models for gallery-builder."""

from gallery_builder.models.enums import SourceFormat
from gallery_builder.models.record import (
    UNKNOWN_CAMERA,
    UNKNOWN_LENS,
    ExifSummary,
    PhotoRecord,
)

__all__ = [
    "ExifSummary",
    "PhotoRecord",
    "SourceFormat",
    "UNKNOWN_CAMERA",
    "UNKNOWN_LENS",
]
