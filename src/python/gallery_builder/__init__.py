"""
gallery-builder - build-time asset pipeline for photo galleries.

Scans a directory tree of photographs, normalizes oversized or rotated
originals, renders lightweight previews, extracts camera metadata and
writes a single JSON manifest describing the gallery.

Core Concepts:
- Original: a source photo, rewritten in place only when it needs rotation
  or downscaling
- Preview: a fixed-width, metadata-free rendition in the preview tree
- Manifest: the ordered list of PhotoRecords consumed by the site

Usage:
    from pathlib import Path
    from gallery_builder import GalleryAssembler, load_config

    result = GalleryAssembler(load_config(), base_dir=Path(".")).build()
    print(f"Built gallery with {result.photos} photos")
"""

from gallery_builder.__version__ import __version__
from gallery_builder.assembler import BuildResult, GalleryAssembler, records_to_dataframe
from gallery_builder.config import Config, OriginalConfig, PathsConfig, PreviewConfig, load_config
from gallery_builder.models import ExifSummary, PhotoRecord, SourceFormat
from gallery_builder.scanner import (
    extract_exif_summary,
    format_aperture,
    format_shutter,
    read_dimensions,
    walk_source_tree,
)
from gallery_builder.transcode import ImageTranscoder, PreviewStatus

__all__ = [
    "__version__",
    # Assembly
    "BuildResult",
    "GalleryAssembler",
    "records_to_dataframe",
    # Config
    "Config",
    "OriginalConfig",
    "PathsConfig",
    "PreviewConfig",
    "load_config",
    # Models
    "ExifSummary",
    "PhotoRecord",
    "SourceFormat",
    # Scanner
    "extract_exif_summary",
    "format_aperture",
    "format_shutter",
    "read_dimensions",
    "walk_source_tree",
    # Transcoding
    "ImageTranscoder",
    "PreviewStatus",
]
