"""Scanner module for walking the photos tree and reading image facts."""

from gallery_builder.scanner.dimensions import Dimensions, read_dimensions
from gallery_builder.scanner.exif import (
    extract_exif_summary,
    format_aperture,
    format_shutter,
    get_tag,
    read_exif_tags,
)
from gallery_builder.scanner.patterns import (
    DEFAULT_CATEGORY,
    category_from_relative,
    preview_relative_path,
    title_from_filename,
    to_web_path,
)
from gallery_builder.scanner.walker import SourceEntry, walk_source_tree

__all__ = [
    "DEFAULT_CATEGORY",
    "Dimensions",
    "SourceEntry",
    "category_from_relative",
    "extract_exif_summary",
    "format_aperture",
    "format_shutter",
    "get_tag",
    "preview_relative_path",
    "read_dimensions",
    "read_exif_tags",
    "title_from_filename",
    "to_web_path",
    "walk_source_tree",
]
