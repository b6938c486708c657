"""
Naming rules that turn source paths into manifest fields.

All functions here are pure: they only look at path strings, never at the
filesystem, so the same source tree always yields the same titles,
categories and preview locations.
"""

import re
from pathlib import PurePath, PurePosixPath
from typing import Union

DEFAULT_CATEGORY = "General"

_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def title_from_filename(filename: str) -> str:
    """
    Build a display title from a filename.

    The last extension is dropped and hyphens become spaces.

    Examples:
        >>> title_from_filename("golden-gate-at-dusk.jpg")
        'golden gate at dusk'
        >>> title_from_filename("IMG_0042.final.png")
        'IMG_0042.final'
    """
    return _EXTENSION_RE.sub("", filename).replace("-", " ")


def category_from_relative(relative_path: Union[str, PurePath]) -> str:
    """
    Derive the category from a path relative to the photos root.

    The first directory segment names the category, with its first letter
    upper-cased. Files directly under the root get the default category.
    Deeper nesting does not change the category.

    Examples:
        >>> category_from_relative("portraits/studio/anna.jpg")
        'Portraits'
        >>> category_from_relative("anna.jpg")
        'General'
    """
    parts = PurePath(relative_path).parts
    if len(parts) < 2:
        return DEFAULT_CATEGORY

    first = parts[0]
    return first[:1].upper() + first[1:]


def preview_relative_path(
    relative_path: Union[str, PurePath],
    preview_extension: str,
    disambiguate: bool = False,
) -> PurePath:
    """
    Compute where the preview of a source file lives, relative to the preview root.

    Same directory and base name as the source, with the preview extension.
    When ``disambiguate`` is set, the source extension is folded into the
    name so two sources with the same stem do not share a preview.

    Examples:
        >>> preview_relative_path("travel/paris.jpg", ".webp").as_posix()
        'travel/paris.webp'
        >>> preview_relative_path("travel/paris.png", ".webp", disambiguate=True).as_posix()
        'travel/paris-png.webp'
    """
    source = PurePath(relative_path)
    stem = source.stem
    if disambiguate:
        stem = f"{stem}-{source.suffix.lstrip('.').lower()}"
    return source.with_name(stem + preview_extension)


def to_web_path(prefix: str, relative_path: Union[str, PurePath]) -> str:
    """
    Join a public URL prefix and a relative path with forward slashes only.

    Examples:
        >>> to_web_path("/photos", "travel/paris.jpg")
        '/photos/travel/paris.jpg'
    """
    # Backslashes come from Windows-style relative paths
    posix = PurePosixPath(str(relative_path).replace("\\", "/")).as_posix()
    return prefix.rstrip("/") + "/" + posix.lstrip("/")
