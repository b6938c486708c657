"""
EXIF metadata extraction for gallery photos.

Tags are parsed from the in-memory image buffer with exifread, which reads
EXIF blocks from JPEG, PNG and WebP containers. Missing or unreadable
metadata is normal for web images, so every failure here resolves to an
empty tag set and placeholder values instead of an error.

Formatting rules:
- Shutter speed: sub-second decimals become ``1/<n>`` (0.004 -> "1/250");
  fractions, long exposures (>= 1s) and 0 pass through unchanged.
- Aperture: prefixed with ``f/`` unless it already starts with "f".
"""

import io
import logging
import math
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

import exifread

from gallery_builder.models.record import UNKNOWN_CAMERA, UNKNOWN_LENS, ExifSummary

logger = logging.getLogger(__name__)

# Logical tag name -> exifread keys, in lookup order
TAG_KEYS: Dict[str, Tuple[str, ...]] = {
    "Make": ("Image Make",),
    "Model": ("Image Model",),
    "LensModel": ("EXIF LensModel",),
    "Lens": ("MakerNote LensModel", "MakerNote Lens", "MakerNote LensType"),
    "LensInfo": ("EXIF LensSpecification",),
    "ISOSpeedRatings": ("EXIF ISOSpeedRatings",),
    "ISO": ("EXIF ISOSpeed", "EXIF RecommendedExposureIndex"),
    "FNumber": ("EXIF FNumber",),
    "ApertureValue": ("EXIF ApertureValue",),
    "ExposureTime": ("EXIF ExposureTime",),
    "ShutterSpeedValue": ("EXIF ShutterSpeedValue",),
}

Number = Union[int, float]


def read_exif_tags(data: bytes) -> Dict[str, Any]:
    """
    Parse embedded tags from an image buffer.

    Args:
        data: Encoded image bytes

    Returns:
        Mapping of exifread tag keys ("Image Model", "EXIF FNumber", ...) to
        tag objects. Empty if the buffer has no readable metadata.
    """
    if not data:
        return {}

    try:
        tags = exifread.process_file(io.BytesIO(data), details=True, extract_thumbnail=False)
    except Exception as e:
        logger.debug("No readable EXIF data: %s", e)
        return {}

    return dict(tags) if tags else {}


def get_tag(tags: Mapping[str, Any], name: str) -> str:
    """
    Look up a logical tag and return a display string.

    The human-readable description is preferred, then the raw value,
    then an empty string.

    Args:
        tags: Tags as returned by ``read_exif_tags``
        name: Logical tag name, a key of ``TAG_KEYS``

    Returns:
        Display string, or "" if the tag is absent or empty
    """
    for key in TAG_KEYS.get(name, (name,)):
        tag = tags.get(key)
        if tag is None:
            continue

        describe = _DESCRIBERS.get(name)
        if describe is not None:
            try:
                description = describe(tag)
            except (ArithmeticError, TypeError, ValueError) as e:
                logger.debug("Could not describe %s: %s", key, e)
                description = None
            if description:
                return description

        description = _clean_string(getattr(tag, "printable", None))
        if description:
            return description

        value = _clean_string(_first_value(tag))
        if value:
            return value

    return ""


def format_shutter(value: Optional[Union[str, Number]]) -> Union[str, Number]:
    """
    Format an exposure time for display.

    Examples:
        >>> format_shutter(0.004)
        '1/250'
        >>> format_shutter("1/250")
        '1/250'
        >>> format_shutter(2)
        2
        >>> format_shutter(None)
        ''
    """
    if value is None or value == "":
        return ""

    if "/" in str(value):
        return value

    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return value

    if seconds >= 1 or seconds <= 0 or math.isnan(seconds):
        return value

    # Round half up
    return f"1/{math.floor(1 / seconds + 0.5)}"


def format_aperture(value: Optional[Union[str, Number]]) -> str:
    """
    Format an aperture for display.

    Examples:
        >>> format_aperture("1.8")
        'f/1.8'
        >>> format_aperture("f/1.8")
        'f/1.8'
    """
    if value is None or value == "":
        return ""

    text = str(value)
    return text if text.lower().startswith("f") else f"f/{text}"


def extract_exif_summary(data: bytes) -> ExifSummary:
    """
    Extract display-ready camera settings from an image buffer.

    Never raises for bad input: an image without metadata yields the
    placeholder camera and lens and empty exposure fields.

    Example:
        >>> summary = extract_exif_summary(Path("IMG_1234.jpg").read_bytes())
        >>> print(summary.camera, summary.aperture, summary.shutter)
    """
    tags = read_exif_tags(data)

    return ExifSummary(
        camera=get_tag(tags, "Model") or get_tag(tags, "Make") or UNKNOWN_CAMERA,
        lens=(
            get_tag(tags, "LensModel")
            or get_tag(tags, "Lens")
            or get_tag(tags, "LensInfo")
            or UNKNOWN_LENS
        ),
        iso=get_tag(tags, "ISOSpeedRatings") or get_tag(tags, "ISO"),
        aperture=format_aperture(get_tag(tags, "FNumber") or get_tag(tags, "ApertureValue")),
        shutter=str(format_shutter(get_tag(tags, "ExposureTime") or get_tag(tags, "ShutterSpeedValue"))),
    )


def _first_value(tag: Any) -> Any:
    values = getattr(tag, "values", None)
    if isinstance(values, (list, tuple)):
        return values[0] if values else None
    return values


def _to_float(value: Any) -> Optional[float]:
    """Convert an exifread Ratio (or plain number) to float."""
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError, ZeroDivisionError):
        pass

    # Older exifread Ratio objects only expose num/den
    num = getattr(value, "num", None)
    den = getattr(value, "den", None)
    if num is None or not den:
        return None
    return num / den


def _format_number(value: float) -> str:
    return f"{value:.1f}".rstrip("0").rstrip(".")


def _describe_fnumber(tag: Any) -> Optional[str]:
    value = _to_float(_first_value(tag))
    if value is None or value <= 0:
        return None
    return _format_number(value)


def _describe_apex_aperture(tag: Any) -> Optional[str]:
    # APEX Av -> f-number
    value = _to_float(_first_value(tag))
    if value is None:
        return None
    return _format_number(2 ** (value / 2))


def _describe_apex_shutter(tag: Any) -> Optional[str]:
    # APEX Tv -> exposure time in seconds
    value = _to_float(_first_value(tag))
    if value is None:
        return None
    seconds = 2 ** (-value)
    return f"{seconds:g}"


def _describe_lens_spec(tag: Any) -> Optional[str]:
    """Describe LensSpecification (min/max focal length, min/max f-number)."""
    values = getattr(tag, "values", None)
    if not isinstance(values, (list, tuple)) or len(values) != 4:
        return None

    min_focal, max_focal, min_f, max_f = (_to_float(v) for v in values)
    if not min_focal:
        return None

    focal = _format_number(min_focal)
    if max_focal and max_focal != min_focal:
        focal = f"{focal}-{_format_number(max_focal)}"
    description = f"{focal}mm"

    if min_f:
        aperture = _format_number(min_f)
        if max_f and max_f != min_f:
            aperture = f"{aperture}-{_format_number(max_f)}"
        description = f"{description} f/{aperture}"

    return description


_DESCRIBERS: Dict[str, Callable[[Any], Optional[str]]] = {
    "FNumber": _describe_fnumber,
    "ApertureValue": _describe_apex_aperture,
    "ShutterSpeedValue": _describe_apex_shutter,
    "LensInfo": _describe_lens_spec,
}


def _clean_string(value: Any) -> Optional[str]:
    """
    Clean and normalize a string value from EXIF.

    Removes trailing nulls and surrounding whitespace.
    """
    if value is None:
        return None

    value = str(value).strip().rstrip("\x00").strip()
    return value or None
