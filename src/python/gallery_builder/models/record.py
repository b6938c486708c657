"""
PhotoRecord and ExifSummary models.

A PhotoRecord is one entry of the gallery manifest: everything the
presentation layer needs to show a single photo. Records are built once per
run by the assembler and serialized straight to JSON via ``to_dict()``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

UNKNOWN_CAMERA = "Unknown Camera"
UNKNOWN_LENS = "Unknown Lens"


@dataclass
class ExifSummary:
    """
    Display-ready camera settings for a photo.

    Attributes:
        camera: Camera model (falls back to make, then a placeholder)
        lens: Lens model/name/specification, or a placeholder
        iso: ISO speed, empty string if unknown
        aperture: Aperture as ``f/<value>``, empty string if unknown
        shutter: Exposure time, ``1/<n>`` for sub-second values
    """
    camera: str = UNKNOWN_CAMERA
    lens: str = UNKNOWN_LENS
    iso: str = ""
    aperture: str = ""
    shutter: str = ""

    def to_dict(self) -> Dict[str, str]:
        """Convert to the manifest's ``exif`` object."""
        return {
            "camera": self.camera,
            "lens": self.lens,
            "iso": self.iso,
            "aperture": self.aperture,
            "shutter": self.shutter,
        }


@dataclass
class PhotoRecord:
    """
    One photo in the gallery manifest.

    Attributes:
        id: Sequential identifier, starting at 1 in traversal order
        src: Web path of the original (e.g. "/photos/Travel/paris.jpg")
        thumbnail: Web path of the preview (e.g. "/thumbnails/Travel/paris.webp")
        title: Human-readable title derived from the filename
        width: Pixel width of the (possibly rewritten) original, 0 if unknown
        height: Pixel height of the (possibly rewritten) original, 0 if unknown
        category: Capitalized top-level directory name, or "General"
        exif: Camera settings summary
    """
    id: int
    src: str
    thumbnail: str
    title: str
    width: int = 0
    height: int = 0
    category: str = "General"
    exif: ExifSummary = field(default_factory=ExifSummary)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary in manifest key order."""
        return {
            "id": self.id,
            "src": self.src,
            "thumbnail": self.thumbnail,
            "title": self.title,
            "width": self.width,
            "height": self.height,
            "category": self.category,
            "exif": self.exif.to_dict(),
        }
