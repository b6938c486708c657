"""Original normalization and preview generation.

Originals are rewritten in place only when they need it: a non-default
EXIF orientation, or a side longer than ``original.max_dimension``. Every
other original is left byte-for-byte alone, so repeated runs never
recompress the same photo twice.

Previews are fixed-width, metadata-free renditions written to the preview
tree. An existing preview is reused unless its original was rewritten in
the same run.
"""

import io
import logging
import os
from enum import Enum
from pathlib import Path
from typing import NamedTuple, Optional

from PIL import Image, ImageOps

from gallery_builder.config import OriginalConfig, PreviewConfig
from gallery_builder.models.enums import SourceFormat

logger = logging.getLogger(__name__)

ORIENTATION_TAG = 0x0112
DEFAULT_ORIENTATION = 1


class PreviewStatus(Enum):
    """Outcome of a preview generation attempt."""
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


class OptimizeResult(NamedTuple):
    """Bytes to use downstream, and whether the original was rewritten."""
    data: bytes
    updated: bool
    failed: bool = False


class ImageTranscoder:
    """Rewrites oversized or rotated originals and renders previews.

    Args:
        original: Settings for in-place rewrites of originals.
        preview: Settings for preview renditions.
        dry_run: Decide and encode as usual, but never touch the filesystem.
    """

    def __init__(
        self,
        original: Optional[OriginalConfig] = None,
        preview: Optional[PreviewConfig] = None,
        dry_run: bool = False,
    ):
        self.original = original or OriginalConfig()
        self.preview = preview or PreviewConfig()
        self.dry_run = dry_run

    def optimize_original(
        self,
        path: Path,
        data: bytes,
        source_format: Optional[SourceFormat] = None,
    ) -> OptimizeResult:
        """Auto-rotate, downscale and recompress an original if needed.

        Failures are logged and leave the original untouched; they never
        propagate.

        Args:
            path: Location of the original, overwritten on success.
            data: Current contents of the original.
            source_format: Container format; detected from ``path`` if None.

        Returns:
            OptimizeResult with the bytes to use for the remaining steps.
        """
        fmt = source_format or SourceFormat.from_filename(path.name)

        try:
            with Image.open(io.BytesIO(data)) as img:
                orientation = img.getexif().get(ORIENTATION_TAG) or DEFAULT_ORIENTATION
                needs_rotation = orientation != DEFAULT_ORIENTATION
                max_dimension = self.original.max_dimension
                too_large = img.width > max_dimension or img.height > max_dimension

                if not (needs_rotation or too_large):
                    return OptimizeResult(data=data, updated=False)

                logger.info(
                    "  - Optimizing original (Rotate: %s, Resize: %s)...",
                    needs_rotation,
                    too_large,
                )
                optimized = self._encode_original(img, fmt, resize=too_large)

            if self.dry_run:
                return OptimizeResult(data=data, updated=False)

            _replace_file(path, optimized)
        except Exception as e:
            logger.warning("  - Warning: Optimization failed for %s: %s", path.name, e)
            return OptimizeResult(data=data, updated=False, failed=True)

        return OptimizeResult(data=optimized, updated=True)

    def _encode_original(self, img: Image.Image, fmt: SourceFormat, resize: bool) -> bytes:
        icc_profile = img.info.get("icc_profile")

        # Rotation first, then the bounded downscale
        normalized = ImageOps.exif_transpose(img)
        if resize:
            max_dimension = self.original.max_dimension
            normalized.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

        save_kwargs = {}
        if self.original.keep_metadata:
            exif = normalized.getexif()
            if exif:
                save_kwargs["exif"] = exif.tobytes()
            if icc_profile:
                save_kwargs["icc_profile"] = icc_profile

        if fmt is SourceFormat.JPEG:
            if normalized.mode not in ("RGB", "L", "CMYK"):
                normalized = normalized.convert("RGB")
            save_kwargs.update(quality=self.original.quality, optimize=True)
        elif fmt is SourceFormat.WEBP:
            normalized = _to_web_mode(normalized)
            save_kwargs["quality"] = self.original.quality
        else:
            # PNG is lossless; quality does not apply
            save_kwargs["optimize"] = True

        buffer = io.BytesIO()
        normalized.save(buffer, format=fmt.pillow_format, **save_kwargs)
        return buffer.getvalue()

    def generate_preview(
        self,
        data: bytes,
        preview_path: Path,
        original_updated: bool = False,
    ) -> PreviewStatus:
        """Render the preview for an original.

        Skipped when the preview already exists and the original was not
        rewritten this run. Failures are logged and reported as FAILED.

        Args:
            data: Contents of the (possibly rewritten) original.
            preview_path: Where the preview is written.
            original_updated: Whether the original was rewritten this run.

        Returns:
            PreviewStatus describing what happened.
        """
        if preview_path.exists() and not original_updated:
            logger.debug("  - Preview up to date: %s", preview_path)
            return PreviewStatus.SKIPPED

        try:
            with Image.open(io.BytesIO(data)) as img:
                preview = ImageOps.exif_transpose(img)

            width = self.preview.width
            if preview.width > width:
                height = max(1, round(preview.height * width / preview.width))
                preview = preview.resize((width, height), Image.Resampling.LANCZOS)

            preview = _to_web_mode(preview)
            # Drop EXIF, ICC and comments
            preview.info = {}

            buffer = io.BytesIO()
            preview.save(buffer, format=self.preview.pillow_format, quality=self.preview.quality)

            if not self.dry_run:
                _replace_file(preview_path, buffer.getvalue())
        except Exception as e:
            logger.warning("  - Warning: Thumbnail generation failed for %s: %s", preview_path.name, e)
            return PreviewStatus.FAILED

        return PreviewStatus.WRITTEN


def _to_web_mode(img: Image.Image) -> Image.Image:
    """Convert to RGB, or RGBA when the image carries transparency."""
    if img.mode in ("RGB", "RGBA"):
        return img
    if "A" in img.getbands() or "transparency" in img.info:
        return img.convert("RGBA")
    return img.convert("RGB")


def _replace_file(path: Path, data: bytes) -> None:
    """Write ``data`` next to ``path`` and move it into place."""
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        tmp_path.write_bytes(data)
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
