"""Enumerations for gallery-builder models."""

from enum import Enum
from pathlib import Path


class SourceFormat(Enum):
    """
    Image formats accepted from the source tree.

    Only these four raster formats are picked up by the walker;
    anything else in the photos directory is skipped without comment.
    """
    JPEG = "jpg"
    PNG = "png"
    WEBP = "webp"

    # Not part of the allow-list
    UNKNOWN = "unknown"

    @classmethod
    def from_extension(cls, extension: str) -> "SourceFormat":
        """
        Get SourceFormat from a file extension.

        Args:
            extension: File extension (with or without leading dot, any case)

        Returns:
            The matching SourceFormat, or UNKNOWN if not accepted
        """
        ext = extension.lower().lstrip(".")

        # .jpeg is the same container as .jpg
        if ext == "jpeg":
            return cls.JPEG

        for fmt in cls:
            if fmt.value == ext and fmt is not cls.UNKNOWN:
                return fmt

        return cls.UNKNOWN

    @classmethod
    def from_filename(cls, filename: str) -> "SourceFormat":
        """
        Get SourceFormat from a filename or file path.

        Examples:
            >>> SourceFormat.from_filename("sunset.JPEG")
            SourceFormat.JPEG
            >>> SourceFormat.from_filename("notes.txt")
            SourceFormat.UNKNOWN
        """
        return cls.from_extension(Path(filename).suffix)

    @property
    def is_supported(self) -> bool:
        """Check if files of this format are processed by the pipeline."""
        return self is not SourceFormat.UNKNOWN

    @property
    def pillow_format(self) -> str:
        """Pillow format name used when re-encoding an original of this format."""
        if not self.is_supported:
            raise ValueError(f"No encoder for unsupported format: {self.name}")
        return self.name
