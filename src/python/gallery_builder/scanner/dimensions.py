"""
Image dimension reading from raw bytes.

Pillow only parses the header when an image is opened, so reading the size
does not decode any pixel data.
"""

import io
import logging
from typing import NamedTuple, Optional

from PIL import Image

logger = logging.getLogger(__name__)


class Dimensions(NamedTuple):
    """Pixel size of an image."""
    width: int
    height: int


def read_dimensions(data: bytes) -> Optional[Dimensions]:
    """
    Read the pixel width and height of an image buffer.

    Args:
        data: Encoded image bytes

    Returns:
        Dimensions, or None if the header cannot be parsed
    """
    if not data:
        return None

    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
    except Exception as e:
        logger.debug("Failed to read image dimensions: %s", e)
        return None

    return Dimensions(width=width, height=height)
