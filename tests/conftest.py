"""Pytest configuration and shared fixtures."""

import io
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator, Optional

import pytest
from PIL import Image

from gallery_builder.config import Config


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: exercises real image encoding end to end")
    config.addinivalue_line("markers", "slow: takes noticeably longer than a unit test")


def encode_image(
    size=(100, 50),
    fmt: str = "JPEG",
    color="red",
    exif_tags: Optional[Dict[int, object]] = None,
    mode: str = "RGB",
) -> bytes:
    """Encode a solid-color test image, optionally with IFD0 EXIF tags."""
    img = Image.new(mode, size, color=color)
    save_kwargs = {}
    if exif_tags:
        exif = Image.Exif()
        for tag, value in exif_tags.items():
            exif[tag] = value
        save_kwargs["exif"] = exif.tobytes()

    buffer = io.BytesIO()
    img.save(buffer, format=fmt, **save_kwargs)
    return buffer.getvalue()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_image() -> Callable[..., Path]:
    """Factory that writes a test image to a path and returns the path."""
    def _make(path: Path, **kwargs) -> Path:
        fmt = kwargs.pop("fmt", None)
        if fmt is None:
            fmt = {".png": "PNG", ".webp": "WEBP"}.get(path.suffix.lower(), "JPEG")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(encode_image(fmt=fmt, **kwargs))
        return path

    return _make


@pytest.fixture
def small_config() -> Config:
    """Config with small limits so test images stay tiny."""
    return Config.from_dict({
        "preview": {"width": 40, "quality": 70},
        "original": {"max_dimension": 120, "quality": 85},
    })


@pytest.fixture
def gallery_root(temp_dir: Path) -> Path:
    """Project root with the default public/photos layout (photos not created)."""
    (temp_dir / "public").mkdir()
    return temp_dir


@pytest.fixture
def image_bytes() -> Callable[..., bytes]:
    """Factory returning encoded test image bytes (see ``encode_image``)."""
    return encode_image
