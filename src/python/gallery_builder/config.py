"""
Configuration management for gallery-builder.

Settings are fixed at build time: the defaults below, optionally overridden
by a YAML file. Nothing is read from the environment.

Example:
    >>> from gallery_builder.config import load_config
    >>> config = load_config()               # gallery.yaml if present, else defaults
    >>> config.preview.width
    600
"""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from PIL import Image

logger = logging.getLogger(__name__)

# Default locations to search for a config file
CONFIG_SEARCH_PATHS = [
    Path("gallery.yaml"),
    Path("gallery.yml"),
]


@dataclass
class PreviewConfig:
    """Preview (thumbnail) settings.

    Attributes:
        width: Target preview width in pixels; height follows the aspect ratio
        quality: Lossy encoder quality (1-100)
        format: Pillow-writable output format, also used as file extension
    """
    width: int = 600
    quality: int = 80
    format: str = "webp"

    @property
    def extension(self) -> str:
        """File extension for preview files, with leading dot."""
        return "." + self.format.lower()

    @property
    def pillow_format(self) -> Optional[str]:
        """Pillow encoder name for the preview format, None if unknown."""
        return Image.registered_extensions().get(self.extension)


@dataclass
class OriginalConfig:
    """Settings for rewriting originals in place.

    Attributes:
        max_dimension: Longest allowed side; larger originals are downscaled
        quality: Encoder quality used when an original is rewritten
        keep_metadata: Carry EXIF and ICC profile over to the rewritten file
    """
    max_dimension: int = 2500
    quality: int = 90
    keep_metadata: bool = True


@dataclass
class PathsConfig:
    """Filesystem layout and public URL prefixes.

    Relative directories are resolved against the base directory given to
    ``Config.resolve_paths``.
    """
    photos_dir: str = "public/photos"
    previews_dir: str = "public/thumbnails"
    manifest_file: str = "src/photos.json"
    photos_url: str = "/photos"
    previews_url: str = "/thumbnails"


@dataclass
class Config:
    """Main configuration for a gallery build.

    Example:
        >>> config = Config.from_dict({"preview": {"width": 400}})
        >>> config.preview.width, config.original.max_dimension
        (400, 2500)
    """
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    original: OriginalConfig = field(default_factory=OriginalConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from a (possibly partial) dictionary.

        Unknown keys raise TypeError from the section dataclass.
        """
        return cls(
            preview=PreviewConfig(**(data.get("preview") or {})),
            original=OriginalConfig(**(data.get("original") or {})),
            paths=PathsConfig(**(data.get("paths") or {})),
            log_level=data.get("log_level", "INFO"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to a plain dictionary."""
        return asdict(self)

    def validate(self) -> None:
        """
        Check that values make sense.

        Raises:
            ValueError: If any setting is out of range.
        """
        if self.preview.width <= 0:
            raise ValueError(f"preview.width must be positive, got {self.preview.width}")
        if self.original.max_dimension <= 0:
            raise ValueError(
                f"original.max_dimension must be positive, got {self.original.max_dimension}"
            )
        for name, quality in (("preview", self.preview.quality), ("original", self.original.quality)):
            if not 1 <= quality <= 100:
                raise ValueError(f"{name}.quality must be between 1 and 100, got {quality}")

        if self.preview.pillow_format not in Image.SAVE:
            raise ValueError(f"Pillow cannot write preview format '{self.preview.format}'")

    def resolve_paths(self, base_dir: Path) -> "ResolvedPaths":
        """Resolve configured directories against ``base_dir``."""
        return ResolvedPaths(
            photos_dir=_resolve(base_dir, self.paths.photos_dir),
            previews_dir=_resolve(base_dir, self.paths.previews_dir),
            manifest_file=_resolve(base_dir, self.paths.manifest_file),
        )


@dataclass
class ResolvedPaths:
    """Absolute locations for one run."""
    photos_dir: Path
    previews_dir: Path
    manifest_file: Path


def _resolve(base_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else base_dir / path


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Specific path to a config file. If None, searches the
            default locations and falls back to built-in defaults.

    Returns:
        Validated Config instance.

    Raises:
        FileNotFoundError: If ``config_path`` is given but does not exist.
        ValueError: If the loaded settings are invalid.
    """
    path_to_load = None

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        path_to_load = config_path
    else:
        for path in CONFIG_SEARCH_PATHS:
            if path.exists():
                path_to_load = path
                break

    if path_to_load is None:
        logger.debug("No config file found, using defaults")
        config = Config()
    else:
        logger.info("Loading config from %s", path_to_load)
        with open(path_to_load, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path_to_load}")
        config = Config.from_dict(data)

    config.validate()
    return config
