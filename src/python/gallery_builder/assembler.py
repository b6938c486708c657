"""
Gallery assembly: runs the per-file pipeline and writes the manifest.

For every supported image the assembler, in order:
1. reads the original,
2. lets the transcoder normalize it in place if needed,
3. renders (or reuses) the preview,
4. reads metadata and dimensions from the final bytes,
5. appends a PhotoRecord with the next identifier.

Files are processed strictly one at a time. The manifest is rebuilt from
scratch on every run and overwrites the previous one.

Example:
    >>> from gallery_builder.assembler import GalleryAssembler
    >>> from gallery_builder.config import load_config
    >>> assembler = GalleryAssembler(load_config(), base_dir=Path("."))
    >>> result = assembler.build()
    >>> print(f"{result.photos} photos, {result.previews_written} previews written")
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Set

import pandas as pd

from gallery_builder.config import Config
from gallery_builder.models.record import PhotoRecord
from gallery_builder.scanner.dimensions import read_dimensions
from gallery_builder.scanner.exif import extract_exif_summary
from gallery_builder.scanner.patterns import (
    preview_relative_path,
    title_from_filename,
    to_web_path,
)
from gallery_builder.scanner.walker import SourceEntry, walk_source_tree
from gallery_builder.transcode import ImageTranscoder, PreviewStatus

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Counters for one gallery build."""
    photos: int = 0
    originals_optimized: int = 0
    previews_written: int = 0
    previews_skipped: int = 0
    failures: int = 0
    source_found: bool = True
    manifest_file: Optional[Path] = None


class GalleryAssembler:
    """Builds the gallery manifest from the photos tree.

    Args:
        config: Build configuration.
        base_dir: Directory that relative paths in ``config.paths`` resolve against.
        dry_run: Walk and extract without writing originals, previews or the manifest.
    """

    def __init__(self, config: Optional[Config] = None, base_dir: Optional[Path] = None, dry_run: bool = False):
        self.config = config or Config()
        self.paths = self.config.resolve_paths(base_dir or Path.cwd())
        self.dry_run = dry_run
        self.transcoder = ImageTranscoder(self.config.original, self.config.preview, dry_run=dry_run)

        self.records: List[PhotoRecord] = []
        self._next_id = 1
        self._claimed_previews: Set[Path] = set()

    def build(self) -> BuildResult:
        """Process the whole photos tree and write the manifest.

        A missing photos directory is not an error: the manifest is written
        as an empty list.

        Returns:
            BuildResult with run counters.

        Raises:
            OSError: If a preview directory or the manifest cannot be written.
        """
        self.records = []
        self._next_id = 1
        self._claimed_previews = set()
        result = BuildResult()

        photos_dir = self.paths.photos_dir
        if photos_dir.is_dir():
            logger.info("Scanning for photos in: %s", photos_dir)
            entries = walk_source_tree(photos_dir, self.paths.previews_dir, create_dirs=not self.dry_run)
            self._process_entries(entries, result)
        else:
            logger.warning("Photos directory not found: %s", photos_dir)
            result.source_found = False

        result.photos = len(self.records)
        if not self.dry_run:
            result.manifest_file = self.write_manifest(self.paths.manifest_file)

        logger.info("Successfully generated gallery with %d photos!", result.photos)
        return result

    def _process_entries(self, entries: Iterable[SourceEntry], result: BuildResult) -> None:
        for entry in entries:
            record = self.process_file(entry, result)
            self.records.append(record)

    def process_file(self, entry: SourceEntry, result: Optional[BuildResult] = None) -> PhotoRecord:
        """Run the full per-file pipeline for one source image.

        Only reading the original may raise; every later step degrades to
        default values instead.
        """
        if result is None:
            result = BuildResult()

        logger.info("Processing: %s...", entry.relative_path.as_posix())
        data = entry.path.read_bytes()

        # 1. Normalize the original
        optimized = self.transcoder.optimize_original(entry.path, data, entry.format)
        data = optimized.data
        if optimized.updated:
            result.originals_optimized += 1
        if optimized.failed:
            result.failures += 1

        # 2. Preview
        preview_rel = self._claim_preview_path(entry)
        status = self.transcoder.generate_preview(
            data,
            self.paths.previews_dir / preview_rel,
            original_updated=optimized.updated,
        )
        if status is PreviewStatus.WRITTEN:
            result.previews_written += 1
        elif status is PreviewStatus.SKIPPED:
            result.previews_skipped += 1
        else:
            result.failures += 1

        # 3. Metadata and dimensions
        exif = extract_exif_summary(data)
        dimensions = read_dimensions(data)
        width, height = dimensions if dimensions else (0, 0)

        record = PhotoRecord(
            id=self._next_id,
            src=to_web_path(self.config.paths.photos_url, entry.relative_path),
            thumbnail=to_web_path(self.config.paths.previews_url, preview_rel),
            title=title_from_filename(entry.filename),
            width=width,
            height=height,
            category=entry.category,
            exif=exif,
        )
        self._next_id += 1
        return record

    def _claim_preview_path(self, entry: SourceEntry) -> Path:
        """Pick the preview path for an entry, avoiding collisions within this run."""
        extension = self.config.preview.extension
        preview_rel = Path(preview_relative_path(entry.relative_path, extension))

        if preview_rel in self._claimed_previews:
            disambiguated = Path(preview_relative_path(entry.relative_path, extension, disambiguate=True))
            # The fallback name can itself belong to a source like photo-png.jpg
            base_stem = disambiguated.stem
            counter = 2
            while disambiguated in self._claimed_previews:
                disambiguated = disambiguated.with_name(f"{base_stem}-{counter}{extension}")
                counter += 1
            logger.warning(
                "  - Preview %s already used by another photo, writing %s instead",
                preview_rel.as_posix(),
                disambiguated.as_posix(),
            )
            preview_rel = disambiguated

        self._claimed_previews.add(preview_rel)
        return preview_rel

    def manifest(self) -> List[dict]:
        """Return the manifest as JSON-serializable dictionaries."""
        return [record.to_dict() for record in self.records]

    def write_manifest(self, manifest_file: Path) -> Path:
        """Serialize the manifest, replacing any previous version."""
        manifest_file.parent.mkdir(parents=True, exist_ok=True)
        with open(manifest_file, "w", encoding="utf-8") as f:
            json.dump(self.manifest(), f, indent=2, ensure_ascii=False)

        logger.info("Data saved to: %s", manifest_file)
        return manifest_file

    def summary(self) -> pd.DataFrame:
        """Photo counts per category, in first-seen order."""
        return records_to_dataframe(self.records).pipe(_count_by_category)


def records_to_dataframe(records: List[PhotoRecord]) -> pd.DataFrame:
    """
    Convert PhotoRecords to a flat pandas DataFrame.

    The nested ``exif`` object is flattened into ``exif_<field>`` columns.
    """
    if not records:
        return pd.DataFrame()

    data = []
    for record in records:
        row = record.to_dict()
        for key, value in row.pop("exif").items():
            row[f"exif_{key}"] = value
        data.append(row)

    return pd.DataFrame(data)


def _count_by_category(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return pd.DataFrame({"category": pd.Series(dtype=str), "photos": pd.Series(dtype=int)})

    return (
        df.groupby("category", sort=False)
        .size()
        .reset_index(name="photos")
    )
