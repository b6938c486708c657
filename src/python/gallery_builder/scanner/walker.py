"""
Recursive traversal of the photos tree.

The walker visits the source tree depth-first in name order, mirrors every
directory into the preview tree before anything inside it is handed out,
and yields one SourceEntry per supported image file.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from gallery_builder.models.enums import SourceFormat
from gallery_builder.scanner.patterns import category_from_relative


@dataclass(frozen=True)
class SourceEntry:
    """
    A supported image file found in the source tree.

    Attributes:
        path: Absolute path to the file
        relative_path: Path relative to the photos root
        category: Category derived from the first path segment
        format: Detected source format
    """
    path: Path
    relative_path: Path
    category: str
    format: SourceFormat

    @property
    def filename(self) -> str:
        return self.path.name


def walk_source_tree(
    photos_dir: Path,
    previews_dir: Path,
    create_dirs: bool = True,
) -> Iterator[SourceEntry]:
    """
    Walk the photos tree and yield supported image files.

    Entries are sorted by name within each directory, so repeated runs over
    an unchanged tree yield the same sequence. Hidden entries are skipped,
    as are files whose extension is not one of the supported formats.

    Args:
        photos_dir: Root of the source tree
        previews_dir: Root of the mirrored preview tree
        create_dirs: If False, do not create mirrored directories (dry run)

    Yields:
        SourceEntry for every supported image, in visit order

    Raises:
        FileNotFoundError: If photos_dir does not exist
        NotADirectoryError: If photos_dir is not a directory
        OSError: If a mirrored directory cannot be created

    Example:
        >>> for entry in walk_source_tree(Path("public/photos"), Path("public/thumbnails")):
        ...     print(entry.relative_path, entry.category)
    """
    if not photos_dir.exists():
        raise FileNotFoundError(f"Directory not found: {photos_dir}")

    if not photos_dir.is_dir():
        raise NotADirectoryError(f"Not a directory: {photos_dir}")

    yield from _walk(photos_dir, photos_dir, previews_dir, create_dirs)


def _walk(
    directory: Path,
    photos_dir: Path,
    previews_dir: Path,
    create_dirs: bool,
) -> Iterator[SourceEntry]:
    if create_dirs:
        # Errors here abort the run
        (previews_dir / directory.relative_to(photos_dir)).mkdir(parents=True, exist_ok=True)

    for path in sorted(directory.iterdir(), key=lambda p: p.name):
        if path.name.startswith("."):
            continue

        if path.is_dir():
            yield from _walk(path, photos_dir, previews_dir, create_dirs)
            continue

        if not path.is_file():
            continue

        fmt = SourceFormat.from_filename(path.name)
        if not fmt.is_supported:
            continue

        relative_path = path.relative_to(photos_dir)
        yield SourceEntry(
            path=path,
            relative_path=relative_path,
            category=category_from_relative(relative_path),
            format=fmt,
        )
