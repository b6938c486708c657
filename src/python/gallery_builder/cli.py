"""
Command-line interface for gallery-builder.

Example:
    $ gallery-builder
    $ gallery-builder --config site/gallery.yaml --verbose
    $ gallery-builder --photos-dir public/photos --manifest src/photos.json --dry-run
"""

import logging
import sys
from pathlib import Path

import click

from gallery_builder.assembler import GalleryAssembler
from gallery_builder.config import load_config
from gallery_builder.utils import setup_logging

logger = logging.getLogger(__name__)


@click.command()
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML configuration file (relative paths inside it resolve against its directory)')
@click.option('--photos-dir', type=click.Path(file_okay=False, path_type=Path), help='Source photos directory')
@click.option('--previews-dir', type=click.Path(file_okay=False, path_type=Path), help='Preview output directory')
@click.option('--manifest', type=click.Path(dir_okay=False, path_type=Path), help='Manifest output file')
@click.option('--dry-run', is_flag=True, help='Do not write originals, previews or the manifest')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Only log warnings and errors')
@click.option('--log-file', type=click.Path(dir_okay=False, path_type=Path), help='Also write the log to this file')
def main(config_path, photos_dir, previews_dir, manifest, dry_run, verbose, quiet, log_file):
    """Build the photo gallery manifest.

    Normalizes originals, renders previews and writes a JSON manifest
    describing every photo under the photos directory.
    """
    try:
        config = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        click.echo(f"Error: Could not load config: {e}", err=True)
        sys.exit(1)

    if quiet:
        log_level = 'WARNING'
    elif verbose:
        log_level = 'DEBUG'
    else:
        log_level = config.log_level

    setup_logging(log_level, log_file=log_file)

    # Command-line paths are relative to the working directory
    if photos_dir:
        config.paths.photos_dir = str(photos_dir.resolve())
    if previews_dir:
        config.paths.previews_dir = str(previews_dir.resolve())
    if manifest:
        config.paths.manifest_file = str(manifest.resolve())

    base_dir = config_path.resolve().parent if config_path else Path.cwd()
    assembler = GalleryAssembler(config, base_dir=base_dir, dry_run=dry_run)

    try:
        result = assembler.build()
    except Exception:
        logger.exception("Gallery build failed")
        sys.exit(1)

    click.echo(f"\nPhotos: {result.photos}")
    if result.photos:
        click.echo(assembler.summary().to_string(index=False))
    click.echo(f"  Originals optimized: {result.originals_optimized}")
    click.echo(f"  Previews written: {result.previews_written}")
    click.echo(f"  Previews up to date: {result.previews_skipped}")
    if result.failures:
        click.echo(f"  Warnings: {result.failures}")
    if result.manifest_file:
        click.echo(f"Data saved to: {result.manifest_file}")
    elif dry_run:
        click.echo("Dry run: nothing was written")


if __name__ == '__main__':
    main()
