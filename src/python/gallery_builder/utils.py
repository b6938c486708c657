"""
Logging setup for gallery-builder runs.

Progress lines go to stdout, so a build log reads like the console output
of the site's build step. ``--log-file`` tees the same lines to a file.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Third-party loggers and the level they are held at
QUIET_LOGGERS = {
    "PIL": logging.WARNING,
    # exifread warns about every unusual maker note
    "exifread": logging.ERROR,
}


def setup_logging(level: Union[str, int] = logging.INFO, log_file: Optional[Path] = None) -> None:
    """Route gallery-builder logging to stdout and, optionally, a log file."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT, handlers=handlers)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)
