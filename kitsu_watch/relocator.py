"""
Moves consumed episode files into the watched holding directory
"""

import logging
from pathlib import Path

from .errors import RelocationError

logger = logging.getLogger(__name__)

WATCHED_DIR_NAME = "watched"


def ensure_watched_dir(working_dir: Path) -> Path:
    watched_dir = Path(working_dir) / WATCHED_DIR_NAME

    if not watched_dir.exists():
        try:
            watched_dir.mkdir()
        except OSError as e:
            raise RelocationError(str(working_dir), str(watched_dir), str(e)) from e
        logger.info(f"📁 Watched directory created: {watched_dir}")

    return watched_dir


def relocate(file_name: str, working_dir: Path) -> Path:
    """
    Rename a file from the working directory into its watched subdirectory

    Raises:
        RelocationError: destination already exists or the rename failed
    """
    source = Path(working_dir) / file_name
    watched_dir = ensure_watched_dir(working_dir)
    destination = watched_dir / file_name

    if destination.exists():
        raise RelocationError(str(source), str(destination), "destination already exists")

    try:
        source.rename(destination)
    except OSError as e:
        raise RelocationError(str(source), str(destination), str(e)) from e

    logger.info(f"📦 Moved To: {watched_dir}")
    return destination
