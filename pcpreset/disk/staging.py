import asyncio
import shutil
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from pcpreset.log import get_logger

log = get_logger(__name__)


def remove_tree(path: Path):
    """
    Recursively remove a directory (or file) if it exists.

    Removing a path that doesn't exist is not an error.

    :param path: Path to remove.
    """
    if path.is_symlink() or path.is_file():
        path.unlink(missing_ok=True)
    elif path.is_dir():
        shutil.rmtree(path)


@asynccontextmanager
async def staging_directory(path: Path) -> AsyncIterator[Path]:
    """
    Own the staging directory for the duration of the block.

    Any leftover from an earlier run is removed on entry; the directory
    is removed again on every exit path, including errors and
    user interrupts.

    :param path: Staging directory path.
    :return: The staging directory path (not created, the fetcher creates it).
    """
    if path.exists():
        log.warning(f"Removing leftover staging directory {path}")
        remove_tree(path)

    try:
        yield path
    finally:
        log.debug(f"Cleaning up staging directory {path}")
        # Shielded so a cancelled run still gets cleaned up
        await asyncio.shield(asyncio.to_thread(remove_tree, path))


__all__ = ["remove_tree", "staging_directory"]
