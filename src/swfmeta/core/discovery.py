"""
Candidate file discovery
"""
import logging
import os
from pathlib import Path
from typing import Iterator, Union

from .errors import ErrorContext, InputNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".swf"


def matches_extension(path: Union[str, Path], extension: str = DEFAULT_EXTENSION) -> bool:
    """Case-insensitive suffix check (``.swf``, ``.SWF``, ``.Swf`` all match)."""
    return Path(path).suffix.lower() == extension.lower()


def _walk(root: Path, extension: str) -> Iterator[Path]:
    # Explicit stack so deeply nested trees cannot exhaust the recursion limit
    stack = [root]
    while stack:
        directory = stack.pop()
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            stack.append(Path(entry.path))
                        elif entry.is_file() and matches_extension(entry.name, extension):
                            yield Path(entry.path)
                    except OSError as e:
                        logger.warning(f"Skipping unreadable entry {entry.path}: {e}")
        except OSError as e:
            logger.warning(f"Skipping unreadable directory {directory}: {e}")


def discover(root: Union[str, Path], extension: str = DEFAULT_EXTENSION) -> Iterator[Path]:
    """
    Produce the candidate files under ``root``.

    A file root yields itself when its extension matches, otherwise nothing.
    A directory root yields every matching regular file at any depth, in no
    particular order.

    Args:
        root: A file or directory path.
        extension: Target extension, compared case-insensitively.

    Returns:
        A lazy iterator of paths.

    Raises:
        InputNotFoundError: If ``root`` is neither a file nor a directory.
            Raised immediately, before iteration starts.
    """
    root = Path(root)

    if root.is_file():
        if matches_extension(root, extension):
            return iter([root])
        logger.warning(f"{root} does not have a {extension} extension; nothing to do")
        return iter([])

    if root.is_dir():
        logger.info(f"Scanning {root} recursively for {extension} files")
        return _walk(root, extension)

    raise InputNotFoundError(
        f"Input path not found or not a file or directory: {root}",
        ErrorContext(operation="discover", file_path=str(root))
    )
