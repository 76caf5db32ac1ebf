"""
Persisting serialized metadata next to its source file
"""
import errno
import logging
from pathlib import Path
from typing import Union

from ..core.errors import DestinationUnwritableError, ErrorContext, FileIOError
from ..models.config import OutputFormat

logger = logging.getLogger(__name__)

# errno values that mean every write to the destination will fail the same way
STRUCTURAL_ERRNOS = frozenset({errno.EROFS})


def derive_output_path(source_path: Union[str, Path], format: Union[OutputFormat, str]) -> Path:
    """
    Append the format extension to the source path.

    ``movie.swf`` + json -> ``movie.swf.json``; the original extension is kept.
    """
    return Path(f"{source_path}{OutputFormat(format).extension}")


class OutputWriter:
    """Writes serialized metadata beside each source file"""

    def write(
        self,
        source_path: Union[str, Path],
        format: Union[OutputFormat, str],
        data: bytes
    ) -> Path:
        """
        Write data to the derived destination, replacing any existing file.

        Args:
            source_path: The SWF file the data describes
            format: Output format, selects the appended extension
            data: Serialized metadata

        Returns:
            The destination path

        Raises:
            DestinationUnwritableError: If the filesystem refuses all writes
            FileIOError: For any other write failure
        """
        output_path = derive_output_path(source_path, format)
        context = ErrorContext(operation="write", file_path=str(output_path))

        try:
            with open(output_path, "wb") as f:
                f.write(data)
        except OSError as e:
            if e.errno in STRUCTURAL_ERRNOS:
                raise DestinationUnwritableError(
                    f"Destination is not writable: {output_path}: {e}", context
                ) from e
            raise FileIOError(f"Error writing to {output_path}: {e}", context) from e

        logger.info(f"Saved metadata to: {output_path}")
        return output_path
