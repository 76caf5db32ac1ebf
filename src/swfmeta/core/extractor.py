"""
Per-file SWF header extraction
"""
import logging
import os
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from ..container.header import ContainerParseError, Rect, SwfHeader, parse_header
from ..models.config import ExtractionConfig
from ..models.metadata import ExtractionOutcome, Failure, Metadata, Success
from .errors import ErrorContext, FileIOError, ParseError

logger = logging.getLogger(__name__)

TWIPS_PER_PIXEL = 20

HeaderParser = Callable[[bytes], SwfHeader]


def twips_to_pixels(twips: int) -> int:
    """Convert a length in twips to whole pixels, clamping negatives to 0."""
    return max(0, twips) // TWIPS_PER_PIXEL


def display_path(path: Union[str, Path]) -> str:
    """Path as text. Bytes that are not valid UTF-8 are shown as \\xNN escapes."""
    return os.fsencode(path).decode("utf-8", "backslashreplace")


def stage_size_from_rect(rect: Rect) -> Tuple[int, int]:
    return twips_to_pixels(rect.width), twips_to_pixels(rect.height)


class HeaderExtractor:
    """
    Reads one SWF file and maps its header into a Metadata value.

    Every failure is returned as a Failure outcome; extract() never raises
    for a bad file.
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        parser: Optional[HeaderParser] = None
    ):
        self.config = config or ExtractionConfig()
        if parser is None:
            strict = self.config.strict_length
            parser = lambda data: parse_header(data, strict=strict)
        self.parser = parser

    def _read(self, path: Path) -> bytes:
        limit = self.config.max_file_size_mb * 1024 * 1024
        context = ErrorContext(operation="read", file_path=str(path))
        try:
            size = path.stat().st_size
            if size > limit:
                raise FileIOError(
                    f"File is {size} bytes, larger than the {self.config.max_file_size_mb} MB limit",
                    context
                )
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise FileIOError(f"Cannot read {path}: {e}", context) from e

    def to_metadata(self, path: Union[str, Path], header: SwfHeader) -> Metadata:
        return Metadata(
            source_path=display_path(path),
            stage_size=stage_size_from_rect(header.frame_size),
            frame_count=header.frame_count,
            frame_rate=header.frame_rate,
        )

    def extract(self, path: Union[str, Path]) -> ExtractionOutcome:
        """
        Extract metadata from a single file.

        Args:
            path: Path to the SWF file.

        Returns:
            Success with the Metadata, or Failure with an I/O or parse error.
        """
        path = Path(path)
        logger.debug(f"Extracting metadata from: {path}")

        try:
            data = self._read(path)
        except FileIOError as e:
            logger.warning(f"Read failed for {path}: {e.message}")
            return Failure(str(path), e.to_error_info())

        try:
            header = self.parser(data)
        except ContainerParseError as e:
            error = ParseError(
                f"{e.__class__.__name__}: {e}",
                ErrorContext(operation="parse_header", file_path=str(path))
            )
            logger.warning(f"Parse failed for {path}: {error.message}")
            return Failure(str(path), error.to_error_info())

        try:
            metadata = self.to_metadata(path, header)
        except ValueError as e:
            error = ParseError(
                f"Header values out of range: {e}",
                ErrorContext(operation="map_header", file_path=str(path))
            )
            logger.warning(f"Parse failed for {path}: {error.message}")
            return Failure(str(path), error.to_error_info())

        return Success(metadata)
