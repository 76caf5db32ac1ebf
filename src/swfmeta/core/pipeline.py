"""
Batch metadata pipeline - coordinates discovery, extraction, serialization and output
"""
import logging
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Set, Union

from ..export.export_manager import ExportManager
from ..export.writer import OutputWriter
from ..models.config import ExtractionConfig, OutputFormat
from ..models.metadata import Failure
from ..models.summary import RunSummary
from .discovery import discover
from .errors import (
    DestinationUnwritableError,
    ErrorContext,
    SerializationError,
    SwfMetaError,
    error_info_from_exception,
)
from .extractor import HeaderExtractor

logger = logging.getLogger(__name__)

Discoverer = Callable[[Union[str, Path], str], Iterable[Path]]
ResultCallback = Callable[[str, bool, str], None]


class _AbortRun(Exception):
    """Internal signal: a structural failure on the first file stops the run"""


class Pipeline:
    """
    Runs discover -> extract -> serialize -> write over every candidate file.

    Per-file failures are recorded in the RunSummary and never stop the run.
    Only an invalid root (InputNotFoundError, raised from run()) or an
    unwritable destination on the first file end it early.
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        discoverer: Optional[Discoverer] = None,
        extractor: Optional[HeaderExtractor] = None,
        export_manager: Optional[ExportManager] = None,
        writer: Optional[OutputWriter] = None,
        on_result: Optional[ResultCallback] = None
    ):
        self.config = config or ExtractionConfig()
        self.discoverer = discoverer or discover
        self.extractor = extractor or HeaderExtractor(self.config)
        self.export_manager = export_manager or ExportManager()
        self.writer = writer or OutputWriter()
        self.on_result = on_result
        self._is_processing = False

    def _notify(self, source_path: str, ok: bool, detail: str):
        if self.on_result is None:
            return
        try:
            self.on_result(source_path, ok, detail)
        except Exception as e:
            logger.error(f"Result callback failed: {e}")

    def _fail(self, summary: RunSummary, source_path: str, stage: str, error: Exception):
        context = getattr(error, "context", None)
        if context is None or context.file_path is None:
            context = ErrorContext(operation=stage, file_path=source_path)
        info = error_info_from_exception(error, context)
        summary.record_failure(source_path, stage, info)
        self._notify(source_path, False, info.user_message)

    def process_file(
        self,
        path: Path,
        format: OutputFormat,
        summary: RunSummary,
        first: bool = False
    ) -> None:
        """
        Process one discovered file, recording exactly one outcome in summary.

        Raises:
            _AbortRun: If ``first`` is set and the destination is structurally
                unwritable.
        """
        source_path = str(path)

        outcome = self.extractor.extract(path)
        if isinstance(outcome, Failure):
            summary.record_failure(source_path, "extract", outcome.error)
            self._notify(source_path, False, outcome.error.user_message)
            return

        try:
            data = self.export_manager.serialize(outcome.metadata, format)
        except SerializationError as e:
            logger.error(f"Serialization invariant violated for {source_path}: {e.message}")
            self._fail(summary, source_path, "serialize", e)
            return

        try:
            output_path = self.writer.write(source_path, format, data)
        except DestinationUnwritableError as e:
            self._fail(summary, source_path, "write", e)
            if first:
                raise _AbortRun(e.message) from e
            return
        except SwfMetaError as e:
            logger.warning(f"Write failed for {source_path}: {e.message}")
            self._fail(summary, source_path, "write", e)
            return

        summary.record_success(output_path)
        self._notify(source_path, True, str(output_path))

    def _process_guarded(self, path: Path, format: OutputFormat, summary: RunSummary, first: bool = False):
        try:
            self.process_file(path, format, summary, first)
        except _AbortRun:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error processing {path}")
            self._fail(summary, str(path), "unexpected", e)

    def _run_sequential(self, paths: Iterator[Path], format: OutputFormat, summary: RunSummary):
        for path in paths:
            self._process_guarded(path, format, summary)

    def _run_parallel(self, paths: Iterator[Path], format: OutputFormat, summary: RunSummary):
        max_workers = self.config.max_workers
        # Bound the number of queued files so memory does not grow with the tree
        max_in_flight = max_workers * 2
        in_flight: Set[Future] = set()

        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="swfmeta") as executor:
            for path in paths:
                if len(in_flight) >= max_in_flight:
                    done, in_flight = wait(in_flight, return_when=FIRST_COMPLETED)
                    for future in done:
                        future.result()
                in_flight.add(executor.submit(self._process_guarded, path, format, summary))

            for future in in_flight:
                future.result()

    def run(
        self,
        root: Union[str, Path],
        format: Optional[Union[OutputFormat, str]] = None
    ) -> RunSummary:
        """
        Process every candidate file under root.

        Args:
            root: A file or directory
            format: Output format, defaults to the configured one

        Returns:
            The RunSummary for this invocation

        Raises:
            InputNotFoundError: If root is not a file or directory
        """
        if self._is_processing:
            raise RuntimeError("Pipeline is already running")

        format = OutputFormat(format or self.config.output_format)
        summary = RunSummary()

        self._is_processing = True
        try:
            paths = iter(self.discoverer(root, self.config.target_extension))

            first = next(paths, None)
            if first is None:
                logger.warning(f"No {self.config.target_extension} files found under {root}")
                return summary

            try:
                self._process_guarded(first, format, summary, first=True)
            except _AbortRun as e:
                logger.error(f"Aborting run: {e}")
                summary.mark_aborted(str(e))
                return summary

            if self.config.max_workers > 1:
                self._run_parallel(paths, format, summary)
            else:
                self._run_sequential(paths, format, summary)

            logger.info(
                f"Processed {summary.processed} file(s): "
                f"{summary.successes} succeeded, {summary.failure_count} failed"
            )
            return summary
        finally:
            self._is_processing = False
