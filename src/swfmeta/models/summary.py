"""
Run summary accumulated by the pipeline
"""
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from swfmeta.core.errors import ErrorInfo


@dataclass(frozen=True)
class FailureRecord:
    """A failed file together with the stage that failed"""
    source_path: str
    stage: str
    error: ErrorInfo

    def to_dict(self) -> Dict[str, Any]:
        data = self.error.to_dict()
        data["source_path"] = self.source_path
        data["stage"] = self.stage
        return data


@dataclass
class RunSummary:
    """
    Counts of successes and failures for one invocation.

    Created empty at run start and updated through record_success /
    record_failure, which may be called from worker threads.
    """
    successes: int = 0
    failures: List[FailureRecord] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    aborted: bool = False
    abort_reason: Optional[str] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def processed(self) -> int:
        return self.successes + self.failure_count

    @property
    def is_empty(self) -> bool:
        return self.processed == 0

    @property
    def ok(self) -> bool:
        """True when nothing failed and the run was not aborted"""
        return not self.aborted and not self.failures

    def record_success(self, output_path: Path) -> None:
        with self._lock:
            self.successes += 1
            self.written.append(output_path)

    def record_failure(self, source_path: str, stage: str, error: ErrorInfo) -> None:
        with self._lock:
            self.failures.append(FailureRecord(source_path, stage, error))

    def mark_aborted(self, reason: str) -> None:
        with self._lock:
            self.aborted = True
            self.abort_reason = reason

    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "successes": self.successes,
                "failures": len(self.failures),
                "aborted": self.aborted,
                "abort_reason": self.abort_reason,
                "written": [str(p) for p in self.written],
                "failure_details": [f.to_dict() for f in self.failures],
            }
