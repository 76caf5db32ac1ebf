from dataclasses import dataclass
from typing import Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from swfmeta.core.errors import ErrorInfo


class Metadata(BaseModel):
    """
    Holds the structural facts read from a single SWF header.
    """
    model_config = ConfigDict(frozen=True)

    source_path: str = Field(..., min_length=1)
    stage_size: Tuple[int, int]
    frame_count: int = Field(..., ge=0)
    frame_rate: float

    @field_validator("stage_size")
    @classmethod
    def _non_negative_stage(cls, value: Tuple[int, int]) -> Tuple[int, int]:
        width, height = value
        if width < 0 or height < 0:
            raise ValueError(f"stage size must be non-negative, got {value}")
        return value

    @property
    def width(self) -> int:
        return self.stage_size[0]

    @property
    def height(self) -> int:
        return self.stage_size[1]


@dataclass(frozen=True)
class Success:
    """Extraction produced a complete Metadata value."""
    metadata: Metadata

    @property
    def source_path(self) -> str:
        return self.metadata.source_path

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Extraction, serialization or writing failed for one file."""
    source_path: str
    error: ErrorInfo

    @property
    def ok(self) -> bool:
        return False


ExtractionOutcome = Union[Success, Failure]
