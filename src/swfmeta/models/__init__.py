"""
Data models for SwfMeta
"""

from .config import AppConfig, ExtractionConfig, LoggingConfig, OutputFormat
from .metadata import ExtractionOutcome, Failure, Metadata, Success
from .summary import FailureRecord, RunSummary

__all__ = [
    "AppConfig",
    "ExtractionConfig",
    "LoggingConfig",
    "OutputFormat",
    "Metadata",
    "ExtractionOutcome",
    "Success",
    "Failure",
    "RunSummary",
    "FailureRecord"
]
