"""
Core module for the SwfMeta batch pipeline
"""

from .discovery import discover, matches_extension
from .errors import (
    ConfigurationError,
    DestinationUnwritableError,
    FileIOError,
    InputNotFoundError,
    ParseError,
    SerializationError,
    SwfMetaError,
)
from .extractor import HeaderExtractor, twips_to_pixels
from .pipeline import Pipeline

__all__ = [
    "Pipeline",
    "HeaderExtractor",
    "discover",
    "matches_extension",
    "twips_to_pixels",
    "SwfMetaError",
    "InputNotFoundError",
    "FileIOError",
    "DestinationUnwritableError",
    "ParseError",
    "SerializationError",
    "ConfigurationError"
]
