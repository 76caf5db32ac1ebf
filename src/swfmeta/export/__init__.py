"""
Export module for SwfMeta metadata serialization and output
"""

from .export_manager import (
    ExportManager,
    JSONSerializer,
    MetadataSerializer,
    TextSerializer,
    YAMLSerializer,
    deserialize,
    serialize,
)
from .writer import OutputWriter, derive_output_path

__all__ = [
    "ExportManager",
    "MetadataSerializer",
    "JSONSerializer",
    "YAMLSerializer",
    "TextSerializer",
    "serialize",
    "deserialize",
    "OutputWriter",
    "derive_output_path"
]
