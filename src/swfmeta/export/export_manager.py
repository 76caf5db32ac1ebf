"""
Metadata serialization formats for SwfMeta
"""
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Union

import yaml

from ..core.errors import ErrorContext, SerializationError
from ..models.config import OutputFormat
from ..models.metadata import Metadata

logger = logging.getLogger(__name__)

FIELD_ORDER = ("file_name", "stage_size", "no_of_frames", "frame_rate")


def metadata_to_record(metadata: Metadata) -> Dict[str, Any]:
    """Build the persisted record with keys in their fixed order."""
    width, height = metadata.stage_size
    return {
        "file_name": metadata.source_path,
        "stage_size": [width, height],
        "no_of_frames": metadata.frame_count,
        "frame_rate": metadata.frame_rate,
    }


def record_to_metadata(record: Any) -> Metadata:
    """Rebuild a Metadata value from a parsed json/yaml record."""
    if not isinstance(record, dict):
        raise SerializationError(
            f"Expected a mapping, got {type(record).__name__}",
            ErrorContext(operation="deserialize")
        )
    missing = [key for key in FIELD_ORDER if key not in record]
    if missing:
        raise SerializationError(
            f"Missing keys: {', '.join(missing)}",
            ErrorContext(operation="deserialize")
        )

    stage_size = record["stage_size"]
    if not isinstance(stage_size, (list, tuple)) or len(stage_size) != 2:
        raise SerializationError(
            f"stage_size must be a two-element list, got {stage_size!r}",
            ErrorContext(operation="deserialize")
        )

    try:
        return Metadata(
            source_path=record["file_name"],
            stage_size=tuple(stage_size),
            frame_count=record["no_of_frames"],
            frame_rate=record["frame_rate"],
        )
    except ValueError as e:
        raise SerializationError(
            f"Invalid metadata record: {e}",
            ErrorContext(operation="deserialize")
        ) from e


class MetadataSerializer(ABC):
    """Abstract base class for metadata serializers"""

    @abstractmethod
    def serialize(self, metadata: Metadata) -> bytes:
        """
        Render metadata to bytes

        Args:
            metadata: The metadata to render

        Returns:
            UTF-8 encoded representation
        """
        pass

    def deserialize(self, data: Union[bytes, str]) -> Metadata:
        """Parse bytes produced by serialize() back into Metadata"""
        raise SerializationError(
            f"{self.get_description()} cannot be read back",
            ErrorContext(operation="deserialize")
        )

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format"""
        pass

    @abstractmethod
    def get_description(self) -> str:
        """Get format description"""
        pass


class JSONSerializer(MetadataSerializer):
    """JSON format serializer"""

    def serialize(self, metadata: Metadata) -> bytes:
        return json.dumps(
            metadata_to_record(metadata),
            separators=(",", ":"),
            ensure_ascii=False
        ).encode("utf-8")

    def deserialize(self, data: Union[bytes, str]) -> Metadata:
        try:
            record = json.loads(data)
        except ValueError as e:
            raise SerializationError(
                f"Invalid JSON: {e}",
                ErrorContext(operation="json_deserialize")
            ) from e
        return record_to_metadata(record)

    def get_file_extension(self) -> str:
        return ".json"

    def get_description(self) -> str:
        return "JavaScript Object Notation (JSON) format"


class YAMLSerializer(MetadataSerializer):
    """YAML format serializer"""

    def serialize(self, metadata: Metadata) -> bytes:
        return yaml.safe_dump(
            metadata_to_record(metadata),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True
        ).encode("utf-8")

    def deserialize(self, data: Union[bytes, str]) -> Metadata:
        try:
            record = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise SerializationError(
                f"Invalid YAML: {e}",
                ErrorContext(operation="yaml_deserialize")
            ) from e
        return record_to_metadata(record)

    def get_file_extension(self) -> str:
        return ".yaml"

    def get_description(self) -> str:
        return "YAML Ain't Markup Language (YAML) format"


class TextSerializer(MetadataSerializer):
    """Human-readable four-line text format"""

    def serialize(self, metadata: Metadata) -> bytes:
        width, height = metadata.stage_size
        lines = [
            f"File: {metadata.source_path}",
            f"Stage Size: ({width}, {height})",
            f"Number of Frames: {metadata.frame_count}",
            f"Frame Rate: {metadata.frame_rate}",
        ]
        return ("\n".join(lines) + "\n").encode("utf-8")

    def get_file_extension(self) -> str:
        return ".text"

    def get_description(self) -> str:
        return "Plain text format"


class ExportManager:
    """Dispatches metadata to the serializer for each output format"""

    def __init__(self):
        self.serializers: Dict[OutputFormat, MetadataSerializer] = {
            OutputFormat.JSON: JSONSerializer(),
            OutputFormat.YAML: YAMLSerializer(),
            OutputFormat.TEXT: TextSerializer(),
        }

    def get_serializer(self, format: Union[OutputFormat, str]) -> MetadataSerializer:
        try:
            return self.serializers[OutputFormat(format)]
        except ValueError as e:
            raise SerializationError(
                f"Unsupported output format: {format}",
                ErrorContext(operation="select_format")
            ) from e

    def serialize(self, metadata: Metadata, format: Union[OutputFormat, str]) -> bytes:
        """
        Serialize metadata in the requested format

        Args:
            metadata: Metadata to serialize
            format: One of json, yaml, text

        Returns:
            Deterministic UTF-8 bytes
        """
        serializer = self.get_serializer(format)
        logger.debug(f"Serializing {metadata.source_path} as {serializer.get_description()}")
        try:
            return serializer.serialize(metadata)
        except SerializationError:
            raise
        except Exception as e:
            raise SerializationError(
                f"{serializer.get_description()} serialization failed: {e}",
                ErrorContext(operation="serialize", file_path=metadata.source_path)
            ) from e

    def deserialize(self, data: Union[bytes, str], format: Union[OutputFormat, str]) -> Metadata:
        return self.get_serializer(format).deserialize(data)

    def get_supported_formats(self) -> Dict[str, str]:
        """Get supported output formats"""
        return {
            fmt.value: serializer.get_description()
            for fmt, serializer in self.serializers.items()
        }


_default_manager = ExportManager()


def serialize(metadata: Metadata, format: Union[OutputFormat, str]) -> bytes:
    return _default_manager.serialize(metadata, format)


def deserialize(data: Union[bytes, str], format: Union[OutputFormat, str]) -> Metadata:
    return _default_manager.deserialize(data, format)
