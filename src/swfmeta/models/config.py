from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class OutputFormat(str, Enum):
    """The closed set of persisted metadata representations."""
    JSON = "json"
    YAML = "yaml"
    TEXT = "text"

    @property
    def extension(self) -> str:
        return f".{self.value}"


class ExtractionConfig(BaseModel):
    """
    Controls discovery, extraction and output of SWF metadata.
    """

    target_extension: str = Field(
        default=".swf",
        description="File extension to discover (compared case-insensitively)."
    )

    output_format: OutputFormat = Field(
        default=OutputFormat.JSON,
        description="Representation written next to each source file."
    )

    max_workers: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Number of files processed concurrently. 1 means sequential."
    )

    max_file_size_mb: int = Field(
        default=256,
        ge=1,
        le=4096,
        description="Files larger than this are recorded as failures without being read."
    )

    strict_length: bool = Field(
        default=True,
        description="Treat a body shorter than the header's declared length as truncation."
    )

    @field_validator("target_extension")
    @classmethod
    def _normalize_extension(cls, value: str) -> str:
        value = value.strip()
        if not value or value == ".":
            raise ValueError("target extension must not be empty")
        if not value.startswith("."):
            value = "." + value
        return value.lower()


class LoggingConfig(BaseModel):
    """
    Logging configuration settings.
    """

    level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)."
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file. If None, logs to console only."
    )

    max_file_size_mb: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum log file size in megabytes."
    )

    backup_count: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Number of backup log files to keep."
    )

    enable_structured_logging: bool = Field(
        default=True,
        description="Write the log file as one JSON object per line."
    )

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown logging level: {value}")
        return level


class AppConfig(BaseModel):
    """
    Complete application configuration.
    """

    extraction: ExtractionConfig = Field(
        default_factory=ExtractionConfig,
        description="Extraction configuration."
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration."
    )

    config_file_path: Optional[str] = Field(
        default=None,
        description="Path to configuration file."
    )

    @classmethod
    def load_from_file(cls, config_path: str) -> 'AppConfig':
        """
        Load configuration from a JSON or YAML file.

        Args:
            config_path: Path to the configuration file.

        Returns:
            AppConfig instance.
        """
        import json
        from pathlib import Path

        import yaml

        path = Path(config_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration root must be a mapping: {config_path}")
        data.setdefault("config_file_path", str(path))
        return cls(**data)

    def save_to_file(self, config_path: str):
        """
        Save configuration to a JSON or YAML file.

        Args:
            config_path: Path to save the configuration file.
        """
        import json
        from pathlib import Path

        import yaml

        path = Path(config_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(mode="json", exclude={"config_file_path"})

        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix.lower() in ['.yaml', '.yml']:
                yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True)
            else:
                json.dump(data, f, indent=2, ensure_ascii=False)

    def validate_config(self) -> List[str]:
        """
        Validate configuration and return list of validation errors.

        Returns:
            List of validation error messages.
        """
        errors = []

        if self.logging.log_file is not None and not self.logging.log_file.strip():
            errors.append("Log file path must not be blank")

        if self.extraction.target_extension in (".json", ".yaml", ".text"):
            errors.append("Target extension must differ from the output extensions")

        return errors
