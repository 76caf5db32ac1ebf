"""
Configuration loading from file and environment
"""
import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple, Union

import yaml
from pydantic import ValidationError

from ..models.config import AppConfig
from .errors import ConfigurationError, ErrorContext

logger = logging.getLogger(__name__)

# env var -> (section, field)
ENV_MAPPINGS: Dict[str, Tuple[str, str]] = {
    'SWFMETA_FORMAT': ('extraction', 'output_format'),
    'SWFMETA_EXTENSION': ('extraction', 'target_extension'),
    'SWFMETA_WORKERS': ('extraction', 'max_workers'),
    'SWFMETA_MAX_FILE_SIZE_MB': ('extraction', 'max_file_size_mb'),
    'SWFMETA_STRICT_LENGTH': ('extraction', 'strict_length'),
    'SWFMETA_LOG_LEVEL': ('logging', 'level'),
    'SWFMETA_LOG_FILE': ('logging', 'log_file'),
}


class ConfigManager:
    """Builds the AppConfig from an optional file plus SWFMETA_* overrides"""

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None
    ):
        self.config_path = Path(config_path) if config_path else None
        self.environ = os.environ if environ is None else environ
        self.config: AppConfig = AppConfig()

        self.load_configuration()

    def load_configuration(self):
        """Load configuration from file and environment"""
        if self.config_path is not None:
            self.load_from_file(self.config_path)

        self.load_from_environment()
        self.validate_configuration()

    def load_from_file(self, file_path: Path):
        """Load configuration from a JSON or YAML file"""
        context = ErrorContext(operation="load_config", file_path=str(file_path))
        try:
            self.config = AppConfig.load_from_file(str(file_path))
        except FileNotFoundError as e:
            raise ConfigurationError(str(e), context) from e
        except (ValueError, yaml.YAMLError, TypeError) as e:
            raise ConfigurationError(f"Invalid configuration file {file_path}: {e}", context) from e

        logger.info(f"Configuration loaded from {file_path}")

    def load_from_environment(self):
        """Apply SWFMETA_* environment variable overrides"""
        data = self.config.model_dump()
        changed = []

        for env_var, (section, field_name) in ENV_MAPPINGS.items():
            value = self.environ.get(env_var)
            if value is None:
                continue
            data[section][field_name] = value
            changed.append(env_var)

        if not changed:
            return

        try:
            self.config = AppConfig(**data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid environment override ({', '.join(changed)}): {e}",
                ErrorContext(operation="load_environment")
            ) from e

        logger.info(f"Configuration updated from environment: {changed}")

    def validate_configuration(self):
        """Validate configuration"""
        errors = self.config.validate_config()
        if errors:
            raise ConfigurationError(
                "; ".join(errors),
                ErrorContext(operation="validate_config")
            )

    def get_config(self) -> AppConfig:
        return self.config
