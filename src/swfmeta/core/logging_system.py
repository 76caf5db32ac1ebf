"""
Logging setup for SwfMeta
"""
import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..models.config import LoggingConfig
from .errors import ConfigurationError, ErrorContext

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
ROOT_LOGGER_NAME = "swfmeta"


class JsonFormatter(logging.Formatter):
    """Formats each record as one JSON object per line"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            entry['exception_info'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info),
            }
        return json.dumps(entry, ensure_ascii=False)


def build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    """Create the console handler and, if configured, a rotating file handler"""
    level = getattr(logging, config.level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers: List[logging.Handler] = [console_handler]

    if config.log_file:
        log_file = Path(config.log_file)
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=config.max_file_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
                encoding='utf-8'
            )
        except OSError as e:
            console_handler.close()
            raise ConfigurationError(
                f"Cannot open log file {log_file}: {e}",
                ErrorContext(operation="setup_logging", file_path=str(log_file))
            ) from e
        file_handler.setLevel(level)
        if config.enable_structured_logging:
            file_handler.setFormatter(JsonFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handlers.append(file_handler)

    return handlers


def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the package logger.

    Existing handlers on the package logger are replaced, so calling this
    twice does not duplicate output.

    Raises:
        ConfigurationError: If the log file cannot be opened. The current
            handlers are left in place.
    """
    config = config or LoggingConfig()
    handlers = build_handlers(config)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, config.level))

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    for handler in handlers:
        logger.addHandler(handler)

    return logger
