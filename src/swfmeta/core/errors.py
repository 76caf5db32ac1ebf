"""
Error handling system for SwfMeta
"""
import time
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """Error severity levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories"""
    INPUT = "input"
    FILE_IO = "file_io"
    PARSING = "parsing"
    SERIALIZATION = "serialization"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


@dataclass
class ErrorContext:
    """Context information for error handling"""
    operation: str
    file_path: Optional[str] = None
    additional_info: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class ErrorInfo:
    """Detailed error information recorded for a failed file"""
    error_type: str
    message: str
    severity: ErrorSeverity
    category: ErrorCategory
    context: ErrorContext
    traceback: Optional[str] = None
    timestamp: float = 0.0

    def __post_init__(self):
        if self.timestamp == 0.0:
            object.__setattr__(self, "timestamp", time.time())

    @property
    def user_message(self) -> str:
        """Short one-line description suitable for console output"""
        return f"{self.category.value}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.error_type,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "operation": self.context.operation,
            "file_path": self.context.file_path,
            "timestamp": self.timestamp,
        }


class SwfMetaError(Exception):
    """Base exception class for SwfMeta"""

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        context: Optional[ErrorContext] = None
    ):
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.category = category
        self.context = context or ErrorContext("unknown")

    def to_error_info(self) -> ErrorInfo:
        """Convert to ErrorInfo object"""
        return ErrorInfo(
            error_type=self.__class__.__name__,
            message=self.message,
            severity=self.severity,
            category=self.category,
            context=self.context,
            traceback=traceback.format_exc()
        )


class InputNotFoundError(SwfMetaError):
    """The root input path does not exist or is not a file or directory"""
    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message,
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.INPUT,
            context=context
        )


class FileIOError(SwfMetaError):
    """File I/O related errors"""
    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.FILE_IO,
            context=context
        )


class DestinationUnwritableError(FileIOError):
    """The destination directory cannot be written for structural reasons"""
    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(message, context)
        self.severity = ErrorSeverity.CRITICAL


class ParseError(SwfMetaError):
    """Container header could not be parsed"""
    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message,
            severity=ErrorSeverity.MEDIUM,
            category=ErrorCategory.PARSING,
            context=context
        )


class SerializationError(SwfMetaError):
    """Metadata could not be serialized or deserialized"""
    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message,
            severity=ErrorSeverity.HIGH,
            category=ErrorCategory.SERIALIZATION,
            context=context
        )


class ConfigurationError(SwfMetaError):
    """Configuration related errors"""
    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message,
            severity=ErrorSeverity.MEDIUM,
            category=ErrorCategory.CONFIGURATION,
            context=context
        )


def error_info_from_exception(
    error: Exception,
    context: Optional[ErrorContext] = None
) -> ErrorInfo:
    """Convert any exception into an ErrorInfo record"""
    if isinstance(error, SwfMetaError):
        info = error.to_error_info()
        if context is None:
            return info
        return ErrorInfo(
            error_type=info.error_type,
            message=info.message,
            severity=info.severity,
            category=info.category,
            context=context,
            traceback=info.traceback,
            timestamp=info.timestamp
        )

    return ErrorInfo(
        error_type=error.__class__.__name__,
        message=str(error),
        severity=ErrorSeverity.HIGH,
        category=ErrorCategory.SYSTEM,
        context=context or ErrorContext("unknown"),
        traceback=traceback.format_exc()
    )
