"""
SwfMeta - SWF header metadata extraction

Reads stage size, frame count and frame rate from SWF files, for a single
file or a whole directory tree, and writes the result beside each file as
JSON, YAML or plain text.
"""

__version__ = "1.0.0"
__description__ = "SWF header metadata extraction"

# Core imports
from .core.pipeline import Pipeline
from .models.config import AppConfig, ExtractionConfig, OutputFormat
from .models.metadata import Metadata
from .models.summary import RunSummary

# Export main classes
__all__ = [
    "Pipeline",
    "AppConfig",
    "ExtractionConfig",
    "OutputFormat",
    "Metadata",
    "RunSummary",
    "__version__",
    "__description__"
]
