"""
SWF container reading for SwfMeta
"""

from .header import (
    ContainerParseError,
    MalformedHeaderError,
    Rect,
    SwfHeader,
    TruncatedFileError,
    UnsupportedCompressionError,
    decompress,
    parse_header,
)

__all__ = [
    "ContainerParseError",
    "MalformedHeaderError",
    "UnsupportedCompressionError",
    "TruncatedFileError",
    "Rect",
    "SwfHeader",
    "decompress",
    "parse_header"
]
