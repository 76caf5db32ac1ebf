"""
Test configuration for SwfMeta
"""
import lzma
import struct
import zlib
from pathlib import Path

import pytest

from swfmeta.models.config import AppConfig, ExtractionConfig, LoggingConfig
from swfmeta.models.metadata import Metadata


def encode_rect(x_min: int, x_max: int, y_min: int, y_max: int) -> bytes:
    """Bit-pack a RECT the way SWF stores it"""
    values = [x_min, x_max, y_min, y_max]
    nbits = max((v if v >= 0 else ~v).bit_length() for v in values) + 1
    bits = format(nbits, "05b")
    for v in values:
        bits += format(v & ((1 << nbits) - 1), f"0{nbits}b")
    bits += "0" * (-len(bits) % 8)
    return int(bits, 2).to_bytes(len(bits) // 8, "big")


def build_swf(
    width: int = 550,
    height: int = 400,
    frame_rate: float = 24.0,
    frame_count: int = 1,
    signature: str = "FWS",
    version: int = 10,
    rect=None,
    padding: int = 0
) -> bytes:
    """Build a minimal SWF file: header plus a single End tag"""
    if rect is None:
        rect = (0, width * 20, 0, height * 20)
    body = encode_rect(*rect)
    body += struct.pack("<HH", int(round(frame_rate * 256)), frame_count)
    body += b"\x00\x00"  # End tag
    body += b"\x00" * padding
    file_length = 8 + len(body)
    prefix = signature.encode("ascii") + bytes([version]) + struct.pack("<I", file_length)

    if signature == "FWS":
        return prefix + body
    if signature == "CWS":
        return prefix + zlib.compress(body)
    if signature == "ZWS":
        alone = lzma.compress(body, format=lzma.FORMAT_ALONE)
        properties, stream = alone[:5], alone[13:]
        return prefix + struct.pack("<I", len(stream)) + properties + stream
    raise ValueError(f"unknown signature {signature}")


@pytest.fixture
def make_swf():
    """Factory for in-memory SWF bytes"""
    return build_swf


@pytest.fixture
def write_swf(tmp_path):
    """Write an SWF file below tmp_path and return its path"""
    def _write(relative: str, data: bytes = None, **kwargs) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data if data is not None else build_swf(**kwargs))
        return path
    return _write


@pytest.fixture
def truncated_swf():
    """An SWF whose body stops halfway through the stage rectangle"""
    return build_swf(width=550, height=400)[:10]


@pytest.fixture
def sample_metadata():
    """Sample metadata for serializer tests"""
    return Metadata(
        source_path="movies/intro.swf",
        stage_size=(550, 400),
        frame_count=321,
        frame_rate=24.0
    )


@pytest.fixture
def sample_extraction_config():
    return ExtractionConfig(max_workers=1)


@pytest.fixture
def sample_app_config(sample_extraction_config):
    """Sample app configuration for testing"""
    return AppConfig(
        extraction=sample_extraction_config,
        logging=LoggingConfig(level="INFO", log_file=None)
    )


@pytest.fixture(autouse=True)
def clean_swfmeta_env(monkeypatch):
    """Keep SWFMETA_* variables from the outer environment out of tests"""
    import os
    for name in list(os.environ):
        if name.startswith("SWFMETA_"):
            monkeypatch.delenv(name, raising=False)


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for component interactions"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests"
    )
