"""
Tests for per-file header extraction
"""
import os
import sys
from unittest.mock import Mock

import pytest

from swfmeta.container.header import Rect, SwfHeader, UnsupportedCompressionError
from swfmeta.core.errors import ErrorCategory
from swfmeta.core.extractor import (
    HeaderExtractor,
    display_path,
    stage_size_from_rect,
    twips_to_pixels,
)
from swfmeta.models.config import ExtractionConfig
from swfmeta.models.metadata import Failure, Success


def _header(rect: Rect, frame_count: int = 10, frame_rate: float = 30.0) -> SwfHeader:
    return SwfHeader(
        signature="FWS",
        version=10,
        file_length=100,
        frame_size=rect,
        frame_rate=frame_rate,
        frame_count=frame_count
    )


class TestUnitConversion:
    def test_reference_stage(self):
        """11000 x 8000 twips is 550 x 400 pixels"""
        assert stage_size_from_rect(Rect(0, 11000, 0, 8000)) == (550, 400)

    def test_integer_division_truncates(self):
        assert twips_to_pixels(39) == 1
        assert twips_to_pixels(19) == 0
        assert twips_to_pixels(20) == 1

    def test_negative_extent_clamps_to_zero(self):
        assert twips_to_pixels(-400) == 0
        assert stage_size_from_rect(Rect(100, 0, 0, 400)) == (0, 20)

    def test_offset_origin(self):
        assert stage_size_from_rect(Rect(-200, 1800, 400, 1400)) == (100, 50)


class TestHeaderExtractor:
    @pytest.fixture
    def extractor(self):
        return HeaderExtractor(ExtractionConfig())

    def test_success(self, extractor, write_swf):
        path = write_swf("ok1.swf", width=550, height=400, frame_rate=24.0, frame_count=321)

        outcome = extractor.extract(path)

        assert isinstance(outcome, Success)
        assert outcome.ok
        assert outcome.metadata.source_path == str(path)
        assert outcome.metadata.stage_size == (550, 400)
        assert outcome.metadata.frame_count == 321
        assert outcome.metadata.frame_rate == 24.0

    @pytest.mark.parametrize("signature", ["CWS", "ZWS"])
    def test_compressed_files(self, extractor, write_swf, signature):
        path = write_swf(f"{signature}.swf", width=800, height=600, signature=signature)

        outcome = extractor.extract(path)

        assert isinstance(outcome, Success)
        assert outcome.metadata.stage_size == (800, 600)

    def test_truncated_file_is_parse_failure(self, extractor, write_swf, truncated_swf):
        path = write_swf("bad.swf", data=truncated_swf)

        outcome = extractor.extract(path)

        assert isinstance(outcome, Failure)
        assert not outcome.ok
        assert outcome.source_path == str(path)
        assert outcome.error.error_type == "ParseError"
        assert outcome.error.category == ErrorCategory.PARSING
        assert "TruncatedFileError" in outcome.error.message

    def test_missing_file_is_io_failure(self, extractor, tmp_path):
        outcome = extractor.extract(tmp_path / "gone.swf")

        assert isinstance(outcome, Failure)
        assert outcome.error.error_type == "FileIOError"
        assert outcome.error.category == ErrorCategory.FILE_IO

    def test_directory_is_io_failure(self, extractor, tmp_path):
        directory = tmp_path / "dir.swf"
        directory.mkdir()

        outcome = extractor.extract(directory)

        assert isinstance(outcome, Failure)
        assert outcome.error.category == ErrorCategory.FILE_IO

    def test_file_over_size_limit(self, write_swf):
        path = write_swf("big.swf", data=b"FWS" + b"\x00" * (1024 * 1024 + 10))
        extractor = HeaderExtractor(ExtractionConfig(max_file_size_mb=1))

        outcome = extractor.extract(path)

        assert isinstance(outcome, Failure)
        assert outcome.error.error_type == "FileIOError"
        assert "limit" in outcome.error.message

    def test_injected_parser(self, write_swf):
        parser = Mock(return_value=_header(Rect(0, 2000, 0, 1000), frame_count=7, frame_rate=12.0))
        extractor = HeaderExtractor(parser=parser)
        path = write_swf("any.swf", data=b"raw bytes")

        outcome = extractor.extract(path)

        parser.assert_called_once_with(b"raw bytes")
        assert outcome.metadata.stage_size == (100, 50)
        assert outcome.metadata.frame_count == 7
        assert outcome.metadata.frame_rate == 12.0

    def test_parser_errors_become_failures(self, write_swf):
        parser = Mock(side_effect=UnsupportedCompressionError("unsupported compression signature b'XWS'"))
        extractor = HeaderExtractor(parser=parser)

        outcome = extractor.extract(write_swf("x.swf", data=b"XWS"))

        assert isinstance(outcome, Failure)
        assert outcome.error.error_type == "ParseError"
        assert "UnsupportedCompressionError" in outcome.error.message

    def test_non_strict_length(self, write_swf, make_swf):
        data = make_swf()
        # Declare a longer file than is present
        inflated = data[:4] + (len(data) + 50).to_bytes(4, "little") + data[8:]
        path = write_swf("short.swf", data=inflated)

        strict = HeaderExtractor(ExtractionConfig(strict_length=True)).extract(path)
        lenient = HeaderExtractor(ExtractionConfig(strict_length=False)).extract(path)

        assert isinstance(strict, Failure)
        assert isinstance(lenient, Success)

    def test_unsupported_lzma_properties_is_parse_failure(self, extractor, make_swf, write_swf):
        data = bytearray(make_swf(signature="ZWS"))
        data[12] = 0x08
        path = write_swf("odd.swf", data=bytes(data))

        outcome = extractor.extract(path)

        assert isinstance(outcome, Failure)
        assert outcome.error.error_type == "ParseError"
        assert outcome.error.category == ErrorCategory.PARSING
        assert "MalformedHeaderError" in outcome.error.message


@pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts arbitrary name bytes")
class TestUndecodableFileNames:
    """File names that are not valid UTF-8"""

    def test_display_path_escapes_invalid_bytes(self):
        assert display_path(os.fsdecode(b"dir/clip\xff.swf")) == "dir/clip\\xff.swf"
        assert display_path("动画/片头.swf") == "动画/片头.swf"

    def test_valid_file_with_undecodable_name(self, tmp_path, make_swf):
        path = tmp_path / os.fsdecode(b"clip\xff.swf")
        path.write_bytes(make_swf(frame_count=12))

        outcome = HeaderExtractor().extract(path)

        assert isinstance(outcome, Success)
        assert outcome.metadata.frame_count == 12
        assert outcome.metadata.source_path == f"{tmp_path}/clip\\xff.swf"
