"""
SWF container header reader

Reads the fixed part of an SWF file: signature, version, declared length,
the stage RECT (in twips), the frame rate and the frame count. Tags after
the header are never touched.
"""
import lzma
import struct
import zlib
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

SIGNATURE_UNCOMPRESSED = b"FWS"
SIGNATURE_ZLIB = b"CWS"
SIGNATURE_LZMA = b"ZWS"

# signature(3) + version(1) + uncompressed length(4)
FILE_HEADER_SIZE = 8
# compressed length(4) + lzma properties(5)
LZMA_EXTRA_SIZE = 9
LZMA_MIN_DICT_SIZE = 4096
# RECT (at most 17 bytes) + frame rate(2) + frame count(2), with room to spare
BODY_PREFIX_SIZE = 64
CHUNK_SIZE = 64 * 1024


class ContainerParseError(Exception):
    """Raised when an SWF header cannot be read"""


class MalformedHeaderError(ContainerParseError):
    """The bytes do not form a valid SWF header"""


class UnsupportedCompressionError(ContainerParseError):
    """The signature names a compression scheme this reader does not handle"""


class TruncatedFileError(ContainerParseError):
    """The file ends before the data its header declares"""


@dataclass(frozen=True)
class Rect:
    """A rectangle in twips (1/20 pixel)"""
    x_min: int
    x_max: int
    y_min: int
    y_max: int

    @property
    def width(self) -> int:
        return self.x_max - self.x_min

    @property
    def height(self) -> int:
        return self.y_max - self.y_min


@dataclass(frozen=True)
class SwfHeader:
    """Parsed SWF header"""
    signature: str
    version: int
    file_length: int
    frame_size: Rect
    frame_rate: float
    frame_count: int

    @property
    def compressed(self) -> bool:
        return self.signature != SIGNATURE_UNCOMPRESSED.decode("ascii")


def _zlib_chunks(decompressor, payload: bytes) -> Iterator[bytes]:
    data = payload
    while not decompressor.eof:
        try:
            chunk = decompressor.decompress(data, CHUNK_SIZE)
        except zlib.error as e:
            raise MalformedHeaderError(f"zlib stream is corrupt: {e}") from e
        data = decompressor.unconsumed_tail
        if not chunk:
            return
        yield chunk


def _lzma1_filter(properties: bytes) -> dict:
    """Decode the 5-byte LZMA properties block into an lzma filter spec."""
    packed = properties[0]
    if packed >= 9 * 5 * 5:
        raise MalformedHeaderError(f"invalid LZMA properties byte {packed:#x}")
    lc = packed % 9
    packed //= 9
    lp = packed % 5
    pb = packed // 5
    dict_size = struct.unpack("<I", properties[1:5])[0]
    return {
        "id": lzma.FILTER_LZMA1,
        "lc": lc,
        "lp": lp,
        "pb": pb,
        "dict_size": max(dict_size, LZMA_MIN_DICT_SIZE),
    }


def _lzma_decompressor(properties: bytes):
    # liblzma rejects some combinations the properties byte can encode (lc > 4)
    try:
        return lzma.LZMADecompressor(
            format=lzma.FORMAT_RAW,
            filters=[_lzma1_filter(properties)]
        )
    except (lzma.LZMAError, ValueError) as e:
        raise MalformedHeaderError(f"unsupported LZMA properties {properties.hex()}: {e}") from e


def _lzma_chunks(decompressor, stream: bytes) -> Iterator[bytes]:
    data = stream
    while not decompressor.eof:
        try:
            chunk = decompressor.decompress(data, CHUNK_SIZE)
        except lzma.LZMAError as e:
            raise MalformedHeaderError(f"LZMA stream is corrupt: {e}") from e
        data = b""
        if not chunk:
            return
        yield chunk


def _collect(
    chunks: Iterable[bytes],
    max_body: Optional[int],
    body_length: int,
    strict: bool
) -> Tuple[bytes, int]:
    """
    Keep at most max_body bytes of the stream and count the rest.

    Counting stops once the declared length is exceeded, so a stream that
    inflates far past its header is never read to the end.
    """
    body = bytearray()
    total = 0
    for chunk in chunks:
        if max_body is None or len(body) < max_body:
            body += chunk
        total += len(chunk)
        if max_body is not None and len(body) >= max_body and (not strict or total > body_length):
            break
    if max_body is not None:
        del body[max_body:]
    return bytes(body), total


def decompress(
    data: bytes,
    strict: bool = True,
    max_body: Optional[int] = None
) -> Tuple[bytes, bytes]:
    """
    Split an SWF file into its 8-byte file header and its uncompressed body.

    Args:
        data: The complete file contents.
        strict: When True, a body shorter than the declared file length is
            reported as truncation.
        max_body: Return only the first max_body bytes of the body. The
            rest is decompressed in chunks and only counted.

    Returns:
        A (file_header, body) tuple.

    Raises:
        ContainerParseError: If the data is not a readable SWF file.
    """
    if len(data) < FILE_HEADER_SIZE:
        raise TruncatedFileError(
            f"file is {len(data)} bytes, shorter than the {FILE_HEADER_SIZE}-byte SWF header"
        )

    signature = data[:3]
    file_length = struct.unpack_from("<I", data, 4)[0]
    body_length = max(0, file_length - FILE_HEADER_SIZE)
    # LZMA streams may lack an end marker, so only zlib is checked for one
    complete = True

    if signature == SIGNATURE_UNCOMPRESSED:
        body = data[FILE_HEADER_SIZE:]
        total = len(body)
        if max_body is not None:
            body = body[:max_body]
    elif signature == SIGNATURE_ZLIB:
        decompressor = zlib.decompressobj()
        body, total = _collect(
            _zlib_chunks(decompressor, data[FILE_HEADER_SIZE:]), max_body, body_length, strict
        )
        complete = decompressor.eof
    elif signature == SIGNATURE_LZMA:
        if len(data) < FILE_HEADER_SIZE + LZMA_EXTRA_SIZE:
            raise TruncatedFileError("file too short for an LZMA header")
        decompressor = _lzma_decompressor(data[12:FILE_HEADER_SIZE + LZMA_EXTRA_SIZE])
        body, total = _collect(
            _lzma_chunks(decompressor, data[FILE_HEADER_SIZE + LZMA_EXTRA_SIZE:]),
            max_body, body_length, strict
        )
    elif signature[1:] == b"WS":
        raise UnsupportedCompressionError(
            f"unsupported compression signature {signature!r}"
        )
    else:
        raise MalformedHeaderError(f"not an SWF file (signature {signature!r})")

    if strict and total < body_length:
        raise TruncatedFileError(
            f"body is {total} bytes, header declares {body_length}"
        )
    if strict and not complete and total <= body_length:
        raise TruncatedFileError("zlib stream ends before its end marker")
    return data[:FILE_HEADER_SIZE], body


def _read_rect(body: bytes) -> Tuple[Rect, int]:
    """Read a bit-packed RECT, returning it and the number of bytes consumed."""
    if not body:
        raise TruncatedFileError("body ends before the stage rectangle")

    nbits = body[0] >> 3
    total_bits = 5 + 4 * nbits
    size = (total_bits + 7) // 8
    if len(body) < size:
        raise TruncatedFileError("body ends inside the stage rectangle")

    bits = int.from_bytes(body[:size], "big")
    shift = size * 8 - 5
    values = []
    for _ in range(4):
        shift -= nbits
        raw = (bits >> shift) & ((1 << nbits) - 1) if nbits else 0
        if nbits and raw & (1 << (nbits - 1)):
            raw -= 1 << nbits
        values.append(raw)

    x_min, x_max, y_min, y_max = values
    return Rect(x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max), size


def parse_header(data: bytes, strict: bool = True) -> SwfHeader:
    """
    Parse the header of an SWF file.

    Args:
        data: The complete file contents.
        strict: Reject files whose body is shorter than the declared length.

    Returns:
        SwfHeader with the stage rectangle in twips.

    Raises:
        ContainerParseError: On malformed input, unsupported compression or
            truncation.
    """
    file_header, body = decompress(data, strict=strict, max_body=BODY_PREFIX_SIZE)
    frame_size, offset = _read_rect(body)

    if len(body) < offset + 4:
        raise TruncatedFileError("body ends before the frame rate and frame count")

    # Frame rate is 8.8 fixed point, little-endian
    rate_raw, frame_count = struct.unpack_from("<HH", body, offset)

    return SwfHeader(
        signature=file_header[:3].decode("ascii"),
        version=file_header[3],
        file_length=struct.unpack_from("<I", file_header, 4)[0],
        frame_size=frame_size,
        frame_rate=rate_raw / 256.0,
        frame_count=frame_count,
    )
