"""
Model Persistence

Binary layout, little endian:

    magic        4s    b"AAFM"
    version      u16
    authors      u32 count, then per author: u32 length + UTF-8 bytes
    tokens       u32 count, then per token: u32 length + UTF-8 bytes + A x u32
    totals       A x u32
    grand_total  u32
"""

import os
from pathlib import Path
import struct
import tempfile

from author_attribution.errors import (
    DeserializationFailure,
    ReadFailure,
    SerializationFailure,
    WriteFailure,
)
from author_attribution.logging_utils import get_logger
from author_attribution.model.frequency import FrequencyModel

logger = get_logger(__name__)

MAGIC = b"AAFM"
FORMAT_VERSION = 1

_HEADER = struct.Struct("<4sH")
_U32 = struct.Struct("<I")


def dumps(model: FrequencyModel) -> bytes:
    """Encode a model; counts that don't fit in u32 raise SerializationFailure."""
    author_count = len(model.authors)
    vector = struct.Struct(f"<{author_count}I")
    parts = [_HEADER.pack(MAGIC, FORMAT_VERSION)]

    try:
        parts.append(_U32.pack(author_count))
        for author in model.authors:
            parts.append(_pack_str(author))

        parts.append(_U32.pack(len(model.token_author_counts)))
        for token, counts in model.token_author_counts.items():
            parts.append(_pack_str(token))
            parts.append(vector.pack(*counts))

        parts.append(vector.pack(*model.author_token_totals))
        parts.append(_U32.pack(model.grand_total))
    except (struct.error, UnicodeEncodeError) as exc:
        raise SerializationFailure(f"Failed to serialize model: {exc}") from exc

    return b"".join(parts)


def loads(data: bytes) -> FrequencyModel:
    """Decode a model, raising DeserializationFailure for anything malformed."""
    reader = _Reader(data)
    try:
        magic, version = reader.unpack(_HEADER)
        if magic != MAGIC:
            raise DeserializationFailure("Not a frequency model file (bad magic)")
        if version != FORMAT_VERSION:
            raise DeserializationFailure(f"Unsupported model format version {version}")

        author_count = reader.u32()
        authors = [reader.string() for _ in range(author_count)]

        vector = struct.Struct(f"<{author_count}I")
        token_count = reader.u32()
        token_author_counts = {}
        for _ in range(token_count):
            token = reader.string()
            if token in token_author_counts:
                raise DeserializationFailure(f"Duplicate token {token!r}")
            token_author_counts[token] = reader.unpack(vector)

        totals = reader.unpack(vector)
        grand_total = reader.u32()
    except (struct.error, UnicodeDecodeError) as exc:
        raise DeserializationFailure(f"Failed to deserialize model: {exc}") from exc

    if reader.remaining:
        raise DeserializationFailure(f"{reader.remaining} unexpected trailing bytes")

    try:
        return FrequencyModel(
            authors=tuple(authors),
            token_author_counts=token_author_counts,
            author_token_totals=totals,
            grand_total=grand_total,
        )
    except ValueError as exc:
        raise DeserializationFailure(f"Inconsistent model data: {exc}") from exc


def save(model: FrequencyModel, destination: Path | str) -> Path:
    """
    Write a model to disk, creating missing parent directories.

    The bytes go to a temporary file next to the destination, which is then
    renamed over it, so an existing model is never left half-written.
    """
    destination = Path(destination)
    data = dumps(model)

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp"
        )
    except OSError as exc:
        raise WriteFailure(destination, exc.strerror or str(exc)) from exc

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, destination)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise WriteFailure(destination, exc.strerror or str(exc)) from exc

    logger.info("Model saved to %s (%d bytes)", destination, len(data))
    return destination


def load(source: Path | str) -> FrequencyModel:
    """Read a model written by save()."""
    source = Path(source)
    try:
        data = source.read_bytes()
    except OSError as exc:
        raise ReadFailure(source, exc.strerror or str(exc)) from exc

    model = loads(data)
    logger.info("Loaded %s", model)
    return model


def _pack_str(value: str) -> bytes:
    encoded = value.encode("utf-8")
    return _U32.pack(len(encoded)) + encoded


class _Reader:
    """Sequential reader over a bytes buffer."""

    def __init__(self, data: bytes):
        self.data = memoryview(data)
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos

    def unpack(self, fmt: struct.Struct) -> tuple:
        values = fmt.unpack_from(self.data, self.pos)
        self.pos += fmt.size
        return values

    def u32(self) -> int:
        return self.unpack(_U32)[0]

    def string(self) -> str:
        length = self.u32()
        if length > self.remaining:
            raise DeserializationFailure("Truncated string")
        raw = bytes(self.data[self.pos:self.pos + length])
        self.pos += length
        return raw.decode("utf-8")
