"""Text decoding utilities."""

from __future__ import annotations

import codecs
import os
from pathlib import Path

import chardet


def detect_encoding(raw: bytes) -> str:
    """Detect the encoding of a byte payload."""

    if raw.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    detection = chardet.detect(raw)
    return detection.get("encoding") or "utf-8"


def decode_text(raw: bytes, charset: str | None = None) -> str:
    """Decode ``raw`` using ``charset`` when given, otherwise a detected encoding."""

    encoding = charset or detect_encoding(raw)
    if encoding.lower().replace("_", "-") in {"utf-8", "utf8"}:
        encoding = "utf-8-sig"
    try:
        return raw.decode(encoding, errors="replace")
    except LookupError:
        return raw.decode("utf-8-sig", errors="replace")


def read_text(path: os.PathLike[str] | str) -> str:
    """Read a text file whose encoding is not known in advance."""

    return decode_text(Path(path).read_bytes())
