"""
lto_core.utils
--------------
Codec for keys, addresses and signatures plus small helpers for canonical
JSON serialization, hashing and timestamps.

Three textual encodings are supported:

- raw:    bytes mapped one-to-one onto code points 0-255; binary-safe only
- base58: Bitcoin alphabet, no checksum, no version byte
- base64: standard alphabet, padded
"""

from __future__ import annotations
import base64, binascii, hashlib, json, time
from enum import Enum
from typing import Any, Dict, Union
import base58
from .errors import EncodingError

BytesLike = Union[bytes, bytearray, memoryview]
TextOrBytes = Union[str, bytes, bytearray]


class Encoding(str, Enum):
    RAW = "raw"
    BASE58 = "base58"
    BASE64 = "base64"

    @classmethod
    def parse(cls, value: Union["Encoding", str]) -> "Encoding":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise EncodingError(f"Unknown encoding '{value}'; expected raw, base58 or base64") from None


def b58e(b: BytesLike) -> str:
    return base58.b58encode(bytes(b)).decode("ascii")

_B58_ALPHABET = frozenset(base58.BITCOIN_ALPHABET.decode("ascii"))

def b58d(s: TextOrBytes) -> bytes:
    # b58decode strips trailing whitespace, so check the alphabet first
    text = s.decode("latin-1") if isinstance(s, (bytes, bytearray)) else s
    bad = sorted(set(text) - _B58_ALPHABET)
    if bad:
        raise EncodingError(f"Invalid base58 text: characters {bad!r} are outside the alphabet")
    try:
        return base58.b58decode(s)
    except ValueError as e:
        raise EncodingError(f"Invalid base58 text: {e}") from e

def b64e(b: BytesLike) -> str:
    return base64.b64encode(bytes(b)).decode("ascii")

def b64d(s: TextOrBytes) -> bytes:
    try:
        return base64.b64decode(s, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Invalid base64 text: {e}") from e


def encode(data: BytesLike, encoding: Union[Encoding, str]) -> str:
    encoding = Encoding.parse(encoding)
    if encoding is Encoding.BASE58:
        return b58e(data)
    if encoding is Encoding.BASE64:
        return b64e(data)
    return bytes(data).decode("latin-1")

def decode(text: TextOrBytes, encoding: Union[Encoding, str]) -> bytes:
    encoding = Encoding.parse(encoding)
    if encoding is Encoding.BASE58:
        return b58d(text)
    if encoding is Encoding.BASE64:
        return b64d(text)
    if isinstance(text, (bytes, bytearray)):
        return bytes(text)
    try:
        return text.encode("latin-1")
    except UnicodeEncodeError as e:
        raise EncodingError("Raw text contains characters outside the byte range") from e


def to_bytes(data: TextOrBytes) -> bytes:
    # Text messages are signed / sealed as UTF-8
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)

def now_ms() -> int:
    return int(time.time() * 1000)

def canonical_json(obj: Dict[str, Any]) -> bytes:
    # Deterministic, minimal JSON for signing
    return json.dumps(obj, separators=(",", ":"), sort_keys=True, ensure_ascii=False).encode("utf-8")

def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()
