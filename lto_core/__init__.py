"""
LTO Core Package
================
Cryptographic identity primitives for ledger accounts.

Provides:
- Account: address, detached Ed25519 signatures, pairwise box encryption,
  event signing
- KeyMaterial / KeyPair: signing and encryption keys with protected secrets
- Codec for raw, base58 and base64 text
"""

from .account import Account
from .errors import DecodingError, DecryptError, EncodingError, InvalidKeyError, LTOError, MissingKeyError
from .event import Event, SignableEvent
from .keys import KeyMaterial, KeyPair, SecretBytes
from .utils import Encoding, decode, encode

__all__ = [
    "Account",
    "Event",
    "SignableEvent",
    "KeyMaterial",
    "KeyPair",
    "SecretBytes",
    "Encoding",
    "encode",
    "decode",
    "LTOError",
    "MissingKeyError",
    "InvalidKeyError",
    "EncodingError",
    "DecodingError",
    "DecryptError",
]
