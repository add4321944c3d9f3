"""
lto_core.event
--------------
Defines Event, a minimal ledger event that an Account can sign, and the
SignableEvent protocol that Account.sign_event relies on.

Signing order matters:
1. signkey is set (it is part of the signed message)
2. signature is computed over canonical_message()
3. hash is computed last because it covers the signature
"""

from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional, Protocol, Union, runtime_checkable
from .utils import Encoding, b58d, b58e, canonical_json, encode, now_ms, sha256


@runtime_checkable
class SignableEvent(Protocol):
    signkey: Optional[str]
    signature: Optional[str]
    hash: Optional[bytes]

    def canonical_message(self) -> bytes: ...

    def compute_hash(self) -> bytes: ...


@dataclass
class Event:
    body: Any = None
    timestamp: int = field(default_factory=now_ms)
    previous: str = ""             # base58 hash of the preceding event
    signkey: Optional[str] = None  # base58 public sign key of the signer
    signature: Optional[str] = None
    hash: Optional[bytes] = None

    def canonical_message(self) -> bytes:
        if not self.signkey:
            raise ValueError("Event has no signkey; it must be set before building the message")
        parts = [
            b58e(canonical_json(self.body)),
            str(self.timestamp),
            self.previous,
            self.signkey,
        ]
        return "\n".join(parts).encode("utf-8")

    def compute_hash(self) -> bytes:
        if not self.signature:
            raise ValueError("Event is not signed; the hash covers the signature")
        return sha256(self.canonical_message() + b"\n" + self.signature.encode("utf-8"))

    def get_hash(self, encoding: Union[Encoding, str] = Encoding.BASE58) -> Optional[str]:
        return encode(self.hash, encoding) if self.hash is not None else None

    @property
    def is_signed(self) -> bool:
        return bool(self.signature) and self.hash is not None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["hash"] = self.get_hash()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        """Inverse of to_dict; the hash is read back from base58."""
        h = data.get("hash")
        return cls(
            body=data.get("body"),
            timestamp=data.get("timestamp", now_ms()),
            previous=data.get("previous", ""),
            signkey=data.get("signkey"),
            signature=data.get("signature"),
            hash=b58d(h) if h else None,
        )
