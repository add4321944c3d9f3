"""
lto_core.keys
-------------
Key material backing an account identity.

- SecretBytes: mutable buffer for secret halves; redacted from repr/str,
  zeroed by wipe() and on garbage collection, never pickled
- KeyPair:     a public key plus an optional secret half
- KeyMaterial: optional signing (Ed25519) and encryption (X25519) pairs

Key generation is handled elsewhere; this module only holds and formats keys.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
import hmac
from .config import resolve_encoding
from .errors import MissingKeyError
from .utils import BytesLike, Encoding, decode, encode


class SecretBytes:
    __slots__ = ("_buf", "_wiped")

    def __init__(self, data: BytesLike):
        self._buf = bytearray(data)
        self._wiped = False

    def __bytes__(self) -> bytes:
        if self._wiped:
            raise MissingKeyError("Secret key material has been wiped")
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecretBytes):
            return NotImplemented
        return hmac.compare_digest(self._buf, other._buf)

    __hash__ = None

    def __repr__(self) -> str:
        return f"SecretBytes(<{len(self._buf)} bytes redacted>)"

    __str__ = __repr__

    def __reduce__(self):
        raise TypeError("SecretBytes cannot be pickled")

    @property
    def wiped(self) -> bool:
        return self._wiped

    def wipe(self) -> None:
        for i in range(len(self._buf)):
            self._buf[i] = 0
        self._wiped = True

    def __del__(self):
        if getattr(self, "_buf", None) is not None:
            self.wipe()


@dataclass(frozen=True)
class KeyPair:
    public_key: bytes
    secret_key: Optional[SecretBytes] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "public_key", bytes(self.public_key))
        if self.secret_key is not None and not isinstance(self.secret_key, SecretBytes):
            object.__setattr__(self, "secret_key", SecretBytes(self.secret_key))

    @property
    def has_secret(self) -> bool:
        return self.secret_key is not None and not self.secret_key.wiped

    @classmethod
    def from_dict(cls, data: Dict[str, Any], encoding: Union[Encoding, str, None] = None) -> "KeyPair":
        encoding = resolve_encoding(encoding)
        secret = data.get("secretkey")
        return cls(
            public_key=decode(data["publickey"], encoding),
            secret_key=decode(secret, encoding) if secret else None,
        )

    def to_dict(self, encoding: Union[Encoding, str, None] = None, include_secret: bool = False) -> Dict[str, str]:
        encoding = resolve_encoding(encoding)
        d = {"publickey": encode(self.public_key, encoding)}
        if include_secret and self.has_secret:
            d["secretkey"] = encode(bytes(self.secret_key), encoding)
        return d


@dataclass(frozen=True)
class KeyMaterial:
    signing: Optional[KeyPair] = None
    encryption: Optional[KeyPair] = None

    def public_signing_key(self, encoding: Union[Encoding, str, None] = None) -> Optional[str]:
        if self.signing is None:
            return None
        return encode(self.signing.public_key, resolve_encoding(encoding))

    def public_encryption_key(self, encoding: Union[Encoding, str, None] = None) -> Optional[str]:
        if self.encryption is None:
            return None
        return encode(self.encryption.public_key, resolve_encoding(encoding))

    def wipe(self) -> None:
        """Zero every secret half held. Public halves remain usable."""
        for pair in (self.signing, self.encryption):
            if pair is not None and pair.secret_key is not None:
                pair.secret_key.wipe()

    @classmethod
    def from_dict(cls, data: Dict[str, Any], encoding: Union[Encoding, str, None] = None) -> "KeyMaterial":
        """
        Build key material from the legacy account layout:

            {"sign":    {"publickey": ..., "secretkey": ...},
             "encrypt": {"publickey": ..., "secretkey": ...}}

        Either section, and any secretkey, may be missing.
        """
        sign = data.get("sign")
        enc = data.get("encrypt")
        return cls(
            signing=KeyPair.from_dict(sign, encoding) if sign else None,
            encryption=KeyPair.from_dict(enc, encoding) if enc else None,
        )

    def to_dict(self, encoding: Union[Encoding, str, None] = None, include_secret: bool = False) -> Dict[str, Any]:
        d: Dict[str, Any] = {}
        if self.signing is not None:
            d["sign"] = self.signing.to_dict(encoding, include_secret)
        if self.encryption is not None:
            d["encrypt"] = self.encryption.to_dict(encoding, include_secret)
        return d
