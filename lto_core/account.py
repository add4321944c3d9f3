"""
lto_core.account
----------------
Account: the public identity object of a ledger participant.

An account pairs optional raw address bytes with KeyMaterial and exposes
address/key formatting, detached signatures, pairwise box encryption and
event signing. Accounts are immutable; sign_event mutates only the event.

Foreign accounts (known only by address or public keys) are representable:
every operation that needs an absent key half raises MissingKeyError.
"""

from __future__ import annotations
from typing import Any, Dict, Optional, TypeVar, Union
from . import crypto
from .config import resolve_encoding
from .errors import MissingKeyError
from .event import SignableEvent
from .keys import KeyMaterial
from .logger import get_logger
from .utils import BytesLike, Encoding, TextOrBytes, decode, encode

logger = get_logger("lto_core.account")

E = TypeVar("E", bound=SignableEvent)
EncodingArg = Union[Encoding, str, None]


class Account:
    __slots__ = ("_address", "_keys")

    def __init__(self, keys: Optional[KeyMaterial] = None, address: Optional[BytesLike] = None):
        object.__setattr__(self, "_keys", keys if keys is not None else KeyMaterial())
        object.__setattr__(self, "_address", bytes(address) if address is not None else None)

    def __setattr__(self, name, value):
        raise AttributeError("Account is immutable")

    def __repr__(self) -> str:
        return f"Account(address={self.get_address(Encoding.BASE58)!r}, keys={self._keys!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._address == other._address and self._keys == other._keys

    def __hash__(self) -> int:
        return hash((self._address, self._keys))

    # ---------------------------
    # Identity
    # ---------------------------
    @property
    def keys(self) -> KeyMaterial:
        return self._keys

    @property
    def raw_address(self) -> Optional[bytes]:
        return self._address

    def get_address(self, encoding: EncodingArg = None) -> Optional[str]:
        if self._address is None:
            return None
        return encode(self._address, resolve_encoding(encoding))

    def get_public_sign_key(self, encoding: EncodingArg = None) -> Optional[str]:
        return self._keys.public_signing_key(encoding)

    def get_public_encrypt_key(self, encoding: EncodingArg = None) -> Optional[str]:
        return self._keys.public_encryption_key(encoding)

    # ---------------------------
    # Signatures
    # ---------------------------
    def sign(self, message: TextOrBytes, encoding: EncodingArg = None) -> str:
        """Create an encoded detached signature of a message."""
        signature = crypto.sign_detached(self._keys, message)
        return encode(signature, resolve_encoding(encoding))

    def verify(self, signature: TextOrBytes, message: TextOrBytes, encoding: EncodingArg = None) -> bool:
        """
        Verify an encoded detached signature of a message.

        Returns False for a mismatching or wrongly sized signature. Raises
        EncodingError when the signature text is malformed for `encoding` and
        MissingKeyError when this account has no public sign key.
        """
        raw = decode(signature, resolve_encoding(encoding))
        return crypto.verify_detached(self._keys, raw, message)

    def sign_event(self, event: E) -> E:
        """
        Sign an event in place and return it.

        The caller must hold exclusive access to the event for the duration
        of the call. If signing fails the event keeps its previous signkey,
        signature and hash.
        """
        if self._keys.signing is None or not self._keys.signing.has_secret:
            raise MissingKeyError("Unable to sign event; no secret sign key")

        previous = (event.signkey, event.signature, event.hash)
        try:
            event.signkey = self.get_public_sign_key(Encoding.BASE58)
            event.signature = self.sign(event.canonical_message(), Encoding.BASE58)
            event.hash = event.compute_hash()
        except Exception:
            event.signkey, event.signature, event.hash = previous
            raise
        logger.debug(f"signed event as {self.get_address(Encoding.BASE58) or event.signkey}")
        return event

    # ---------------------------
    # Encryption
    # ---------------------------
    def encrypt_for(self, recipient: "Account", message: TextOrBytes, encoding: EncodingArg = Encoding.RAW) -> str:
        """
        Encrypt a message for another account. The nonce is appended.

        With the default RAW encoding the result carries the wire bytes
        (sealed || nonce) one-to-one as text; pass BASE58 or BASE64 for
        text-safe transport.
        """
        ciphertext = crypto.encrypt_for(self._keys, recipient.keys, message)
        logger.debug(f"encrypted message for {recipient.get_address(Encoding.BASE58) or 'unknown'}")
        return encode(ciphertext, Encoding.parse(encoding or Encoding.RAW))

    def decrypt_from(self, sender: "Account", ciphertext: TextOrBytes, encoding: EncodingArg = Encoding.RAW) -> bytes:
        """
        Decrypt a message from another account.

        Returns the plaintext as bytes, even when encrypt_for was given a str
        (text is sealed as UTF-8; decode the result to get it back).

        Raises DecodingError when the ciphertext cannot hold a nonce and
        DecryptError, naming the sender's address, when authentication fails.
        """
        raw = decode(ciphertext, Encoding.parse(encoding or Encoding.RAW))
        return crypto.decrypt_from(self._keys, sender.keys, raw, sender_address=sender.get_address(Encoding.BASE58))

    # ---------------------------
    # Serialization
    # ---------------------------
    def to_dict(self, encoding: EncodingArg = None, include_secret: bool = False) -> Dict[str, Any]:
        d = self._keys.to_dict(encoding, include_secret)
        d["address"] = self.get_address(encoding)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any], encoding: EncodingArg = None) -> "Account":
        """Inverse of to_dict; every value is decoded with `encoding`."""
        address = data.get("address")
        return cls(
            keys=KeyMaterial.from_dict(data, encoding),
            address=decode(address, resolve_encoding(encoding)) if address else None,
        )

    @classmethod
    def from_address(cls, address: TextOrBytes, encoding: EncodingArg = None) -> "Account":
        """A foreign account known only by its address."""
        return cls(address=decode(address, resolve_encoding(encoding)))
