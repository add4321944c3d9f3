from __future__ import annotations
from typing import Optional


class LTOError(Exception):
    pass


class MissingKeyError(LTOError):
    """An operation needs a key half that this KeyMaterial does not hold."""


class InvalidKeyError(LTOError, ValueError):
    """A key half is present but has the wrong size for its primitive."""


class EncodingError(LTOError, ValueError):
    """Text is not valid for the requested Encoding."""


class DecodingError(LTOError, ValueError):
    """Ciphertext is too short to carry a nonce."""


class DecryptError(LTOError):
    """Box authentication failed: wrong key, corrupted ciphertext or tampered nonce."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message)
        self.address = address
