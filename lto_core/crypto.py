"""
lto_core.crypto
---------------
Signing engine and box cipher behind an Account:

- Ed25519: detached signatures (sign_detached / verify_detached)
- NaCl box (X25519 + XSalsa20-Poly1305): pairwise authenticated encryption
  (encrypt_for / decrypt_from)

Encrypted payload wire format: sealed || nonce, the 24-byte nonce always last.
"""

from __future__ import annotations
from typing import Optional
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519
from nacl.exceptions import CryptoError
from nacl.public import Box, PrivateKey, PublicKey
import nacl.utils
from .constants import BOX_KEY_SIZE, NONCE_SIZE, PUBLIC_KEY_SIZE, SEED_SIZE, SIGNATURE_SIZE
from .errors import DecodingError, DecryptError, InvalidKeyError, MissingKeyError
from .keys import KeyMaterial
from .logger import get_logger
from .utils import TextOrBytes, to_bytes

logger = get_logger("lto_core.crypto")


# --------- key access ----------
def _signing_secret(keys: KeyMaterial) -> bytes:
    if keys.signing is None or not keys.signing.has_secret:
        raise MissingKeyError("Unable to sign message; no secret sign key")
    secret = bytes(keys.signing.secret_key)
    if len(secret) not in (SEED_SIZE, SEED_SIZE + PUBLIC_KEY_SIZE):
        raise InvalidKeyError(f"Secret sign key must be {SEED_SIZE} or {SEED_SIZE + PUBLIC_KEY_SIZE} bytes, got {len(secret)}")
    return secret

def _signing_public(keys: KeyMaterial) -> bytes:
    if keys.signing is None:
        raise MissingKeyError("Unable to verify message; no public sign key")
    return keys.signing.public_key

def _encryption_secret(keys: KeyMaterial, action: str) -> bytes:
    if keys.encryption is None or not keys.encryption.has_secret:
        raise MissingKeyError(f"Unable to {action} message; no secret encryption key")
    secret = bytes(keys.encryption.secret_key)
    if len(secret) != BOX_KEY_SIZE:
        raise InvalidKeyError(f"Secret encryption key must be {BOX_KEY_SIZE} bytes, got {len(secret)}")
    return secret

def _encryption_public(keys: KeyMaterial, action: str, party: str) -> bytes:
    if keys.encryption is None:
        raise MissingKeyError(f"Unable to {action} message; no public encryption key for {party}")
    public = keys.encryption.public_key
    if len(public) != BOX_KEY_SIZE:
        raise InvalidKeyError(f"Public encryption key for {party} must be {BOX_KEY_SIZE} bytes, got {len(public)}")
    return public


# --------- Ed25519 (sign/verify) ----------
def ed25519_sign(secret: bytes, data: bytes) -> bytes:
    # 64-byte libsodium secret keys are seed || public key
    try:
        sk = ed25519.Ed25519PrivateKey.from_private_bytes(secret[:SEED_SIZE])
    except ValueError as e:
        raise InvalidKeyError(f"Invalid secret sign key: {e}") from e
    return sk.sign(data)

def ed25519_verify(pub_raw: bytes, sig: bytes, data: bytes) -> bool:
    try:
        ed25519.Ed25519PublicKey.from_public_bytes(pub_raw).verify(sig, data)
        return True
    except (InvalidSignature, ValueError):
        return False


def sign_detached(keys: KeyMaterial, message: TextOrBytes) -> bytes:
    secret = _signing_secret(keys)
    data = to_bytes(message)
    logger.debug(f"signing {len(data)} byte message")
    return ed25519_sign(secret, data)


def verify_detached(keys: KeyMaterial, signature: bytes, message: TextOrBytes) -> bool:
    public = _signing_public(keys)
    # Malformed lengths never reach the primitive
    if len(signature) != SIGNATURE_SIZE or len(public) != PUBLIC_KEY_SIZE:
        logger.debug(f"rejecting signature: {len(signature)} byte signature, {len(public)} byte public key")
        return False
    return ed25519_verify(public, bytes(signature), to_bytes(message))


# --------- X25519 box (encrypt/decrypt) ----------
def random_nonce() -> bytes:
    return nacl.utils.random(NONCE_SIZE)

def _box(secret: bytes, public: bytes) -> Box:
    # nacl raises its ValueError/TypeError (both CryptoError) for bad keys
    try:
        return Box(PrivateKey(secret), PublicKey(public))
    except CryptoError as e:
        raise InvalidKeyError(f"Invalid encryption key: {e}") from e

def shared_key(secret: bytes, public: bytes) -> bytes:
    """Precomputed box key; equal for (a_secret, b_public) and (b_secret, a_public)."""
    return _box(secret, public).shared_key()


def encrypt_for(sender: KeyMaterial, recipient: KeyMaterial, message: TextOrBytes) -> bytes:
    secret = _encryption_secret(sender, "encrypt")
    public = _encryption_public(recipient, "encrypt", "recipient")

    nonce = random_nonce()
    sealed = _box(secret, public).encrypt(to_bytes(message), nonce).ciphertext
    logger.debug(f"sealed {len(sealed)} byte box")
    return sealed + nonce


def decrypt_from(
    recipient: KeyMaterial,
    sender: KeyMaterial,
    ciphertext: bytes,
    sender_address: Optional[str] = None,
) -> bytes:
    secret = _encryption_secret(recipient, "decrypt")
    public = _encryption_public(sender, "decrypt", "sender")

    if len(ciphertext) < NONCE_SIZE:
        raise DecodingError(f"Ciphertext of {len(ciphertext)} bytes is too short to contain a {NONCE_SIZE} byte nonce")

    split = len(ciphertext) - NONCE_SIZE
    sealed, nonce = bytes(ciphertext[:split]), bytes(ciphertext[split:])

    box = _box(secret, public)
    try:
        return box.decrypt(sealed, nonce)
    except CryptoError as e:
        who = sender_address or "unknown"
        logger.warning(f"failed to decrypt message from {who}")
        raise DecryptError(f"Failed to decrypt message from {who}", address=sender_address) from e
