# Ed25519 (crypto_sign)
SIGNATURE_SIZE = 64
PUBLIC_KEY_SIZE = 32
SEED_SIZE = 32

# Curve25519 + XSalsa20-Poly1305 (crypto_box)
NONCE_SIZE = 24
BOX_KEY_SIZE = 32

DEFAULT_ENCODING = "base58"
DEFAULT_LOG_LEVEL = "INFO"
