import os
import pytest
from cryptography.hazmat.primitives.asymmetric import ed25519, x25519
from lto_core import Account, KeyMaterial, KeyPair

# Key generation lives outside lto_core; tests make their own keys.

def ed25519_generate():
    sk = ed25519.Ed25519PrivateKey.generate()
    return sk.private_bytes_raw(), sk.public_key().public_bytes_raw()

def x25519_generate():
    sk = x25519.X25519PrivateKey.generate()
    return sk.private_bytes_raw(), sk.public_key().public_bytes_raw()


def make_keys(signing=True, encryption=True, secrets=True) -> KeyMaterial:
    sign_pair = enc_pair = None
    if signing:
        priv, pub = ed25519_generate()
        sign_pair = KeyPair(pub, priv if secrets else None)
    if encryption:
        priv, pub = x25519_generate()
        enc_pair = KeyPair(pub, priv if secrets else None)
    return KeyMaterial(signing=sign_pair, encryption=enc_pair)


def make_account(**kwargs) -> Account:
    # LTO addresses are 26 raw bytes
    return Account(make_keys(**kwargs), address=b"\x01L" + os.urandom(24))


@pytest.fixture
def alice():
    return make_account()


@pytest.fixture
def bob():
    return make_account()


@pytest.fixture
def public_only(alice):
    """Alice as seen by others: address and public keys only."""
    return Account(
        KeyMaterial(
            signing=KeyPair(alice.keys.signing.public_key),
            encryption=KeyPair(alice.keys.encryption.public_key),
        ),
        address=alice.raw_address,
    )
