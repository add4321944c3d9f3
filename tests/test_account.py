import logging
import pytest
from lto_core import (
    Account, DecodingError, DecryptError, Encoding, EncodingError, Event,
    KeyMaterial, KeyPair, MissingKeyError,
)
from lto_core.utils import b58e, b64e, sha256
from conftest import make_account


def test_sign_and_verify_hello_base58(alice):
    signature = alice.sign("Hello", Encoding.BASE58)
    assert 86 <= len(signature) <= 88
    assert alice.sign("Hello", Encoding.BASE58) == signature
    assert alice.verify(signature, "Hello", Encoding.BASE58) is True
    assert alice.verify(signature, "Goodbye", Encoding.BASE58) is False


@pytest.mark.parametrize("encoding", [Encoding.RAW, Encoding.BASE58, Encoding.BASE64])
def test_sign_verify_each_encoding(alice, encoding):
    signature = alice.sign(b"payload", encoding)
    assert alice.verify(signature, b"payload", encoding)


def test_foreign_account_verifies(alice, public_only):
    signature = alice.sign("Hello")
    assert public_only.verify(signature, "Hello")
    with pytest.raises(MissingKeyError):
        public_only.sign("Hello")


def test_verify_malformed_signature_text(alice):
    with pytest.raises(EncodingError):
        alice.verify("0OIl", "Hello", Encoding.BASE58)


def test_verify_wrong_length_signature_is_false(alice):
    assert alice.verify(b58e(b"\x01" * 10), "Hello", Encoding.BASE58) is False


def test_account_from_address_has_no_keys():
    account = Account.from_address("3JmCa4jLVv7Yn2XkCnBUGsa7WNFVEMxAfWe", Encoding.BASE58)
    assert account.get_address(Encoding.BASE58) == "3JmCa4jLVv7Yn2XkCnBUGsa7WNFVEMxAfWe"
    assert account.get_public_sign_key() is None
    assert account.get_public_encrypt_key() is None
    with pytest.raises(MissingKeyError):
        account.sign("Hello")
    with pytest.raises(MissingKeyError):
        account.verify(b58e(b"\x00" * 64), "Hello")


def test_address_encodings(alice):
    raw = alice.raw_address
    assert alice.get_address() == b58e(raw)
    assert alice.get_address(Encoding.BASE64) == b64e(raw)
    assert alice.get_address(Encoding.RAW).encode("latin-1") == raw
    assert Account(alice.keys).get_address() is None


def test_public_keys(alice):
    assert alice.get_public_sign_key() == b58e(alice.keys.signing.public_key)
    assert alice.get_public_encrypt_key(Encoding.BASE64) == b64e(alice.keys.encryption.public_key)


def test_encrypt_for_and_decrypt_from(alice, bob):
    ciphertext = alice.encrypt_for(bob, "secret message")
    assert isinstance(ciphertext, str)
    assert bob.decrypt_from(alice, ciphertext) == b"secret message"


@pytest.mark.parametrize("encoding", [Encoding.BASE58, Encoding.BASE64])
def test_encrypt_for_text_safe_encoding(alice, bob, encoding):
    ciphertext = alice.encrypt_for(bob, b"\x00binary\xff", encoding)
    assert ciphertext.isascii()
    assert bob.decrypt_from(alice, ciphertext, encoding) == b"\x00binary\xff"


def test_decrypt_from_public_view_of_sender(alice, bob, public_only):
    ciphertext = alice.encrypt_for(bob, "hi")
    assert bob.decrypt_from(public_only, ciphertext) == b"hi"


def test_decrypt_error_names_sender(alice, bob):
    ciphertext = bytearray(alice.encrypt_for(bob, "hi").encode("latin-1"))
    ciphertext[0] ^= 0x01
    with pytest.raises(DecryptError) as exc:
        bob.decrypt_from(alice, bytes(ciphertext))
    assert alice.get_address(Encoding.BASE58) in str(exc.value)


def test_decrypt_error_without_sender_address(alice, bob):
    anonymous = Account(alice.keys)
    with pytest.raises(DecryptError, match="unknown"):
        bob.decrypt_from(anonymous, "\x00" * 40)


def test_decrypt_short_ciphertext(alice, bob):
    with pytest.raises(DecodingError):
        bob.decrypt_from(alice, "\x00" * 23)


def test_encrypt_missing_keys(alice, bob, public_only):
    with pytest.raises(MissingKeyError):
        public_only.encrypt_for(bob, "hi")
    with pytest.raises(MissingKeyError):
        alice.encrypt_for(make_account(encryption=False), "hi")


def test_sign_event(alice):
    event = Event(body={"foo": "bar"}, timestamp=1519862400000, previous="72gRWx4C1Egqz9xvUBCYVdgh7uLc5kmGbjXFhiknNCTW")
    signed = alice.sign_event(event)

    assert signed is event
    assert event.signkey == alice.get_public_sign_key(Encoding.BASE58)
    assert alice.verify(event.signature, event.canonical_message(), Encoding.BASE58)
    assert event.hash == sha256(event.canonical_message() + b"\n" + event.signature.encode())
    assert event.is_signed


def test_sign_event_without_secret_leaves_event_untouched(public_only):
    event = Event(body={"foo": "bar"})
    with pytest.raises(MissingKeyError):
        public_only.sign_event(event)
    assert event.signkey is None
    assert event.signature is None
    assert event.hash is None


def test_sign_event_accepts_any_signable(alice):
    class Anchor:
        signkey = signature = hash = None

        def canonical_message(self):
            return b"anchor:" + self.signkey.encode()

        def compute_hash(self):
            return sha256(self.signature.encode())

    anchor = alice.sign_event(Anchor())
    assert alice.verify(anchor.signature, anchor.canonical_message())
    assert anchor.hash == sha256(anchor.signature.encode())


def test_account_is_immutable(alice):
    with pytest.raises(AttributeError):
        alice.keys = KeyMaterial()


def test_repr_does_not_leak_secrets(alice):
    text = repr(alice)
    assert alice.get_address() in text
    assert b58e(bytes(alice.keys.signing.secret_key)) not in text
    assert repr(bytes(alice.keys.signing.secret_key)) not in text


def test_dict_roundtrip(alice):
    public = alice.to_dict(Encoding.BASE58)
    assert "secretkey" not in public["sign"]
    assert public["address"] == alice.get_address(Encoding.BASE58)

    restored = Account.from_dict(alice.to_dict(Encoding.BASE64, include_secret=True), Encoding.BASE64)
    assert restored == alice
    assert bytes(restored.keys.signing.secret_key) == bytes(alice.keys.signing.secret_key)
    assert restored.verify(alice.sign("Hello"), "Hello")


def test_default_encoding_from_environment(monkeypatch, alice):
    monkeypatch.setenv("LTO_DEFAULT_ENCODING", "base64")
    assert alice.get_address() == b64e(alice.raw_address)
    signature = alice.sign("Hello")
    assert alice.verify(signature, "Hello", Encoding.BASE64)


def test_operations_log_at_debug(caplog, alice, bob):
    caplog.set_level(logging.DEBUG, logger="lto_core")
    alice.encrypt_for(bob, "hi")
    alice.sign("hi")
    assert f"encrypted message for {bob.get_address()}" in caplog.text
    assert "signing 2 byte message" in caplog.text
    assert bytes(alice.keys.signing.secret_key).hex() not in caplog.text


def test_public_only_keys_with_only_public_halves():
    account = Account(KeyMaterial(signing=KeyPair(b"\x01" * 32)), address=b"\x01" * 26)
    assert account.get_public_sign_key() == b58e(b"\x01" * 32)
    assert account.get_public_encrypt_key() is None


def test_sign_event_failure_restores_event(alice):
    class BrokenHash(Event):
        def compute_hash(self):
            raise RuntimeError("hash backend unavailable")

    event = BrokenHash(body={"foo": "bar"}, signkey="old-key", signature="old-sig", hash=b"old")
    with pytest.raises(RuntimeError):
        alice.sign_event(event)
    assert event.signkey == "old-key"
    assert event.signature == "old-sig"
    assert event.hash == b"old"


def test_decrypt_from_returns_bytes_for_text_input(alice, bob):
    ciphertext = alice.encrypt_for(bob, "héllo")
    plaintext = bob.decrypt_from(alice, ciphertext)
    assert plaintext == "héllo".encode("utf-8")
    assert plaintext.decode("utf-8") == "héllo"
