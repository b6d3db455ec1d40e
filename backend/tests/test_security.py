import pytest
from cryptography.fernet import Fernet

from studynotes.core.security import ApiKeyCipher, get_password_hash, verify_password
from studynotes.exceptions import InternalError


def test_password_hash_roundtrip():
    hashed = get_password_hash("secret1", rounds=4)
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_password_hashes_are_salted():
    assert get_password_hash("secret1", rounds=4) != get_password_hash("secret1", rounds=4)


@pytest.mark.parametrize("bad_hash", ["", "not-a-bcrypt-hash", "$2b$04$short"])
def test_verify_against_malformed_hash(bad_hash):
    assert verify_password("secret1", bad_hash) is False


def test_cipher_roundtrip():
    cipher = ApiKeyCipher("test-secret-key")
    token = cipher.encrypt("sk-test-123")
    assert "sk-test-123" not in token
    assert cipher.decrypt(token) == "sk-test-123"


def test_cipher_is_derived_from_secret():
    token = ApiKeyCipher("test-secret-key").encrypt("sk-test-123")
    assert ApiKeyCipher("test-secret-key").decrypt(token) == "sk-test-123"
    with pytest.raises(InternalError) as exc_info:
        ApiKeyCipher("another-secret").decrypt(token)
    assert exc_info.value.status_code == 500


def test_cipher_with_explicit_key():
    key = Fernet.generate_key().decode()
    cipher = ApiKeyCipher("ignored-secret", encryption_key=key)
    token = cipher.encrypt("sk-test-123")
    assert Fernet(key.encode()).decrypt(token.encode()) == b"sk-test-123"
