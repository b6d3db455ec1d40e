import base64
import hashlib
from typing import Optional

import bcrypt
from cryptography.fernet import Fernet, InvalidToken

from ..exceptions import InternalError
import logging

logger = logging.getLogger(__name__)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash"""
    try:
        password_bytes = plain_password.encode('utf-8')
        if isinstance(hashed_password, str):
            hashed_password_bytes = hashed_password.encode('utf-8')
        else:
            hashed_password_bytes = hashed_password
        return bcrypt.checkpw(password_bytes, hashed_password_bytes)
    except (ValueError, TypeError) as e:
        logger.error(f"Password verification failed: {e}")
        return False


def get_password_hash(password: str, rounds: int = 12) -> str:
    """Hash a password using bcrypt"""
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


class ApiKeyCipher:
    """Symmetric encryption for user API keys stored at rest"""

    def __init__(self, secret_key: str, encryption_key: Optional[str] = None):
        if encryption_key:
            key = encryption_key.encode('utf-8')
        else:
            # Fernet wants 32 url-safe base64-encoded bytes
            key = base64.urlsafe_b64encode(hashlib.sha256(secret_key.encode('utf-8')).digest())
        self._fernet = Fernet(key)

    def encrypt(self, api_key: str) -> str:
        return self._fernet.encrypt(api_key.encode('utf-8')).decode('utf-8')

    def decrypt(self, token: str) -> str:
        try:
            return self._fernet.decrypt(token.encode('utf-8')).decode('utf-8')
        except InvalidToken:
            logger.error("Stored API key could not be decrypted; was the encryption key rotated?")
            raise InternalError("Failed to read API key")
