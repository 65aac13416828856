"""
Fernet helpers for encrypted database backups.

``ENCRYPTION_KEY`` may be a real Fernet key (``Fernet.generate_key()``) or
any passphrase; a passphrase is hashed with SHA-256 and the digest is used
as the key material.
"""
import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken
from flask import current_app

from utils.errors import APIError


class EncryptionKeyError(APIError):
    def __init__(self, message='Encryption key not configured'):
        super().__init__(message, 500)


class DecryptionError(APIError):
    def __init__(self, message='Backup could not be decrypted with the configured key'):
        super().__init__(message, 400)


def derive_fernet_key(raw_key):
    """Return a valid Fernet key for *raw_key* (str or bytes)."""
    key_bytes = raw_key.encode('utf-8') if isinstance(raw_key, str) else raw_key
    try:
        Fernet(key_bytes)
        return key_bytes
    except (ValueError, TypeError):
        digest = hashlib.sha256(key_bytes).digest()
        return base64.urlsafe_b64encode(digest)


def get_fernet(raw_key=None):
    if raw_key is None:
        raw_key = current_app.config.get('ENCRYPTION_KEY')
    if not raw_key:
        raise EncryptionKeyError()
    return Fernet(derive_fernet_key(raw_key))


def encrypt_bytes(data, raw_key=None):
    return get_fernet(raw_key).encrypt(data)


def decrypt_bytes(token, raw_key=None):
    try:
        return get_fernet(raw_key).decrypt(token)
    except InvalidToken as exc:
        raise DecryptionError() from exc
