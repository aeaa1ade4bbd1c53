"""
Sensitive Data Vault — AES-256-CBC encryption for secrets the engine stores.

Ciphertext format: "<iv hex>:<ciphertext hex>". The AES key is derived once
with scrypt from the configured secret (or a random per-process secret).
"""

from __future__ import annotations

import logging
import os
import secrets

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from manifesto.config import settings
from manifesto.errors import InvalidInputError, ManifestoError

logger = logging.getLogger("manifesto.vault")

KEY_SALT = b"manifesto-enforcer"
KEY_LENGTH = 32
IV_LENGTH = 16


def derive_key(secret: str) -> bytes:
    kdf = Scrypt(salt=KEY_SALT, length=KEY_LENGTH, n=2**14, r=8, p=1)
    return kdf.derive(secret.encode("utf-8"))


class SensitiveDataVault:
    """Encrypts and decrypts strings with a key derived from one secret."""

    def __init__(self, secret: str | None = None) -> None:
        secret = secret or settings.encryption_key or secrets.token_hex(32)
        self._key: bytes | None = derive_key(secret)

    def _require_key(self) -> bytes:
        if self._key is None:
            raise ManifestoError("Vault has been disposed")
        return self._key

    def encrypt(self, data: str) -> str:
        """Encrypt a non-empty string. A fresh random IV is used every call."""
        if not isinstance(data, str) or not data:
            raise InvalidInputError("Invalid data for encryption: must be non-empty string")

        iv = os.urandom(IV_LENGTH)
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(data.encode("utf-8")) + padder.finalize()

        encryptor = Cipher(algorithms.AES(self._require_key()), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        return f"{iv.hex()}:{ciphertext.hex()}"

    def decrypt(self, encrypted: str) -> str:
        """Reverse `encrypt`. Malformed or tampered input raises InvalidInputError."""
        if not isinstance(encrypted, str) or not encrypted:
            raise InvalidInputError("Invalid encrypted data: must be non-empty string")

        parts = encrypted.split(":")
        if len(parts) != 2:
            raise InvalidInputError("Invalid encrypted data format")

        key = self._require_key()
        try:
            iv = bytes.fromhex(parts[0])
            ciphertext = bytes.fromhex(parts[1])
            decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()
            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            plaintext = unpadder.update(padded) + unpadder.finalize()
            return plaintext.decode("utf-8")
        except ValueError as e:
            raise InvalidInputError(f"Decryption failed: {e}") from e

    def dispose(self) -> None:
        """Drop the key; the vault is unusable afterwards."""
        self._key = None
        logger.debug("Vault disposed")
