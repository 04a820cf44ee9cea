"""AES-GCM encryption of sensitive patient fields."""

from __future__ import annotations

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

_NONCE_SIZE = 12
_KEY_SIZE = 32


class CryptoError(ValueError):
    """Raised when a key is malformed or data cannot be encrypted or decrypted."""


def parse_key(key: str) -> bytes:
    """Accept a 64-character hex key or a raw 32-byte string key."""
    raw = key.encode("utf-8")
    if len(raw) == 2 * _KEY_SIZE:
        try:
            decoded = binascii.unhexlify(raw)
        except (binascii.Error, ValueError) as exc:
            raise CryptoError("invalid hex key format") from exc
        if len(decoded) != _KEY_SIZE:
            raise CryptoError("key must be 32 bytes long")
        return decoded
    if len(raw) != _KEY_SIZE:
        raise CryptoError("key must be 32 bytes long")
    return raw


def encrypt_aes(plaintext: str, key: str) -> str:
    """Encrypt text; the result is base64 of nonce followed by ciphertext and tag."""
    cipher = AESGCM(parse_key(key))
    nonce = os.urandom(_NONCE_SIZE)
    sealed = cipher.encrypt(nonce, plaintext.encode("utf-8"), None)
    return base64.b64encode(nonce + sealed).decode("ascii")


def decrypt_aes(ciphertext: str, key: str) -> str:
    """Decrypt a value produced by encrypt_aes."""
    key_bytes = parse_key(key)
    try:
        data = base64.b64decode(ciphertext, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CryptoError(f"illegal base64 data: {exc}") from exc
    if len(data) < _NONCE_SIZE:
        raise CryptoError("ciphertext too short")
    nonce, sealed = data[:_NONCE_SIZE], data[_NONCE_SIZE:]
    try:
        plaintext = AESGCM(key_bytes).decrypt(nonce, sealed, None)
    except InvalidTag as exc:
        raise CryptoError("message authentication failed") from exc
    return plaintext.decode("utf-8", errors="replace")


def encrypt_patient_id(patient_id: str, key: str) -> str:
    """Encrypt a patient's national identification number."""
    return encrypt_aes(patient_id, key)


def decrypt_patient_id(encrypted_id: str, key: str) -> str:
    """Decrypt a patient's national identification number."""
    return decrypt_aes(encrypted_id, key)


def encrypt_patient_phone(phone: str, key: str) -> str:
    """Encrypt a patient's phone number."""
    return encrypt_aes(phone, key)


def decrypt_patient_phone(encrypted_phone: str, key: str) -> str:
    """Decrypt a patient's phone number."""
    return decrypt_aes(encrypted_phone, key)