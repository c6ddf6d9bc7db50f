# catalog/core/crypto.py
"""
Criptare deterministă pentru SKU (AES-256-CBC, PKCS7, IV fix = 16 octeți zero).

IV-ul constant face ca același plaintext să producă mereu același ciphertext.
Asta scurge informația de egalitate, dar exact pe ea se bazează unicitatea SKU:
indexul UNIQUE din DB și verificarea `WHERE sku = :enc` lucrează direct pe
coloana criptată, fără decriptare. Un IV aleator ar rupe acest mecanism.

Formatul de ieșire: hex lowercase, fără prefix de IV.
"""
from __future__ import annotations

import binascii
from typing import Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from catalog.errors import CipherError

KEY_SIZE = 32
BLOCK_SIZE_BITS = algorithms.AES.block_size  # 128
ZERO_IV = bytes(BLOCK_SIZE_BITS // 8)


class SkuCipher:
    """Cifru simetric determinist pentru un singur câmp text."""

    def __init__(self, key: bytes):
        if not isinstance(key, (bytes, bytearray)) or len(key) != KEY_SIZE:
            raise CipherError(f"Encryption key must be exactly {KEY_SIZE} bytes")
        self._cipher = Cipher(algorithms.AES(bytes(key)), modes.CBC(ZERO_IV))

    def encrypt(self, plaintext: str) -> str:
        padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
        data = padder.update(plaintext.encode("utf-8")) + padder.finalize()
        encryptor = self._cipher.encryptor()
        return (encryptor.update(data) + encryptor.finalize()).hex()

    def decrypt(self, ciphertext: str) -> str:
        try:
            raw = binascii.unhexlify(ciphertext)
        except (binascii.Error, TypeError, ValueError) as e:
            raise CipherError("Ciphertext is not valid hex") from e

        if not raw or len(raw) % (BLOCK_SIZE_BITS // 8):
            raise CipherError("Ciphertext length is not a multiple of the block size")

        try:
            decryptor = self._cipher.decryptor()
            data = decryptor.update(raw) + decryptor.finalize()
            unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
            plain = unpadder.update(data) + unpadder.finalize()
            return plain.decode("utf-8")
        except ValueError as e:
            # padding invalid / UTF-8 invalid → cheie greșită sau date corupte
            raise CipherError("Ciphertext could not be decrypted") from e


# -----------------------------
# Instanță process-wide (init o singură dată la startup)
# -----------------------------
_cipher: Optional[SkuCipher] = None


def configure_cipher(key: bytes) -> SkuCipher:
    global _cipher
    _cipher = SkuCipher(key)
    return _cipher


def get_cipher() -> SkuCipher:
    """
    Întoarce cifrul configurat; dacă startup-ul nu l-a configurat încă,
    îl construiește din settings. Folosit și ca FastAPI dependency.
    """
    if _cipher is None:
        from catalog.core.settings import settings  # import lazy

        return configure_cipher(settings.encryption_key)
    return _cipher


__all__ = ["SkuCipher", "configure_cipher", "get_cipher", "KEY_SIZE"]
