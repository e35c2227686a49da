#!/usr/bin/env python3
"""
Encryption of secret fields (source passwords and API keys).

Secrets are encrypted with Fernet from the ``cryptography`` package. The key
lives in a small file next to the settings document and is generated the
first time something needs to be encrypted or decrypted.
"""

import os
from pathlib import Path
from typing import Optional, Union

from cryptography.fernet import Fernet, InvalidToken

from .errors import SecretCodecError
from ..utils.logger import get_logger

logger = get_logger(__name__)


def get_or_create_key(key_file: Union[str, Path]) -> bytes:
    """Read the Fernet key from ``key_file``, creating the file if needed."""
    key_file = Path(key_file)
    try:
        if key_file.exists():
            return key_file.read_bytes().strip()

        key = Fernet.generate_key()
        key_file.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(key_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, 'wb') as f:
            f.write(key)
        logger.info(f"Created new secret key at {key_file}")
        return key
    except OSError as e:
        raise SecretCodecError(f"Cannot access secret key file {key_file}: {e}") from e


class SecretCodec:
    """Reversible encryption of secret strings.

    ``None`` is passed through so optional secrets (a source without a
    password) stay absent in the document. An empty string is a value like
    any other and is encrypted.
    """

    def __init__(self, key_file: Optional[Union[str, Path]] = None, key: Optional[bytes] = None):
        if key_file is None and key is None:
            raise ValueError("Either key_file or key must be given")
        self.key_file = Path(key_file) if key_file is not None else None
        self._key = key
        self._fernet: Optional[Fernet] = None

    @property
    def fernet(self) -> Fernet:
        if self._fernet is None:
            key = self._key if self._key is not None else get_or_create_key(self.key_file)
            try:
                self._fernet = Fernet(key)
            except ValueError as e:
                raise SecretCodecError(f"Secret key is not a valid Fernet key: {e}") from e
        return self._fernet

    def encrypt(self, plaintext: Optional[str]) -> Optional[str]:
        if plaintext is None:
            return None
        return self.fernet.encrypt(plaintext.encode('utf-8')).decode('ascii')

    def decrypt(self, ciphertext: Optional[str]) -> Optional[str]:
        if not ciphertext:
            return None
        try:
            return self.fernet.decrypt(ciphertext.encode('ascii')).decode('utf-8')
        except (InvalidToken, UnicodeError) as e:
            raise SecretCodecError(
                "Failed to decrypt a stored secret; the settings file may be corrupted "
                "or was encrypted with a different key"
            ) from e
