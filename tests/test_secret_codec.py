#!/usr/bin/env python3
"""
Tests for secret encryption.
"""

import os
import stat

import pytest
from cryptography.fernet import Fernet

from pkgsettings.core.errors import SecretCodecError
from pkgsettings.core.secret_codec import SecretCodec, get_or_create_key


@pytest.fixture
def key_file(tmp_path):
    return tmp_path / "keys" / "secret.key"


class TestSecretCodec:
    """Test encrypt/decrypt behaviour."""

    @pytest.mark.parametrize("plaintext", ["hunter2", "pässwörd ✓", "a" * 500])
    def test_decrypt_returns_original(self, plaintext):
        codec = SecretCodec(key=Fernet.generate_key())

        ciphertext = codec.encrypt(plaintext)

        assert ciphertext != plaintext
        assert codec.decrypt(ciphertext) == plaintext

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_ciphertext_decrypts_to_none(self, value):
        codec = SecretCodec(key=Fernet.generate_key())
        assert codec.decrypt(value) is None

    def test_none_is_not_encrypted(self):
        assert SecretCodec(key=Fernet.generate_key()).encrypt(None) is None

    def test_empty_string_is_encrypted(self):
        codec = SecretCodec(key=Fernet.generate_key())

        ciphertext = codec.encrypt("")

        assert ciphertext
        assert codec.decrypt(ciphertext) == ""

    def test_wrong_key_fails(self):
        ciphertext = SecretCodec(key=Fernet.generate_key()).encrypt("secret")

        with pytest.raises(SecretCodecError):
            SecretCodec(key=Fernet.generate_key()).decrypt(ciphertext)

    def test_corrupted_ciphertext_fails(self):
        codec = SecretCodec(key=Fernet.generate_key())
        with pytest.raises(SecretCodecError):
            codec.decrypt("definitely not fernet")

    def test_invalid_key(self):
        codec = SecretCodec(key=b"too-short")
        with pytest.raises(SecretCodecError):
            codec.encrypt("secret")

    def test_requires_key_or_file(self):
        with pytest.raises(ValueError):
            SecretCodec()


class TestKeyFile:
    """Test key file creation and reuse."""

    def test_key_created_on_first_use(self, key_file):
        codec = SecretCodec(key_file)
        assert not key_file.exists()

        ciphertext = codec.encrypt("secret")

        assert key_file.exists()
        assert SecretCodec(key_file).decrypt(ciphertext) == "secret"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_key_file_is_private(self, key_file):
        get_or_create_key(key_file)
        assert stat.S_IMODE(key_file.stat().st_mode) == 0o600

    def test_existing_key_is_reused(self, key_file):
        key_file.parent.mkdir(parents=True)
        key = Fernet.generate_key()
        key_file.write_bytes(key + b"\n")

        assert get_or_create_key(key_file) == key

    def test_unusable_key_location(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(SecretCodecError):
            get_or_create_key(blocker / "secret.key")
