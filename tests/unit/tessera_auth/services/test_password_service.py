"""Unit tests for PasswordHashingService."""

import pytest

from tessera_auth.exceptions import ErrorCode, IncorrectCredentialError
from tessera_auth.services import PasswordHashingService


class TestPasswordHashing:
    """Tests for hashing and verification."""

    def setup_method(self):
        """Use the minimum work factor to keep the tests fast."""
        self.service = PasswordHashingService(rounds=4)

    def test_hash_is_bcrypt_with_configured_rounds(self):
        password_hash = self.service.hash("Password123")

        assert password_hash.startswith("$2b$04$")
        assert password_hash != "Password123"

    def test_hash_is_salted(self):
        """Hashing the same password twice yields different strings."""
        assert self.service.hash("Password123") != self.service.hash("Password123")

    def test_verify_correct_password(self):
        password_hash = self.service.hash("Password123")

        # Does not raise
        self.service.verify(password_hash, "Password123")

    def test_verify_wrong_password_raises(self):
        password_hash = self.service.hash("Password123")

        with pytest.raises(IncorrectCredentialError) as exc_info:
            self.service.verify(password_hash, "Password124")

        assert exc_info.value.code == ErrorCode.INCORRECT_CREDENTIAL

    def test_verify_missing_hash_raises(self):
        """An account without a password never matches."""
        with pytest.raises(IncorrectCredentialError):
            self.service.verify(None, "Password123")

        with pytest.raises(IncorrectCredentialError):
            self.service.verify("", "Password123")

    def test_verify_corrupt_hash_raises_value_error(self):
        with pytest.raises(ValueError):
            self.service.verify("not-a-bcrypt-hash", "Password123")

    def test_unicode_password(self):
        password_hash = self.service.hash("pässwörd-ß-密码")

        self.service.verify(password_hash, "pässwörd-ß-密码")


class TestNeedsRehash:
    """Tests for work factor upgrades."""

    def test_same_rounds_needs_no_rehash(self):
        service = PasswordHashingService(rounds=4)
        assert not service.needs_rehash(service.hash("Password123"))

    def test_different_rounds_need_rehash(self):
        old = PasswordHashingService(rounds=4)
        new = PasswordHashingService(rounds=5)

        assert new.needs_rehash(old.hash("Password123"))

    def test_unparseable_hash_needs_rehash(self):
        service = PasswordHashingService(rounds=4)
        assert service.needs_rehash("garbage")
