"""Unit tests for password hashing."""

from comichub.kernel.identity.password import hash_password, verify_password


class TestPasswordHashing:
    """Tests for hash_password / verify_password."""

    def test_hash_creates_different_hashes(self):
        """Same password should create different hashes (due to salt)."""
        hash1 = hash_password("ComicPass123", rounds=4)
        hash2 = hash_password("ComicPass123", rounds=4)

        assert hash1 != hash2
        assert hash1.startswith("$2b$")  # bcrypt prefix

    def test_verify_correct_password(self):
        hashed = hash_password("ComicPass123", rounds=4)
        assert verify_password("ComicPass123", hashed) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("ComicPass123", rounds=4)
        assert verify_password("WrongPassword", hashed) is False

    def test_long_passwords_are_truncated_consistently(self):
        """bcrypt only sees 72 bytes; longer inputs must not raise."""
        long_password = "x" * 100
        hashed = hash_password(long_password, rounds=4)
        assert verify_password(long_password, hashed) is True
        assert verify_password("x" * 72, hashed) is True

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False
