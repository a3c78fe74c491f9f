"""Unit tests for app.core.security: bcrypt password hashing and session JWTs."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.security import (
    InvalidSessionTokenError,
    create_session_token,
    decode_session_token,
    hash_password,
    verify_password,
)
from tests.support import TEST_JWT_SECRET

CLAIMS = {"id": 7, "name": "Ada", "role": "user"}


class TestPasswordHashing(unittest.TestCase):
    """hash_password is salted per call; verify_password fails closed."""

    def test_hash_is_not_deterministic(self) -> None:
        first = hash_password("pw1", rounds=4)
        second = hash_password("pw1", rounds=4)
        self.assertNotEqual(first, second)
        self.assertNotIn("pw1", first)

    def test_verify_accepts_own_hash(self) -> None:
        digest = hash_password("correct horse", rounds=4)
        self.assertTrue(verify_password("correct horse", digest))

    def test_verify_rejects_wrong_password(self) -> None:
        digest = hash_password("correct horse", rounds=4)
        self.assertFalse(verify_password("battery staple", digest))

    def test_malformed_digest_fails_closed(self) -> None:
        self.assertFalse(verify_password("pw1", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("pw1", ""))

    def test_only_first_72_bytes_count(self) -> None:
        base = "x" * 72
        digest = hash_password(base + "tail-one", rounds=4)
        self.assertTrue(verify_password(base + "tail-two", digest))

    def test_non_ascii_password(self) -> None:
        digest = hash_password("pässwörd-ß", rounds=4)
        self.assertTrue(verify_password("pässwörd-ß", digest))
        self.assertFalse(verify_password("passwort-ss", digest))


class TestSessionTokens(unittest.TestCase):
    """create_session_token/decode_session_token round-trip within the TTL only."""

    def test_round_trip_returns_claims(self) -> None:
        token = create_session_token(CLAIMS, TEST_JWT_SECRET, timedelta(minutes=5))
        self.assertEqual(decode_session_token(token, TEST_JWT_SECRET), CLAIMS)

    def test_expired_token_is_invalid(self) -> None:
        issued = datetime.now(UTC) - timedelta(days=31)
        token = create_session_token(
            CLAIMS, TEST_JWT_SECRET, timedelta(days=30), now=issued
        )
        with self.assertRaises(InvalidSessionTokenError) as ctx:
            decode_session_token(token, TEST_JWT_SECRET)
        self.assertIn("expired", ctx.exception.message)

    def test_token_is_invalid_at_expiry(self) -> None:
        token = create_session_token(CLAIMS, TEST_JWT_SECRET, timedelta(0))
        with self.assertRaises(InvalidSessionTokenError):
            decode_session_token(token, TEST_JWT_SECRET)

    def test_wrong_secret_is_invalid(self) -> None:
        token = create_session_token(CLAIMS, TEST_JWT_SECRET, timedelta(minutes=5))
        with self.assertRaises(InvalidSessionTokenError):
            decode_session_token(token, "another-secret-0123456789abcdef0123456789")

    def test_tampered_token_is_invalid(self) -> None:
        token = create_session_token(CLAIMS, TEST_JWT_SECRET, timedelta(minutes=5))
        header, _payload, signature = token.split(".")
        forged = create_session_token(
            {**CLAIMS, "role": "admin"}, "attacker-secret-0123456789abcdef01234567", timedelta(minutes=5)
        ).split(".")[1]
        with self.assertRaises(InvalidSessionTokenError):
            decode_session_token(f"{header}.{forged}.{signature}", TEST_JWT_SECRET)

    def test_garbage_is_invalid(self) -> None:
        with self.assertRaises(InvalidSessionTokenError):
            decode_session_token("not-a-jwt", TEST_JWT_SECRET)

    def test_payload_without_user_claims_is_invalid(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "7", "iat": now, "exp": now + timedelta(minutes=5)},
            TEST_JWT_SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidSessionTokenError):
            decode_session_token(token, TEST_JWT_SECRET)

    def test_token_never_carries_extra_claims(self) -> None:
        token = create_session_token(CLAIMS, TEST_JWT_SECRET, timedelta(minutes=5))
        payload = jwt.decode(token, TEST_JWT_SECRET, algorithms=["HS256"])
        self.assertEqual(set(payload), {"user", "iat", "exp"})
        self.assertEqual(payload["exp"] - payload["iat"], 300)


if __name__ == "__main__":
    unittest.main()
