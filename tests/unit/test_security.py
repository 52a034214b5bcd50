"""Tests for token hashing and provider JWT verification."""

from datetime import timedelta
from uuid import uuid4

import pytest

from src.crm.core.security import decode_token, generate_token, hash_token
from tests.helpers import make_access_token

pytestmark = pytest.mark.unit


class TestOneTimeTokens:
    def test_generated_tokens_are_unique_and_url_safe(self):
        tokens = {generate_token() for _ in range(20)}
        assert len(tokens) == 20
        for token in tokens:
            assert len(token) >= 40
            assert all(c.isalnum() or c in "-_" for c in token)

    def test_hash_is_deterministic_sha256(self):
        assert hash_token("abc") == hash_token("abc")
        assert hash_token("abc") != hash_token("abd")
        assert len(hash_token("abc")) == 64

    def test_hash_never_returns_plaintext(self):
        token = generate_token()
        assert token not in hash_token(token)


class TestDecodeToken:
    def test_valid_token(self):
        user_id = uuid4()
        payload = decode_token(make_access_token(user_id, "a@example.com"))

        assert payload is not None
        assert payload["sub"] == str(user_id)
        assert payload["email"] == "a@example.com"

    def test_expired_token(self):
        token = make_access_token(uuid4(), "a@example.com", expires_in=timedelta(minutes=-5))
        assert decode_token(token) is None

    def test_wrong_audience(self):
        token = make_access_token(uuid4(), "a@example.com", audience="service_role")
        assert decode_token(token) is None

    def test_wrong_signature(self):
        from jose import jwt

        token = jwt.encode(
            {"sub": str(uuid4()), "email": "a@example.com", "aud": "authenticated"},
            "another-secret-that-is-also-long-enough-123",
            algorithm="HS256",
        )
        assert decode_token(token) is None

    def test_garbage(self):
        assert decode_token("not-a-jwt") is None
