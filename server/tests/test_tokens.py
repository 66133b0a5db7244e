import unittest
from datetime import datetime, timedelta, timezone

from jose import jwt

from core.errors import BadSignature, Expired, Malformed
from core.tokens import Identity, TokenService


class TokenServiceTests(unittest.TestCase):
    def setUp(self):
        self.tokens = TokenService("secret-a", expire_minutes=60)
        self.identity = Identity(user_id="abc123", username="alice")

    def test_issue_then_verify_returns_identity(self):
        token = self.tokens.issue(self.identity)
        self.assertEqual(self.tokens.verify(token), self.identity)

    def test_expired_token(self):
        issued_at = datetime.now(timezone.utc) - timedelta(hours=2)
        token = self.tokens.issue(self.identity, issued_at=issued_at)
        with self.assertRaises(Expired):
            self.tokens.verify(token)

    def test_token_from_other_secret_has_bad_signature(self):
        token = TokenService("secret-b").issue(self.identity)
        with self.assertRaises(BadSignature):
            self.tokens.verify(token)

    def test_forged_expired_token_reports_bad_signature(self):
        issued_at = datetime.now(timezone.utc) - timedelta(hours=2)
        token = TokenService("secret-b").issue(self.identity, issued_at=issued_at)
        with self.assertRaises(BadSignature):
            self.tokens.verify(token)

    def test_garbage_is_malformed(self):
        for token in ("", "not-a-token", "a.b.c"):
            with self.assertRaises(Malformed):
                self.tokens.verify(token)

    def test_missing_identity_claims_is_malformed(self):
        token = jwt.encode({"foo": "bar"}, "secret-a", algorithm="HS256")
        with self.assertRaises(Malformed):
            self.tokens.verify(token)

    def test_empty_secret_is_rejected(self):
        with self.assertRaises(ValueError):
            TokenService("")


if __name__ == "__main__":
    unittest.main()
