# server/core/tokens.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from jose import ExpiredSignatureError, JWTError, jwt

from core.errors import BadSignature, Expired, Malformed


@dataclass(frozen=True)
class Identity:
    user_id: str
    username: str


class TokenService:
    """
    Issues and verifies signed identity tokens (JWT).
    Built once at startup; verification never touches the database.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 60):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    def issue(self, identity: Identity, issued_at: datetime | None = None) -> str:
        now = issued_at or datetime.now(timezone.utc)
        to_encode = {
            "sub": identity.user_id,
            "username": identity.username,
            "iat": int(now.timestamp()),
            "exp": int((now + self.expires_delta).timestamp()),
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise Malformed(str(e)) from e

        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise Expired(str(e)) from e
        except JWTError as e:
            raise BadSignature(str(e)) from e

        user_id = payload.get("sub")
        username = payload.get("username")
        if not user_id or not username:
            raise Malformed("Token is missing identity claims")
        return Identity(user_id=user_id, username=username)
