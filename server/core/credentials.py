# server/core/credentials.py

import logging
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import (
    BadCredentials,
    DuplicateUser,
    StoreError,
    UserNotFound,
    ValidationError,
)
from models.user import User


logger = logging.getLogger(__name__)

# pbkdf2 hashes embed a random per-hash salt; verify() compares in constant time.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class CredentialStore:
    """Registers users and checks their passwords against the users table."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_username(self, username: str) -> User | None:
        try:
            return self.db.query(User).filter(User.username == username).first()
        except SQLAlchemyError as e:
            logger.exception("User lookup failed")
            raise StoreError("Error fetching user") from e

    def register(self, username: str, password: str) -> User:
        if not username or not username.strip():
            raise ValidationError("Username is required")
        if not password:
            raise ValidationError("Password is required")

        if self.get_by_username(username) is not None:
            raise DuplicateUser()

        user = User(username=username, password_hash=get_password_hash(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same name.
            self.db.rollback()
            raise DuplicateUser() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Registration failed")
            raise StoreError("Registration failed") from e

        self.db.refresh(user)
        logger.info("Registered user %s", username)
        return user

    def verify(self, username: str, password: str) -> User:
        user = self.get_by_username(username)
        if user is None:
            raise UserNotFound()
        if not password or not verify_password(password, user.password_hash):
            raise BadCredentials()
        return user
