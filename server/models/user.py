# server/models/user.py

from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime
from . import Base, new_id


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for blog authors.
    Stores username and salted password hash; rows are never updated or deleted.
    """
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_id)
    username = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
