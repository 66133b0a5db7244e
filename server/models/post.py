# server/models/post.py

from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from . import Base, new_id


def _now():
    return datetime.now(timezone.utc)


class Post(Base):
    __tablename__ = "posts"

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    summary = Column(String, nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    cover = Column(String, nullable=False)
    author_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_now, index=True, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now, nullable=False)

    author = relationship("User", lazy="joined")
