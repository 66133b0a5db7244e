# server/core/posts.py

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import Forbidden, NotFound, StoreError, ValidationError
from core.policy import can_mutate
from models.post import Post


logger = logging.getLogger(__name__)


@dataclass
class PostFields:
    """Editable post fields. None means "not supplied" on update."""
    title: str | None = None
    summary: str | None = None
    content: str | None = None
    cover: str | None = None


class PostRepository:
    def __init__(self, db: Session):
        self.db = db

    def _commit(self, post: Post, action: str) -> Post:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to %s post", action)
            raise StoreError("Error saving post") from e
        self.db.refresh(post)
        return post

    def create(self, author_id: str, fields: PostFields) -> Post:
        title = (fields.title or "").strip()
        if not title:
            raise ValidationError("Title is required")
        if not fields.cover:
            raise ValidationError("Cover is required")

        post = Post(
            title=title,
            summary=fields.summary or "",
            content=fields.content or "",
            cover=fields.cover,
            author_id=author_id,
        )
        self.db.add(post)
        post = self._commit(post, "create")
        logger.info("Post %s created by %s", post.id, author_id)
        return post

    def get_by_id(self, post_id: str) -> Post:
        try:
            post = self.db.get(Post, post_id)
        except SQLAlchemyError as e:
            logger.exception("Post lookup failed")
            raise StoreError("Error fetching post") from e
        if post is None:
            raise NotFound("Post not found")
        return post

    def list_all(self) -> Iterator[Post]:
        """
        Yields every post, newest first.
        Nothing is queried until iteration starts; each call runs a fresh query.
        """
        query = self.db.query(Post).order_by(Post.created_at.desc(), Post.id.desc())
        try:
            yield from query
        except SQLAlchemyError as e:
            logger.exception("Post listing failed")
            raise StoreError("Error fetching posts") from e

    def get_for_update(self, post_id: str, caller_id: str) -> Post:
        """
        Loads a post the caller is allowed to change.
        Raises NotFound or Forbidden before anything is written.
        """
        post = self.get_by_id(post_id)
        if not can_mutate(post, caller_id):
            logger.warning("User %s may not update post %s", caller_id, post_id)
            raise Forbidden()
        return post

    def update(self, post_id: str, caller_id: str, fields: PostFields) -> Post:
        post = self.get_for_update(post_id, caller_id)

        if fields.title is not None:
            title = fields.title.strip()
            if not title:
                raise ValidationError("Title is required")
            post.title = title
        if fields.summary is not None:
            post.summary = fields.summary
        if fields.content is not None:
            post.content = fields.content
        if fields.cover:
            post.cover = fields.cover
        post.updated_at = datetime.now(timezone.utc)

        post = self._commit(post, "update")
        logger.info("Post %s updated by %s", post.id, caller_id)
        return post
