# server/api/post.py

from datetime import datetime
from pydantic import BaseModel, ConfigDict
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.orm import Session

from database import get_db
from core.errors import BlogError, ValidationError
from core.posts import PostFields, PostRepository
from core.session import get_current_identity
from core.tokens import Identity
from core.uploads import discard_cover, store_cover


router = APIRouter()


class Author(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str


class PostOut(BaseModel):
    """
    Post as returned to clients, with the author's username joined in.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    summary: str
    content: str
    cover: str
    author: Author
    created_at: datetime
    updated_at: datetime


# -------------------------------
# Read Endpoints
# -------------------------------

@router.get("/post", response_model=list[PostOut])
def list_posts(db: Session = Depends(get_db)):
    """
    Returns all posts, newest first.
    """
    return list(PostRepository(db).list_all())


@router.get("/post/{post_id}", response_model=PostOut)
def get_post(post_id: str, db: Session = Depends(get_db)):
    return PostRepository(db).get_by_id(post_id)


# -------------------------------
# Write Endpoints
# -------------------------------

@router.post("/post", response_model=PostOut)
def create_post(
    request: Request,
    identity: Identity = Depends(get_current_identity),
    title: str = Form(""),
    summary: str = Form(""),
    content: str = Form(""),
    file: UploadFile | None = File(None),
    db: Session = Depends(get_db),
):
    """
    Creates a post owned by the caller. A cover image is required.
    """
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")
    if not title.strip():
        raise ValidationError("Title is required")

    settings = request.app.state.settings
    cover = store_cover(file, settings)
    try:
        return PostRepository(db).create(
            identity.user_id,
            PostFields(title=title, summary=summary, content=content, cover=cover),
        )
    except BlogError:
        discard_cover(cover, settings)
        raise


async def form_keys(request: Request) -> frozenset[str]:
    """
    Names of the form fields actually sent. FastAPI turns an empty optional
    field into None, so this is what tells "cleared" apart from "not sent".
    """
    form = await request.form()
    return frozenset(form.keys())


def _supplied(name: str, value: str | None, sent: frozenset[str]) -> str | None:
    if name not in sent:
        return None
    return value or ""


@router.put("/post/{post_id}", response_model=PostOut)
def update_post(
    post_id: str,
    request: Request,
    identity: Identity = Depends(get_current_identity),
    title: str | None = Form(None),
    summary: str | None = Form(None),
    content: str | None = Form(None),
    file: UploadFile | None = File(None),
    sent: frozenset[str] = Depends(form_keys),
    db: Session = Depends(get_db),
):
    """
    Updates the fields sent with the request; an empty value clears the field.
    Only the author may do this, and the cover is replaced only when a new file
    is sent.
    """
    settings = request.app.state.settings
    posts = PostRepository(db)
    old_cover = posts.get_for_update(post_id, identity.user_id).cover

    cover = None
    if file is not None and file.filename:
        cover = store_cover(file, settings)

    try:
        post = posts.update(
            post_id,
            identity.user_id,
            PostFields(
                title=_supplied("title", title, sent),
                summary=_supplied("summary", summary, sent),
                content=_supplied("content", content, sent),
                cover=cover,
            ),
        )
    except BlogError:
        discard_cover(cover, settings)
        raise

    if cover and old_cover != cover:
        discard_cover(old_cover, settings)
    return post
