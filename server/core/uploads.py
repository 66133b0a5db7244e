# server/core/uploads.py

import os
import shutil
import uuid
import logging
from pathlib import Path
from fastapi import UploadFile

from config import Settings
from core.errors import StoreError, ValidationError


logger = logging.getLogger(__name__)

# Prefix under which main.py serves the upload directory.
UPLOAD_URL_PREFIX = "uploads"


def cover_extension(filename: str | None, allowed: tuple[str, ...]) -> str:
    if not filename or "." not in filename:
        raise ValidationError("Cover file must have an extension")
    ext = filename.rsplit(".", 1)[-1].lower()
    if ext not in allowed:
        raise ValidationError(f"Unsupported cover type: .{ext}")
    return ext


def store_cover(upload: UploadFile, settings: Settings) -> str:
    """
    Writes an uploaded cover image under a generated name and returns the
    relative path stored on the post (e.g. "uploads/3f2a....png").
    """
    ext = cover_extension(upload.filename, settings.allowed_cover_extensions)
    name = f"{uuid.uuid4().hex}.{ext}"

    path = Path(settings.upload_dir) / name
    try:
        os.makedirs(path.parent, exist_ok=True)
        with path.open("wb") as buffer:
            shutil.copyfileobj(upload.file, buffer)
    except OSError as e:
        logger.exception("Failed to store cover %s", name)
        path.unlink(missing_ok=True)
        raise StoreError("Error saving cover") from e

    logger.info("Stored cover %s", name)
    return f"{UPLOAD_URL_PREFIX}/{name}"


def discard_cover(cover: str | None, settings: Settings):
    if not cover:
        return
    path = Path(settings.upload_dir) / Path(cover).name
    if path.exists():
        path.unlink()
        logger.info("Discarded cover %s", path.name)
