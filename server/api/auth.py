# server/api/auth.py

import logging
from pydantic import BaseModel
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from database import get_db
from core.credentials import CredentialStore
from core.errors import AuthFailure
from core.session import get_current_identity
from core.tokens import Identity


logger = logging.getLogger(__name__)

router = APIRouter()


class Credentials(BaseModel):
    username: str
    password: str


class User(BaseModel):
    id: str
    username: str


@router.post("/register", response_model=User)
def register(body: Credentials, db: Session = Depends(get_db)):
    user = CredentialStore(db).register(body.username, body.password)
    return {"id": user.id, "username": user.username}


@router.post("/login", response_model=User)
def login(body: Credentials, request: Request, response: Response, db: Session = Depends(get_db)):
    try:
        user = CredentialStore(db).verify(body.username, body.password)
    except AuthFailure as e:
        logger.info("Login failed for %s: %s", body.username, e.detail)
        raise

    settings = request.app.state.settings
    identity = Identity(user_id=user.id, username=user.username)
    token = request.app.state.tokens.issue(identity)
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=settings.access_token_expire_minutes * 60,
    )
    logger.info("User %s logged in", user.username)
    return {"id": user.id, "username": user.username}


@router.get("/profile", response_model=User)
def profile(identity: Identity = Depends(get_current_identity)):
    return {"id": identity.user_id, "username": identity.username}


@router.post("/logout")
def logout(request: Request, response: Response):
    response.delete_cookie(request.app.state.settings.cookie_name)
    return {"message": "Logged out"}
