# server/main.py

import os
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from api import auth, post
from config import Settings, get_settings
from core.errors import BlogError
from core.session import SessionGate, bearer_token, cookie_token
from core.tokens import TokenService
from core.uploads import UPLOAD_URL_PREFIX
from database import init_db


logger = logging.getLogger(__name__)


async def handle_blog_error(request: Request, exc: BlogError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def handle_invalid_request(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    field = ".".join(str(part) for part in errors[0]["loc"][1:]) if errors else ""
    detail = f"Invalid or missing field: {field}" if field else "Invalid request"
    return JSONResponse(status_code=400, content={"detail": detail})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET_KEY is not set")

    session_factory = init_db(settings.database_url)
    os.makedirs(settings.upload_dir, exist_ok=True)

    app = FastAPI(title="Blog API")

    tokens = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.tokens = tokens
    app.state.session_gate = SessionGate(
        tokens,
        extractors=[bearer_token, cookie_token(settings.cookie_name)],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(BlogError, handle_blog_error)
    app.add_exception_handler(RequestValidationError, handle_invalid_request)

    app.include_router(auth.router)
    app.include_router(post.router)
    app.mount(
        f"/{UPLOAD_URL_PREFIX}",
        StaticFiles(directory=settings.upload_dir),
        name=UPLOAD_URL_PREFIX,
    )

    logger.info("Blog API ready, uploads in %s", os.path.abspath(settings.upload_dir))
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=int(os.getenv("PORT", "4000")))
