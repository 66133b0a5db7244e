# server/core/session.py

"""
Resolves the caller's identity from an inbound request.

Token transport is pluggable: a SessionGate tries each extractor in order
and verifies the first token found. By default a bearer header wins over
the identity cookie, so scripts and the browser client can both log in.
"""

from typing import Callable, Iterable
from fastapi import Depends, Request

from core.errors import InvalidToken, NotAuthenticated, TokenError
from core.tokens import Identity, TokenService


TokenExtractor = Callable[[Request], str | None]


def bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        return None
    return credentials.strip()


def cookie_token(name: str) -> TokenExtractor:
    def extract(request: Request) -> str | None:
        return request.cookies.get(name) or None
    return extract


class SessionGate:
    def __init__(self, tokens: TokenService, extractors: Iterable[TokenExtractor]):
        self.tokens = tokens
        self.extractors = tuple(extractors)

    def extract(self, request: Request) -> str | None:
        for extractor in self.extractors:
            token = extractor(request)
            if token:
                return token
        return None

    def resolve(self, request: Request) -> Identity:
        token = self.extract(request)
        if not token:
            raise NotAuthenticated()
        try:
            return self.tokens.verify(token)
        except TokenError as e:
            raise InvalidToken(e) from e


def get_session_gate(request: Request) -> SessionGate:
    return request.app.state.session_gate


def get_current_identity(
    request: Request,
    gate: SessionGate = Depends(get_session_gate),
) -> Identity:
    return gate.resolve(request)
