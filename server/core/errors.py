# server/core/errors.py

"""
Domain errors raised by the blog core.

Every BlogError carries the HTTP status it maps to; main.py registers a
single handler that renders them as {"detail": ...} responses.
"""


class BlogError(Exception):
    status_code = 500
    detail = "Internal error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


# -------------------------------
# 400
# -------------------------------

class ValidationError(BlogError):
    status_code = 400
    detail = "Invalid request"


class DuplicateUser(ValidationError):
    detail = "Username already exists"


class AuthFailure(BlogError):
    """Login rejected. Reported as 400 to match the login contract."""
    status_code = 400
    detail = "Login failed"


class UserNotFound(AuthFailure):
    detail = "User not found"


class BadCredentials(AuthFailure):
    detail = "Wrong credentials"


# -------------------------------
# 401 / 403
# -------------------------------

class AuthenticationError(BlogError):
    status_code = 401
    detail = "Not authenticated"


class NotAuthenticated(AuthenticationError):
    pass


class InvalidToken(AuthenticationError):
    status_code = 403
    detail = "Token invalid"

    def __init__(self, reason: "TokenError"):
        self.reason = reason
        super().__init__(f"Token invalid: {reason.code}")


class Forbidden(BlogError):
    status_code = 403
    detail = "You are not authorized to update this post"


# -------------------------------
# 404 / 500
# -------------------------------

class NotFound(BlogError):
    status_code = 404
    detail = "Not found"


class StoreError(BlogError):
    status_code = 500
    detail = "Storage error"


# -------------------------------
# Token verification
# -------------------------------

class TokenError(Exception):
    """Raised by TokenService.verify; translated to InvalidToken at the session gate."""
    code = "invalid"


class Malformed(TokenError):
    code = "malformed"


class Expired(TokenError):
    code = "expired"


class BadSignature(TokenError):
    code = "bad_signature"
