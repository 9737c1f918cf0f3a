"""Session gate for the signed-in-only endpoints.

The session cookie is a presence marker only; its value is not verified.
"""

from fastapi import Request

from clairx.api.errors import ApiError
from clairx.models.errors import ErrorCode


def require_session(request: Request) -> str:
    """FastAPI dependency returning the session token, or raising 401."""
    for name in request.app.state.settings.session_cookie_names:
        token = request.cookies.get(name)
        if token:
            return token
    raise ApiError(401, ErrorCode.UNAUTHENTICATED, "Not authenticated")
