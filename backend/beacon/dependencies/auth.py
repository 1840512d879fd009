"""Authentication dependencies for FastAPI routes.

Sign-in happens elsewhere; this service only reads the identity the auth
layer stored in the signed session cookie.
"""

from fastapi import Request

from beacon.exceptions import NotAuthenticated


def get_current_email(request: Request) -> str | None:
    """Return the logged-in user's email or None."""
    email = request.session.get("user_email")
    return email or None


def require_user_email(request: Request) -> str:
    """Return the logged-in user's email or raise 401."""
    email = get_current_email(request)
    if not email:
        raise NotAuthenticated()
    return email
