"""FastAPI dependencies for authentication."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from artmarket.auth.guard import authenticate, require_role, resolve_identity
from artmarket.auth.schemas import ResolvedIdentity
from artmarket.auth.tokens import TokenService
from artmarket.database.session import get_db
from artmarket.models.enums import Role
from artmarket.models.identity import Identity

TOKEN_COOKIE = "token"

# HTTPBearer with auto_error=False so we can handle missing tokens ourselves
security = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    """Token service built by ``create_app``."""
    return request.app.state.token_service


def get_request_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str | None:
    """Bearer token from the Authorization header, else the login cookie."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(TOKEN_COOKIE)


def get_current_identity(
    token: str | None = Depends(get_request_token),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    """
    Get the identity the request's token was issued for.

    Usage:
        @router.get("/me")
        def me(identity: Identity = Depends(get_current_identity)):
            ...
    """
    return authenticate(db, tokens, token)


def get_current_artist(identity: Identity = Depends(get_current_identity)) -> Identity:
    """Authenticated identity that must be an artist."""
    return require_role(identity, Role.ARTIST)


def get_current_user(identity: Identity = Depends(get_current_identity)) -> Identity:
    """Authenticated identity that must be a (non-artist) user."""
    return require_role(identity, Role.USER)


def get_resolved_identity(
    token: str | None = Depends(get_request_token),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> ResolvedIdentity:
    return resolve_identity(db, tokens, token)
