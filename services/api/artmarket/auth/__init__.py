"""Auth module: password hashing, tokens, guard and route dependencies."""

from artmarket.auth.dependencies import (
    get_current_artist,
    get_current_identity,
    get_current_user,
    get_resolved_identity,
)
from artmarket.auth.guard import authenticate, authorize_owner, require_role, resolve_identity
from artmarket.auth.passwords import hash_password, verify_password
from artmarket.auth.schemas import ResolvedIdentity, TokenPayload
from artmarket.auth.tokens import TokenService

__all__ = [
    "ResolvedIdentity",
    "TokenPayload",
    "TokenService",
    "authenticate",
    "authorize_owner",
    "require_role",
    "resolve_identity",
    "hash_password",
    "verify_password",
    "get_current_identity",
    "get_current_artist",
    "get_current_user",
    "get_resolved_identity",
]
