"""Authorization guard: token → identity, and ownership checks.

Every request is authenticated on its own; nothing here keeps state
between calls.
"""

import logging

from sqlalchemy.orm import Session

from artmarket.auth.schemas import ResolvedIdentity
from artmarket.auth.tokens import TokenService
from artmarket.errors import Forbidden, InvalidToken, Unauthorized
from artmarket.models.enums import Role
from artmarket.models.identity import Identity
from artmarket.models.listing import Listing

logger = logging.getLogger(__name__)


def authenticate(db: Session, tokens: TokenService, token: str | None) -> Identity:
    """
    Resolve a bearer token to the identity it was issued for.

    Raises:
        Unauthorized: token missing, invalid or expired, or the identity
            no longer exists
    """
    if not token:
        raise Unauthorized("Not authenticated")

    try:
        claims = tokens.verify(token)
    except InvalidToken:
        raise Unauthorized("Invalid or expired token")

    identity = db.get(Identity, claims.sub)
    if identity is None:
        logger.info("Token subject %s no longer exists", claims.sub)
        raise Unauthorized("Identity no longer exists")
    return identity


def resolve_identity(
    db: Session, tokens: TokenService, token: str | None
) -> ResolvedIdentity:
    """Authenticate and report which kind of account the token belongs to."""
    identity = authenticate(db, tokens, token)
    return ResolvedIdentity(role=identity.role, identity=identity)


def require_role(identity: Identity, role: Role) -> Identity:
    """Reject a valid identity registered as the other kind of account."""
    if identity.role != role:
        raise Forbidden(f"{role.value.capitalize()} account required")
    return identity


def authorize_owner(identity: Identity, listing: Listing) -> None:
    """Raise Forbidden unless ``identity`` owns ``listing``."""
    if listing.owner_id != identity.id:
        logger.warning(
            "Identity %s attempted to modify listing %s owned by %s",
            identity.id,
            listing.id,
            listing.owner_id,
        )
        raise Forbidden("Not authorized to modify this listing")
