"""Auth schemas for token claims and resolved identities."""

from pydantic import BaseModel, ConfigDict

from artmarket.models.enums import Role
from artmarket.models.identity import Identity


class TokenPayload(BaseModel):
    """Claims carried by an access token."""

    sub: str  # identity id
    iat: int
    exp: int


class ResolvedIdentity(BaseModel):
    """A token's subject together with the kind of account it is."""

    role: Role
    identity: Identity

    model_config = ConfigDict(arbitrary_types_allowed=True)
