"""Credential store: registration and login for artists and users."""

import logging
import secrets
from functools import lru_cache

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from artmarket.auth.passwords import hash_password, verify_password
from artmarket.auth.tokens import TokenService
from artmarket.errors import ValidationError
from artmarket.models.enums import Role
from artmarket.models.identity import Identity
from artmarket.schemas.identity import LoginRequest, RegisterBase

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Email Or Password Is Incorrect"


@lru_cache(maxsize=1)
def _unknown_identity_hash() -> str:
    return hash_password(secrets.token_urlsafe(16))


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_identity_by_email(db: Session, email: str) -> Identity | None:
    return db.scalars(
        select(Identity).where(Identity.email == normalize_email(email))
    ).first()


def register_identity(
    db: Session,
    tokens: TokenService,
    role: Role,
    data: RegisterBase,
) -> tuple[Identity, str]:
    """
    Create an artist or user account and issue its first token.

    Raises:
        ValidationError: the email is already registered
    """
    email = normalize_email(data.email)
    already_exists = f"{role.value.capitalize()} Already Exists"
    if get_identity_by_email(db, email) is not None:
        raise ValidationError(already_exists)

    identity = Identity(
        email=email,
        password_hash=hash_password(data.password),
        role=role,
        firstname=data.fullname.firstname,
        lastname=data.fullname.lastname,
        phone=data.phone,
        city=data.city,
        profile_pic=data.profile_pic,
    )
    db.add(identity)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ValidationError(already_exists)
    db.refresh(identity)

    logger.info("Registered %s %s", role.value, identity.id)
    return identity, tokens.issue(identity.id)


def login_identity(
    db: Session,
    tokens: TokenService,
    role: Role,
    credentials: LoginRequest,
) -> tuple[Identity, str]:
    """
    Check credentials for an account of the given role and issue a token.

    Unknown email, wrong password and wrong account kind all fail with
    the same message.
    """
    identity = get_identity_by_email(db, credentials.email)
    if identity is None:
        # Hash anyway so unknown emails take as long as known ones
        verify_password(credentials.password, _unknown_identity_hash())
        raise ValidationError(INVALID_CREDENTIALS)

    password_ok = verify_password(credentials.password, identity.password_hash)
    if identity.role != role:
        raise ValidationError(INVALID_CREDENTIALS)
    if not password_ok:
        logger.info("Failed login for %s %s", role.value, identity.id)
        raise ValidationError(INVALID_CREDENTIALS)

    logger.info("%s %s logged in", role.value.capitalize(), identity.id)
    return identity, tokens.issue(identity.id)
