"""User endpoints: account and saved listings."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from artmarket.auth.dependencies import TOKEN_COOKIE, get_current_user, get_token_service
from artmarket.auth.tokens import TokenService
from artmarket.database.session import get_db
from artmarket.models.enums import Role
from artmarket.models.identity import Identity
from artmarket.models.listing import Listing
from artmarket.schemas.identity import (
    LoginRequest,
    MessageResponse,
    UserAuthResponse,
    UserEnvelope,
    UserRegister,
)
from artmarket.schemas.listing import ListingResponse
from artmarket.services.identities import login_identity, register_identity
from artmarket.services.saved_listings import list_saved, save_listing, unsave_listing

router = APIRouter(prefix="/user", tags=["user"])


@router.post(
    "/register", response_model=UserAuthResponse, status_code=status.HTTP_201_CREATED
)
def register_user(
    data: UserRegister,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    user, token = register_identity(db, tokens, Role.USER, data)
    return {"user": user, "token": token}


@router.post("/login", response_model=UserAuthResponse)
def login_user(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    user, token = login_identity(db, tokens, Role.USER, credentials)
    response.set_cookie(TOKEN_COOKIE, token, httponly=True, samesite="lax")
    return {"user": user, "token": token}


@router.get("/logout", response_model=MessageResponse)
def logout_user(
    response: Response,
    user: Identity = Depends(get_current_user),
) -> dict:
    response.delete_cookie(TOKEN_COOKIE)
    return {"message": "Logged Out"}


@router.get("/getUser", response_model=UserEnvelope)
def get_user(user: Identity = Depends(get_current_user)) -> dict:
    return {"user": user}


@router.get("/saved", response_model=list[ListingResponse])
def saved_listings(user: Identity = Depends(get_current_user)) -> list[Listing]:
    """Listings the current user has saved."""
    return list_saved(user)


@router.post("/save/{listing_id}", response_model=UserEnvelope)
def save(
    listing_id: str,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """Save a listing for later. Saving the same listing twice is harmless."""
    save_listing(db, user, listing_id)
    return {"user": user}


@router.delete("/save/{listing_id}", response_model=UserEnvelope)
def unsave(
    listing_id: str,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    unsave_listing(db, user, listing_id)
    return {"user": user}
