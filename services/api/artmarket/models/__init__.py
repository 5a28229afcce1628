from .enums import Role
from .saved_listing import saved_listings
from .identity import Identity
from .listing import Listing

__all__ = [
    "Role",
    "saved_listings",
    "Identity",
    "Listing",
]
