"""API routers."""

from artmarket.routers import artist, health, user

__all__ = [
    "artist",
    "health",
    "user",
]
