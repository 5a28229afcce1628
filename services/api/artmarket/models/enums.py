from enum import Enum


class Role(str, Enum):
    """Kind of account an identity was registered as."""

    USER = "user"
    ARTIST = "artist"
