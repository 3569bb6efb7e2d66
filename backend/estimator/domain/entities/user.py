"""Domain entity for an authenticated account."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthUser:
    """Identity resolved from an access token by the identity provider."""

    id: str
    email: str = ""
    name: str = ""
