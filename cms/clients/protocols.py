"""Protocol definitions for identity provider implementations."""

from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class IdentityClaims:
    """Verified identity extracted from a bearer credential."""

    uid: str
    email: str | None = None
    name: str | None = None
    email_verified: bool = False
    claims: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class IdentityProvider(Protocol):
    """
    Protocol for identity provider implementations.

    Token verification is a black box: implementations only promise to
    return the subject id and claims of a valid credential, or raise
    ``InvalidTokenError``.
    """

    def verify_id_token(self, token: str) -> Awaitable[IdentityClaims]:
        """Verify a bearer credential and return its claims."""
        ...

    def create_account(
        self,
        email: str,
        password: str,
        display_name: str,
    ) -> Awaitable[str]:
        """Provision a sign-in account and return its subject id."""
        ...

    def delete_account(self, uid: str) -> Awaitable[None]:
        """Remove a sign-in account."""
        ...

    def aclose(self) -> Awaitable[None]:
        """Release any network resources."""
        ...
