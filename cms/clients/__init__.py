from cms.clients.identity import (
    EmailAlreadyExistsError,
    IdentityProviderError,
    InvalidEmailError,
    JwtIdentityProvider,
)
from cms.clients.protocols import IdentityClaims, IdentityProvider

__all__ = [
    "EmailAlreadyExistsError",
    "IdentityClaims",
    "IdentityProvider",
    "IdentityProviderError",
    "InvalidEmailError",
    "JwtIdentityProvider",
]
