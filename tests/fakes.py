"""Test doubles shared across test packages."""

from itertools import count

from cms.clients.identity import EmailAlreadyExistsError
from cms.clients.protocols import IdentityClaims
from cms.errors import BaseAppError, InvalidTokenError


class FakeIdentityProvider:
    """In-memory identity provider mapping opaque tokens to claims."""

    def __init__(self) -> None:
        self.tokens: dict[str, IdentityClaims] = {}
        self.accounts: dict[str, str] = {}
        self.deleted: list[str] = []
        self.create_error: BaseAppError | None = None
        self._ids = count(1)

    def issue(self, uid: str, email: str | None = None, name: str | None = None) -> str:
        token = f"token-{uid}"
        self.tokens[token] = IdentityClaims(uid=uid, email=email, name=name, email_verified=True)
        return token

    async def verify_id_token(self, token: str) -> IdentityClaims:
        try:
            return self.tokens[token]
        except KeyError as e:
            raise InvalidTokenError from e

    async def create_account(self, email: str, password: str, display_name: str) -> str:
        if self.create_error is not None:
            raise self.create_error
        if email in self.accounts.values():
            raise EmailAlreadyExistsError
        uid = f"new-user-{next(self._ids)}"
        self.accounts[uid] = email
        return uid

    async def delete_account(self, uid: str) -> None:
        self.deleted.append(uid)
        self.accounts.pop(uid, None)

    async def aclose(self) -> None:
        return None
