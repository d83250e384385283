"""User repository for database operations."""

from sqlalchemy import ColumnElement, desc, or_

from cms.models.user import UserDB
from cms.repositories.base import BaseRepository
from cms.utils.helpers import utcnow


class UserRepository(BaseRepository[UserDB]):
    """Repository for User database operations, keyed by subject id."""

    model = UserDB
    id_field = "uid"
    not_found_detail = "User not found"
    conflict_detail = "Email address is already in use"

    async def get_by_email(self, email: str) -> UserDB | None:
        """Get a user by email address."""
        return await self.get_by_field("email", email.lower())

    async def email_taken(self, email: str, exclude_uid: str | None = None) -> bool:
        """Check whether another user already holds an email address."""
        return await self._check_exists_by_field("email", email.lower(), exclude_uid)

    async def adjust_post_counts(self, uid: str, *, posts: int = 0, drafts: int = 0) -> None:
        """Atomically shift a user's post and draft counters."""
        await self._increment(uid, posts_count=posts, drafts_count=drafts)

    async def touch_login(self, user: UserDB) -> UserDB:
        """Stamp the last sign-in time."""
        user.last_login = utcnow()
        return await self.save(user)

    async def list_users(
        self,
        *,
        offset: int,
        limit: int,
        role: str | None = None,
        status: str | None = None,
        search: str | None = None,
    ) -> tuple[list[UserDB], int]:
        """
        List users with filters, newest first.

        Args:
            offset: Rows to skip
            limit: Maximum rows to return
            role: Only users with this role
            status: ``active`` or ``inactive``
            search: Case-insensitive match on display name or email

        Returns:
            tuple[list[UserDB], int]: Page items and total count
        """
        conditions: list[ColumnElement[bool]] = []

        if role:
            conditions.append(UserDB.role == role)

        if status == "active":
            conditions.append(UserDB.active.is_(True))
        elif status == "inactive":
            conditions.append(UserDB.active.is_(False))

        if search:
            term = search.strip()
            conditions.append(
                or_(
                    UserDB.display_name.icontains(term, autoescape=True),
                    UserDB.email.icontains(term, autoescape=True),
                ),
            )

        return await self.list_page(
            conditions,
            order_by=(desc(UserDB.created_at),),
            offset=offset,
            limit=limit,
        )
