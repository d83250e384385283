"""Base repository for database operations."""

from collections.abc import Sequence
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import UnaryExpression
from sqlmodel import SQLModel

from cms.errors import ConflictError, NotFoundError
from cms.utils.helpers import utcnow

type FilterValue = str | int | float | bool | UUID | datetime | None
type RecordId = UUID | str


class BaseRepository[ModelT: SQLModel]:
    """
    Base repository implementing common persistence operations.

    Subclasses set ``model`` and may override ``id_field``,
    ``not_found_detail`` and ``conflict_detail`` to tailor the errors raised
    for their entity.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
        not_found_detail: Message used when a lookup misses.
        conflict_detail: Message used when a unique constraint is violated.
    """

    model: type[ModelT]
    id_field: str = "id"
    not_found_detail: str = "Record not found"
    conflict_detail: str = "A record with this value already exists"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    @property
    def _id_column(self) -> Any:
        return getattr(self.model, self.id_field)

    async def get_by_id(self, record_id: RecordId) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record primary key

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        statement = select(self.model).where(self._id_column == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_field(self, field_name: str, value: FilterValue) -> ModelT | None:
        """Get the first record whose field equals a value."""
        field = getattr(self.model, field_name)
        statement = select(self.model).where(field == value).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_or_raise(self, record_id: RecordId | None) -> ModelT:
        """
        Get a record by ID or raise an exception if not found.

        Args:
            record_id: Record primary key, None for an unparseable id

        Returns:
            ModelT: Record if found

        Raises:
            NotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id) if record_id is not None else None
        if not record:
            raise NotFoundError(self.not_found_detail)
        return record

    async def exists(self, record_id: RecordId) -> bool:
        """
        Check if a record exists.

        Args:
            record_id: Record primary key

        Returns:
            bool: True if record exists, False otherwise
        """
        statement = select(1).where(self._id_column == record_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None

    async def count(self, *conditions: ColumnElement[bool]) -> int:
        """
        Count records matching optional conditions.

        Returns:
            int: Number of matching records
        """
        statement = select(func.count()).select_from(self.model).where(*conditions)
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def list_page(
        self,
        conditions: Sequence[ColumnElement[bool]],
        order_by: Sequence[UnaryExpression | Any],
        offset: int,
        limit: int,
    ) -> tuple[list[ModelT], int]:
        """
        Fetch one page of records and the total matching count.

        Both queries share the same conditions, so the total counts the
        same filter the page was drawn from. They run as two statements,
        so a concurrent write between them can make the two disagree.

        Args:
            conditions: Filter conditions
            order_by: Ordering clauses
            offset: Rows to skip
            limit: Maximum rows to return

        Returns:
            tuple[list[ModelT], int]: Page items and total count
        """
        statement = (
            select(self.model).where(*conditions).order_by(*order_by).offset(offset).limit(limit)
        )
        result = await self.session.execute(statement)
        items = list(result.scalars().all())
        total = await self.count(*conditions)
        return items, total

    async def add(self, record: ModelT) -> ModelT:
        """Insert a new record."""
        return await self._add_and_refresh(record)

    async def save(self, record: ModelT) -> ModelT:
        """Persist changes made to a loaded record."""
        return await self._add_and_refresh(record)

    async def delete(self, record: ModelT) -> None:
        """Delete a loaded record."""
        await self.session.delete(record)
        await self.session.flush()

    async def slug_taken(self, slug: str, exclude_id: RecordId | None = None) -> bool:
        """Check whether another record already holds a slug."""
        return await self._check_exists_by_field("slug", slug, exclude_id)

    async def _increment(
        self,
        record_id: RecordId,
        *,
        touch: bool = False,
        **deltas: int,
    ) -> None:
        """
        Atomically add deltas to integer columns of one row.

        Args:
            record_id: Row to update
            touch: Also stamp ``updated_at`` on the row
            **deltas: Column name to signed delta
        """
        values: dict[str, Any] = {
            name: getattr(self.model, name) + delta for name, delta in deltas.items() if delta
        }
        if not values:
            return
        if touch:
            values["updated_at"] = utcnow()

        statement = update(self.model).where(self._id_column == record_id).values(**values)
        await self.session.execute(statement)

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            ConflictError: If a unique constraint is violated
        """
        try:
            self.session.add(record)
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(self.conflict_detail) from e
        await self.session.refresh(record)
        return record

    async def _check_exists_by_field(
        self,
        field_name: str,
        value: FilterValue,
        exclude_id: RecordId | None = None,
    ) -> bool:
        """
        Check if a record exists with a specific field value.

        Args:
            field_name: Name of the field to check
            value: Value to check for
            exclude_id: Optional ID to exclude from check (for updates)

        Returns:
            bool: True if record exists, False otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(1).where(field == value)

        if exclude_id is not None:
            statement = statement.where(self._id_column != exclude_id)

        statement = statement.limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None
