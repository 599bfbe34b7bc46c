"""
Entity store
CRUD primitives over the business, review, user and photo tables.

Rows come back as plain dict snapshots of the mapped columns so callers can
annotate them freely without touching session state. No business rules live
here, and storage exceptions propagate unchanged.
Reference: https://docs.sqlalchemy.org/en/20/tutorial/data_select.html
"""
from typing import Any, Dict, Iterable, List, Optional, Type

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from reviewhub.core.database import Base
from reviewhub.models import Business, Photo, Review, User
from reviewhub.models.user import username_key

Row = Dict[str, Any]

# Retrieval order is part of the store contract, the assembler relies on it
_ORDERING = {
    Business: (Business.id.asc(),),
    Review: (Review.date.desc(), Review.id.desc()),
    User: (User.id.asc(),),
    Photo: (Photo.position.asc(), Photo.id.asc()),
}


def to_row(instance: Base) -> Row:
    """Snapshot the mapped columns of an ORM instance into a dict."""
    return {
        column.key: getattr(instance, column.key)
        for column in instance.__mapper__.column_attrs
    }


class EntityStore:
    """
    Stateless store operations
    Every method takes the session that defines the unit of work
    """

    @staticmethod
    async def insert(db: AsyncSession, model: Type[Base], **values: Any) -> Row:
        """
        Insert a row and return it with its generated ID

        Flushes so the autoincrement ID is assigned; committing is left to
        the owner of the session.
        """
        instance = model(**values)
        db.add(instance)
        await db.flush()
        return to_row(instance)

    @staticmethod
    async def get_by_id(
        db: AsyncSession, model: Type[Base], entity_id: int, lock: bool = False
    ) -> Optional[Row]:
        """
        Retrieve a single row by ID

        Args:
            db: Database session
            model: Mapped class to query
            entity_id: Primary key value
            lock: Take a row lock (SELECT ... FOR UPDATE) held until the
                transaction ends; ignored by SQLite

        Returns:
            Row dict if found, None otherwise
        """
        query = select(model).where(model.id == entity_id)
        if lock:
            query = query.with_for_update()
        result = await db.execute(
            query.execution_options(populate_existing=True)
        )
        instance = result.scalar_one_or_none()
        return to_row(instance) if instance is not None else None

    @staticmethod
    async def find_one(db: AsyncSession, model: Type[Base], **filters: Any) -> Optional[Row]:
        """Retrieve the first row whose columns equal every filter value."""
        query = select(model).filter_by(**filters).order_by(*_ORDERING[model]).limit(1)
        result = await db.execute(query.execution_options(populate_existing=True))
        instance = result.scalar_one_or_none()
        return to_row(instance) if instance is not None else None

    @staticmethod
    async def find_user_by_username(db: AsyncSession, username: str) -> Optional[Row]:
        """Retrieve a user by username, ignoring case (Unicode case folding)."""
        result = await db.execute(
            select(User)
            .where(User.username_key == username_key(username))
            .execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        return to_row(user) if user is not None else None

    @staticmethod
    async def list_all(db: AsyncSession, model: Type[Base]) -> List[Row]:
        """Retrieve every row of a table in contract order."""
        result = await db.execute(
            select(model)
            .order_by(*_ORDERING[model])
            .execution_options(populate_existing=True)
        )
        return [to_row(instance) for instance in result.scalars().all()]

    @staticmethod
    async def list_by_ids(
        db: AsyncSession,
        model: Type[Base],
        column: InstrumentedAttribute,
        ids: Iterable[int],
    ) -> List[Row]:
        """
        Retrieve rows whose column value is in ids, in contract order

        Args:
            db: Database session
            model: Mapped class to query
            column: Column to match, e.g. Review.business_id
            ids: Accepted values; an empty collection yields no rows
        """
        ids = list(set(ids))
        if not ids:
            return []
        result = await db.execute(
            select(model)
            .where(column.in_(ids))
            .order_by(*_ORDERING[model])
            .execution_options(populate_existing=True)
        )
        return [to_row(instance) for instance in result.scalars().all()]

    @staticmethod
    async def update_by_id(
        db: AsyncSession, model: Type[Base], entity_id: int, values: Dict[str, Any]
    ) -> bool:
        """
        Apply values to one row in a single UPDATE statement

        Returns:
            True if a row was affected, False if no row has that ID
        """
        result = await db.execute(
            update(model)
            .where(model.id == entity_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    @staticmethod
    async def delete_by_id(db: AsyncSession, model: Type[Base], entity_id: int) -> bool:
        """
        Delete one row by ID

        Returns:
            True if a row was deleted, False if no row has that ID
        """
        result = await db.execute(
            delete(model)
            .where(model.id == entity_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    @staticmethod
    async def delete_where(db: AsyncSession, model: Type[Base], **filters: Any) -> int:
        """Delete every row matching the filters and return how many went."""
        result = await db.execute(
            delete(model)
            .filter_by(**filters)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    @staticmethod
    async def max_photo_position(db: AsyncSession, business_id: int) -> Optional[int]:
        """Highest photo position for a business, None when it has no photos."""
        result = await db.execute(
            select(func.max(Photo.position)).where(Photo.business_id == business_id)
        )
        return result.scalar()
