"""
Base repository.

Generic data access helpers shared by all repositories, including the
conditional UPDATE and conflict-ignoring INSERT primitives the services
use to resolve races inside the database.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with generic async operations.

    Type Parameters:
        ModelType: SQLAlchemy model class

    Example:
        class AccountRepository(BaseRepository[Account]):
            def __init__(self, session: AsyncSession):
                super().__init__(Account, session)
    """

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def get_by_id(self, id: int) -> ModelType | None:
        """
        Get entity by primary key.

        Args:
            id: Entity ID

        Returns:
            Entity or None if not found
        """
        return await self.session.get(self.model, id)

    async def get_by(self, **filters: Any) -> ModelType | None:
        """Get single entity by column filters."""
        stmt = select(self.model).filter_by(**filters)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by(self, **filters: Any) -> list[ModelType]:
        """Find all entities matching column filters."""
        stmt = select(self.model).filter_by(**filters)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, **data: Any) -> ModelType:
        """
        Create new entity.

        Flushes so database defaults and the primary key are populated,
        but leaves the commit to the calling service.

        Args:
            **data: Entity data

        Returns:
            Created entity
        """
        entity = self.model(**data)
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def count(self, **filters: Any) -> int:
        """Count entities matching column filters."""
        stmt = select(func.count()).select_from(self.model)
        if filters:
            stmt = stmt.filter_by(**filters)

        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def exists(self, **filters: Any) -> bool:
        """Check if at least one entity matches column filters."""
        return await self.count(**filters) > 0

    async def update_where(
        self, criteria: list[Any], **values: Any
    ) -> int:
        """
        Conditional UPDATE.

        Args:
            criteria: WHERE clauses that must all hold
            **values: Column values to set

        Returns:
            Number of rows updated (0 means the condition did not hold)
        """
        stmt = (
            update(self.model)
            .where(*criteria)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def insert_ignore(self, values: dict[str, Any]) -> bool:
        """
        INSERT ... ON CONFLICT DO NOTHING.

        Args:
            values: Column values for the new row

        Returns:
            True if a row was inserted, False if it hit a unique conflict
        """
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            stmt = postgresql.insert(self.model).values(**values)
        elif dialect == "sqlite":
            stmt = sqlite.insert(self.model).values(**values)
        else:
            raise NotImplementedError(f"insert_ignore is not supported on {dialect}")

        result = await self.session.execute(stmt.on_conflict_do_nothing())
        return (result.rowcount or 0) > 0
