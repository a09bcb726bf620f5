"""Base repository: primary-key lookup, insert, savepoints and DB error translation."""

from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import DuplicateResourceException
from app.infrastructure.exceptions import PersistenceException
from app.infrastructure.persistence.database import Base

UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True for unique-constraint violations on Postgres (SQLSTATE) or SQLite (message)."""
    code = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    if code == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return "UNIQUE constraint failed" in str(exc.orig)


@contextmanager
def translate_db_errors(operation: str, resource_type: str | None = None) -> Iterator[None]:
    """Re-raise driver errors as domain/infrastructure exceptions.

    A unique violation becomes DuplicateResourceException when resource_type is
    given (inserts). Foreign-key, check and not-null violations, and anything
    else from SQLAlchemy, become PersistenceException.
    """
    try:
        yield
    except IntegrityError as exc:
        if resource_type is not None and is_unique_violation(exc):
            raise DuplicateResourceException(resource_type) from exc
        raise PersistenceException(operation, str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        raise PersistenceException(operation, exc.__class__.__name__) from exc


class BaseRepository[ModelType: Base]:
    """Base repository with get_by_id, add and savepoint.

    Subclasses map ORM rows to application DTOs; callers never see ORM objects.
    """

    resource_type: str = "resource"

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get(self, entity_id: str) -> ModelType | None:
        """Return a single ORM row by primary key, or None."""
        model: Any = self.model
        with translate_db_errors(f"get {self.resource_type}"):
            result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _add(self, obj: ModelType) -> ModelType:
        """Persist a new row; unique violations raise DuplicateResourceException."""
        with translate_db_errors(f"create {self.resource_type}", self.resource_type):
            self.db.add(obj)
            await self.db.flush()
            await self.db.refresh(obj)
        return obj

    async def _flush(self, obj: ModelType, operation: str) -> ModelType:
        with translate_db_errors(operation):
            await self.db.flush()
            await self.db.refresh(obj)
        return obj

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        """Run the block inside a SAVEPOINT; any exception rolls back only the block.

        The session's outer transaction (request-scoped) is left open.
        """
        async with self.db.begin_nested():
            yield
