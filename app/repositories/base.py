from __future__ import annotations

import asyncio
import uuid
from functools import wraps
from typing import Any, Generic, Protocol, TypeVar

from asyncpg.exceptions import ConnectionDoesNotExistError
from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db import AppAsyncSessionLocal
from app.errors import bad_request, not_found
from app.models.base import Base
from app.utils.logger import setup_logger

logger = setup_logger("repositories")


ModelType = TypeVar("ModelType", bound=Base)
T_co = TypeVar("T_co", covariant=True)

MAX_ATTEMPTS = 3


class Repository(Protocol[T_co]):
    """Storage operations the controllers rely on."""

    async def query(
        self, page: int = 1, page_size: int | None = None, filter_value: Any = None
    ) -> list[T_co]: ...

    async def count(self, filter_value: Any = None) -> int: ...

    async def query_by_id(self, id: Any) -> T_co: ...

    async def search(self, key: str, value: Any) -> list[T_co]: ...

    async def create(self, data: dict[str, Any]) -> T_co: ...

    async def update(self, id: Any, data: dict[str, Any]) -> T_co: ...

    async def delete(self, id: Any) -> None: ...


def check_local_db(func):
    """Session decorator with transaction management and retry logic."""

    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        # A caller-provided session means the caller owns the transaction
        if kwargs.get("db"):
            return await func(self, *args, **kwargs)

        last_exception = None
        for attempt in range(MAX_ATTEMPTS):
            async with self.session_factory() as db:
                kwargs["db"] = db
                try:
                    result = await func(self, *args, **kwargs)
                    await db.commit()
                    return result
                except DBAPIError as e:
                    await db.rollback()
                    if isinstance(e.orig, ConnectionDoesNotExistError):
                        last_exception = e
                        logger.warning(
                            f"Connection error in {func.__name__} (attempt {attempt + 1}/{MAX_ATTEMPTS}): {e}. Retrying..."
                        )
                        await asyncio.sleep(1 + attempt)
                        continue
                    logger.error(
                        f"DBAPIError in {func.__name__} (attempt {attempt + 1}/{MAX_ATTEMPTS}): {e}"
                    )
                    raise
                except Exception:
                    await db.rollback()
                    raise

        logger.error(
            f"All retries failed for {func.__name__}. Last error: {last_exception}"
        )
        raise last_exception

    return wrapper


class BaseRepository(Generic[ModelType]):
    """Generic repository with paginated query, search and CRUD methods.

    Subclasses name the column used by the optional ``query``/``count`` filter
    in ``filter_field`` and the relationships to populate on every read in
    ``load_options``.
    """

    filter_field: str | None = None

    def __init__(
        self,
        model: type[ModelType],
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ):
        self.model = model
        self.session_factory = session_factory or AppAsyncSessionLocal

    def load_options(self) -> list:
        return []

    def _select(self):
        stmt = select(self.model)
        options = self.load_options()
        if options:
            stmt = stmt.options(*options)
        return stmt

    def _apply_filter(self, stmt, filter_value: Any):
        if filter_value is None or self.filter_field is None:
            return stmt
        return stmt.where(getattr(self.model, self.filter_field) == filter_value)

    @staticmethod
    def _coerce_id(id: Any) -> uuid.UUID | None:
        if isinstance(id, uuid.UUID):
            return id
        try:
            return uuid.UUID(str(id))
        except ValueError:
            return None

    async def _get_loaded(self, id: Any, db: AsyncSession) -> ModelType | None:
        key = self._coerce_id(id)
        if key is None:
            return None
        stmt = (
            self._select()
            .where(self.model.id == key)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(stmt)
        return result.scalars().first()

    @check_local_db
    async def query(
        self,
        page: int = 1,
        page_size: int | None = None,
        filter_value: Any = None,
        *,
        db: AsyncSession = None,
    ) -> list[ModelType]:
        """Return one window of records, optionally filtered."""
        stmt = self._apply_filter(self._select(), filter_value)
        stmt = stmt.order_by(self.model.created_at, self.model.id)
        if page_size is not None:
            stmt = stmt.offset((page - 1) * page_size).limit(page_size)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @check_local_db
    async def count(self, filter_value: Any = None, *, db: AsyncSession = None) -> int:
        """Count the records matching the optional filter."""
        stmt = self._apply_filter(
            select(func.count()).select_from(self.model), filter_value
        )
        result = await db.execute(stmt)
        return result.scalar_one()

    @check_local_db
    async def query_by_id(self, id: Any, *, db: AsyncSession = None) -> ModelType:
        obj = await self._get_loaded(id, db)
        if obj is None:
            raise not_found("Wrong id for the query")
        return obj

    @check_local_db
    async def search(
        self, key: str, value: Any, *, db: AsyncSession = None
    ) -> list[ModelType]:
        """Return the records whose ``key`` column equals ``value``."""
        column = self.model.__table__.columns.get(key)
        if column is None:
            raise bad_request("Wrong key for the search")
        stmt = self._select().where(getattr(self.model, key) == value)
        result = await db.execute(stmt)
        return list(result.scalars().all())
    @check_local_db
    async def create(
        self, data: dict[str, Any], *, db: AsyncSession = None
    ) -> ModelType:
        db_obj = self.model(**data)
        db.add(db_obj)
        await db.commit()
        return await self._get_loaded(db_obj.id, db)

    @check_local_db
    async def update(
        self, id: Any, data: dict[str, Any], *, db: AsyncSession = None
    ) -> ModelType:
        """Apply ``data`` to the record and return it re-read from storage."""
        db_obj = await self._get_loaded(id, db)
        if db_obj is None:
            raise not_found("Wrong id for the update")

        for field, value in data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        db.add(db_obj)
        await db.commit()
        return await self._get_loaded(id, db)

    @check_local_db
    async def delete(self, id: Any, *, db: AsyncSession = None) -> None:
        key = self._coerce_id(id)
        db_obj = await db.get(self.model, key) if key is not None else None
        if db_obj is None:
            raise not_found("Wrong id for the delete")
        await db.delete(db_obj)
        await db.commit()
