from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from app.models.film import Film
from app.repositories.base import BaseRepository


class FilmRepository(BaseRepository[Film]):
    """Films filtered by genre, returned with their owner populated."""

    filter_field = "genre"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = None):
        super().__init__(Film, session_factory)

    def load_options(self) -> list:
        return [selectinload(Film.owner)]
