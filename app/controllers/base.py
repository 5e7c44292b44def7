from __future__ import annotations

import asyncio
from typing import Any, Generic, TypeVar

from app.repositories.base import Repository
from app.utils.logger import setup_logger

logger = setup_logger("controllers")

T = TypeVar("T")


class Controller(Generic[T]):
    """Generic list/get/patch/delete operations over any repository.

    Repository failures propagate untouched; the error middleware is the
    only place where a failure becomes a response.
    """

    def __init__(self, repo: Repository[T]):
        self.repo = repo

    async def get_all(self) -> dict[str, Any]:
        results = await asyncio.gather(
            self.repo.query(), self.repo.count(), return_exceptions=True
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        items, count = results
        return {"items": items, "count": count}

    async def get_by_id(self, id: Any) -> T:
        return await self.repo.query_by_id(id)

    async def patch(self, id: Any, data: dict[str, Any]) -> T:
        updated = await self.repo.update(id, data)
        logger.info(f"Updated {id} with fields {sorted(data)}")
        return updated

    async def delete_by_id(self, id: Any) -> None:
        await self.repo.delete(id)
        logger.info(f"Deleted {id}")
