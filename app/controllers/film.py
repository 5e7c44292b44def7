from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from app.controllers.base import Controller
from app.models.film import Film
from app.repositories.base import Repository
from app.schemas import TokenPayload, UserPublic
from app.utils.logger import setup_logger
from app.utils.pagination import page_links

logger = setup_logger("controllers.film")

FILMS_PAGE_SIZE = 6

NO_TOKEN_PAYLOAD = "No token payload was found"


class FilmController(Controller[Film]):
    """Films: paginated listing, owner-linked creation and comments.

    The owner's ``films`` list is updated with a read-modify-write after the
    film itself is stored. The two writes are not atomic: when the second one
    fails the film stays created, and concurrent writes for the same owner can
    lose an update.
    """

    def __init__(self, repo: Repository[Film], user_repo: Repository):
        super().__init__(repo)
        self.user_repo = user_repo

    async def post(
        self, data: dict[str, Any], token_payload: TokenPayload | None
    ) -> Film:
        if token_payload is None:
            raise Exception(NO_TOKEN_PAYLOAD)

        film = await self.repo.create({**data, "owner_id": token_payload.id})

        user = await self.user_repo.query_by_id(token_payload.id)
        films = [*(user.films or []), str(film.id)]
        await self.user_repo.update(token_payload.id, {"films": films})

        logger.info(f"User {token_payload.id} created film {film.id}")
        return film

    async def get_all(
        self,
        page: int = 1,
        genre: str | None = None,
        base_url: str = "",
        query_params: Iterable[tuple[str, str]] = (),
    ) -> dict[str, Any]:
        items = await self.repo.query(page, FILMS_PAGE_SIZE, genre)
        count = await self.repo.count(genre)

        previous_link, next_link = page_links(
            base_url, query_params, page, count, FILMS_PAGE_SIZE
        )
        return {
            "items": items,
            "count": count,
            "previous": previous_link,
            "next": next_link,
        }

    async def delete_by_id(
        self, id: Any, token_payload: TokenPayload | None = None
    ) -> None:
        if token_payload is None:
            raise Exception(NO_TOKEN_PAYLOAD)

        await self.repo.delete(id)

        user = await self.user_repo.query_by_id(token_payload.id)
        films = [film_id for film_id in (user.films or []) if film_id != str(id)]
        await self.user_repo.update(token_payload.id, {"films": films})

        logger.info(f"User {token_payload.id} deleted film {id}")

    async def add_comment(
        self, id: Any, comment: str, token_payload: TokenPayload | None
    ) -> Film:
        if token_payload is None:
            raise Exception(NO_TOKEN_PAYLOAD)

        film = await self.repo.query_by_id(id)
        user = await self.user_repo.query_by_id(token_payload.id)

        # Snapshot of the author at append time
        owner = UserPublic.model_validate(user).model_dump(mode="json", by_alias=True)
        comments = [*(film.comments or []), {"comment": comment, "owner": owner}]
        return await self.repo.update(id, {"comments": comments})
