"""
Tests for the film controller: owner-linked creation and deletion, paginated
listing and comment snapshots.
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from conftest import make_film, make_user

from app.controllers.film import FILMS_PAGE_SIZE, NO_TOKEN_PAYLOAD, FilmController
from app.errors import not_found

BASE_URL = "http://localhost/films"


@pytest.fixture
def film_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def user_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def controller(film_repo, user_repo) -> FilmController:
    return FilmController(film_repo, user_repo)


@pytest.mark.asyncio
async def test_post_creates_film_for_the_token_owner(
    controller, film_repo, user_repo, token_payload
):
    owner = make_user(token_payload.id, films=["earlier"])
    film = make_film(owner=owner)
    film_repo.create.return_value = film
    user_repo.query_by_id.return_value = owner

    result = await controller.post({"title": "Alien", "genre": "Horror"}, token_payload)

    assert result is film
    film_repo.create.assert_awaited_once_with(
        {"title": "Alien", "genre": "Horror", "owner_id": token_payload.id}
    )
    user_repo.query_by_id.assert_awaited_once_with(token_payload.id)
    user_repo.update.assert_awaited_once_with(
        token_payload.id, {"films": ["earlier", str(film.id)]}
    )


@pytest.mark.asyncio
async def test_post_without_payload_fails_before_storage(controller, film_repo):
    with pytest.raises(Exception, match=NO_TOKEN_PAYLOAD):
        await controller.post({"title": "Alien"}, None)

    film_repo.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_post_keeps_the_film_when_owner_update_fails(
    controller, film_repo, user_repo, token_payload
):
    film_repo.create.return_value = make_film()
    user_repo.query_by_id.side_effect = not_found("Wrong id for the query")

    with pytest.raises(Exception, match="Wrong id for the query"):
        await controller.post({"title": "Alien"}, token_payload)

    film_repo.create.assert_awaited_once()
    film_repo.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_all_middle_page_has_both_links(controller, film_repo):
    films = [make_film() for _ in range(FILMS_PAGE_SIZE)]
    film_repo.query.return_value = films
    film_repo.count.return_value = 18

    result = await controller.get_all(
        page=2,
        genre="Action",
        base_url=BASE_URL,
        query_params=[("genre", "Action"), ("page", "2")],
    )

    assert result == {
        "items": films,
        "count": 18,
        "previous": "http://localhost/films?genre=Action&page=1",
        "next": "http://localhost/films?genre=Action&page=3",
    }
    film_repo.query.assert_awaited_once_with(2, FILMS_PAGE_SIZE, "Action")
    film_repo.count.assert_awaited_once_with("Action")


@pytest.mark.asyncio
async def test_get_all_first_of_two_pages(controller, film_repo):
    film_repo.query.return_value = [make_film() for _ in range(6)]
    film_repo.count.return_value = 12

    result = await controller.get_all(page=1, base_url=BASE_URL)

    assert result["previous"] is None
    assert result["next"] == "http://localhost/films?page=2"


@pytest.mark.asyncio
async def test_get_all_last_page_of_partial_listing(controller, film_repo):
    film_repo.query.return_value = [make_film()]
    film_repo.count.return_value = 7

    result = await controller.get_all(
        page=2, base_url=BASE_URL, query_params=[("page", "2")]
    )

    assert result["previous"] == "http://localhost/films?page=1"
    assert result["next"] is None
    assert len(result["items"]) == 1


@pytest.mark.asyncio
async def test_get_all_without_genre_counts_everything(controller, film_repo):
    film_repo.query.return_value = []
    film_repo.count.return_value = 0

    result = await controller.get_all()

    film_repo.query.assert_awaited_once_with(1, FILMS_PAGE_SIZE, None)
    film_repo.count.assert_awaited_once_with(None)
    assert result == {"items": [], "count": 0, "previous": None, "next": None}


@pytest.mark.asyncio
async def test_get_all_propagates_storage_errors(controller, film_repo):
    film_repo.query.side_effect = RuntimeError("storage down")

    with pytest.raises(RuntimeError, match="storage down"):
        await controller.get_all()


@pytest.mark.asyncio
async def test_delete_removes_film_from_owner_list(
    controller, film_repo, user_repo, token_payload
):
    film_id = uuid.uuid4()
    other_id = str(uuid.uuid4())
    user_repo.query_by_id.return_value = make_user(
        token_payload.id, films=[other_id, str(film_id)]
    )

    result = await controller.delete_by_id(film_id, token_payload)

    assert result is None
    film_repo.delete.assert_awaited_once_with(film_id)
    user_repo.update.assert_awaited_once_with(token_payload.id, {"films": [other_id]})


@pytest.mark.asyncio
async def test_delete_without_payload_fails(controller, film_repo):
    with pytest.raises(Exception, match=NO_TOKEN_PAYLOAD):
        await controller.delete_by_id(uuid.uuid4(), None)

    film_repo.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_of_missing_film_leaves_owner_untouched(
    controller, film_repo, user_repo, token_payload
):
    film_repo.delete.side_effect = not_found("Wrong id for the delete")

    with pytest.raises(Exception, match="Wrong id for the delete"):
        await controller.delete_by_id(uuid.uuid4(), token_payload)

    user_repo.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_add_comment_appends_author_snapshot(
    controller, film_repo, user_repo, token_payload
):
    existing = {"comment": "First", "owner": {"id": "x", "userName": "bob"}}
    film = make_film(comments=[existing])
    author = make_user(token_payload.id, user_name="alice")
    film_repo.query_by_id.return_value = film
    user_repo.query_by_id.return_value = author
    film_repo.update.return_value = film

    result = await controller.add_comment(film.id, "Great film", token_payload)

    assert result is film
    film_repo.update.assert_awaited_once_with(
        film.id,
        {
            "comments": [
                existing,
                {
                    "comment": "Great film",
                    "owner": {"id": str(token_payload.id), "userName": "alice"},
                },
            ]
        },
    )


@pytest.mark.asyncio
async def test_add_comment_snapshot_omits_credentials(
    controller, film_repo, user_repo, token_payload
):
    film_repo.query_by_id.return_value = make_film()
    user_repo.query_by_id.return_value = make_user(token_payload.id)

    await controller.add_comment(uuid.uuid4(), "Nice", token_payload)

    comments = film_repo.update.await_args.args[1]["comments"]
    assert set(comments[-1]["owner"]) == {"id", "userName"}


@pytest.mark.asyncio
async def test_add_comment_without_payload_fails(controller, film_repo):
    with pytest.raises(Exception, match=NO_TOKEN_PAYLOAD):
        await controller.add_comment(uuid.uuid4(), "Nice", None)

    film_repo.query_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_add_comment_to_missing_film_fails(controller, film_repo, token_payload):
    film_repo.query_by_id.side_effect = not_found("Wrong id for the query")

    with pytest.raises(Exception, match="Wrong id for the query"):
        await controller.add_comment(uuid.uuid4(), "Nice", token_payload)

    film_repo.update.assert_not_awaited()
