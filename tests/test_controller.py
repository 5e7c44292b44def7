"""
Tests for the generic controller over an arbitrary repository.
"""

from unittest.mock import AsyncMock

import pytest

from app.controllers.base import Controller
from app.errors import not_found


@pytest.fixture
def repo() -> AsyncMock:
    return AsyncMock()


@pytest.mark.asyncio
async def test_get_all_returns_items_and_count(repo):
    repo.query.return_value = [{"id": "1"}, {"id": "2"}]
    repo.count.return_value = 2

    result = await Controller(repo).get_all()

    assert result == {"items": [{"id": "1"}, {"id": "2"}], "count": 2}
    repo.query.assert_awaited_once_with()
    repo.count.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_get_by_id_returns_the_record(repo):
    repo.query_by_id.return_value = {"id": "1"}

    assert await Controller(repo).get_by_id("1") == {"id": "1"}
    repo.query_by_id.assert_awaited_once_with("1")


@pytest.mark.asyncio
async def test_patch_returns_the_updated_record(repo):
    repo.update.return_value = {"id": "1", "title": "New"}

    result = await Controller(repo).patch("1", {"title": "New"})

    assert result == {"id": "1", "title": "New"}
    repo.update.assert_awaited_once_with("1", {"title": "New"})


@pytest.mark.asyncio
async def test_delete_by_id_returns_nothing(repo):
    repo.delete.return_value = None

    assert await Controller(repo).delete_by_id("1") is None
    repo.delete.assert_awaited_once_with("1")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, args",
    [
        ("get_by_id", ("1",)),
        ("patch", ("1", {"title": "New"})),
        ("delete_by_id", ("1",)),
    ],
)
async def test_repository_errors_propagate_unchanged(repo, method, args):
    error = not_found("Wrong id for the query")
    repo.query_by_id.side_effect = error
    repo.update.side_effect = error
    repo.delete.side_effect = error

    with pytest.raises(type(error)) as exc_info:
        await getattr(Controller(repo), method)(*args)

    assert exc_info.value is error


@pytest.mark.asyncio
async def test_get_all_propagates_query_errors(repo):
    repo.query.side_effect = RuntimeError("storage down")
    repo.count.return_value = 0

    with pytest.raises(RuntimeError, match="storage down"):
        await Controller(repo).get_all()


@pytest.mark.asyncio
async def test_get_all_reports_first_error_when_both_calls_fail(repo):
    repo.query.side_effect = RuntimeError("query failed")
    repo.count.side_effect = ValueError("count failed")

    with pytest.raises(RuntimeError, match="query failed"):
        await Controller(repo).get_all()

    repo.query.assert_awaited_once_with()
    repo.count.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_get_all_propagates_count_errors(repo):
    repo.query.return_value = []
    repo.count.side_effect = RuntimeError("count failed")

    with pytest.raises(RuntimeError, match="count failed"):
        await Controller(repo).get_all()
