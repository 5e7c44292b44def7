"""
Film API Routes - paginated listing, creation with image upload, owner-only
modification and comments.
"""

import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, Form, Query, Request, Response, status

from app.controllers.film import FilmController
from app.dependencies.auth import (
    authorized_for_films,
    get_token_payload,
    logged,
)
from app.dependencies.files import image_data
from app.dependencies.services import get_film_controller
from app.schemas import CommentCreate, FilmList, FilmRead, FilmUpdate, TokenPayload
from app.utils.logger import setup_logger

logger = setup_logger("api.films")

router = APIRouter(prefix="/films", tags=["Films"])


def _listing_base_url(request: Request) -> str:
    return f"{request.url.scheme}://{request.url.netloc}{request.url.path.rstrip('/')}"


@router.get("/", response_model=FilmList)
async def list_films(
    request: Request,
    page: int = Query(1, ge=1, description="1-indexed page number"),
    genre: str | None = Query(None, description="Only films of this genre"),
    controller: FilmController = Depends(get_film_controller),
):
    """
    List films six per page, with absolute links to the neighbouring pages.
    """
    return await controller.get_all(
        page=page,
        genre=genre,
        base_url=_listing_base_url(request),
        query_params=request.query_params.multi_items(),
    )


@router.get("/{film_id}", response_model=FilmRead)
async def get_film(
    film_id: uuid.UUID,
    controller: FilmController = Depends(get_film_controller),
):
    return await controller.get_by_id(film_id)


@router.post("/", response_model=FilmRead, status_code=status.HTTP_201_CREATED)
async def create_film(
    title: str = Form(..., min_length=1, max_length=255),
    genre: str = Form(..., min_length=1, max_length=100),
    token_payload: TokenPayload = Depends(logged),
    image: dict[str, Any] = Depends(image_data),
    controller: FilmController = Depends(get_film_controller),
):
    """
    Create a film owned by the authenticated user from a multipart form with
    ``title``, ``genre`` and an ``image`` file.
    """
    return await controller.post(
        {"title": title, "genre": genre, "image": image}, token_payload
    )


@router.patch(
    "/{film_id}",
    response_model=FilmRead,
    status_code=status.HTTP_202_ACCEPTED,
    dependencies=[Depends(logged), Depends(authorized_for_films)],
)
async def patch_film(
    film_id: uuid.UUID,
    film_data: FilmUpdate,
    controller: FilmController = Depends(get_film_controller),
):
    """Update title and/or genre; only the owner may do so."""
    return await controller.patch(film_id, film_data.model_dump(exclude_unset=True))


@router.delete(
    "/{film_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(logged), Depends(authorized_for_films)],
)
async def delete_film(
    film_id: uuid.UUID,
    token_payload: TokenPayload | None = Depends(get_token_payload),
    controller: FilmController = Depends(get_film_controller),
):
    """Delete a film and drop it from its owner's film list."""
    await controller.delete_by_id(film_id, token_payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{film_id}/comments",
    response_model=FilmRead,
    dependencies=[Depends(logged)],
)
async def add_comment(
    film_id: uuid.UUID,
    comment_data: CommentCreate = Body(...),
    token_payload: TokenPayload | None = Depends(get_token_payload),
    controller: FilmController = Depends(get_film_controller),
):
    """Append a comment signed with a snapshot of the commenting user."""
    return await controller.add_comment(film_id, comment_data.comment, token_payload)
