"""
Authentication and ownership gates for FastAPI route protection.

``logged`` verifies the bearer token and records its payload on
``request.state``; ``authorized_for_films`` requires that payload and checks
that it belongs to the owner of the film being modified. Routes compose the
two in that order.
"""

import uuid

from fastapi import Depends, Path, Request

from app.dependencies.services import get_film_repository, get_token_service
from app.errors import token_missing, unauthorized
from app.repositories.base import Repository
from app.schemas import TokenPayload
from app.services.auth import TokenService
from app.utils.logger import setup_logger

logger = setup_logger("dependencies.auth")

BEARER_PREFIX = "Bearer "


class AuthInterceptor:
    def __init__(self, film_repo: Repository, tokens: TokenService):
        self.film_repo = film_repo
        self.tokens = tokens

    def logged(self, request: Request) -> TokenPayload:
        authorization = request.headers.get("Authorization")
        if not authorization:
            raise unauthorized("Not Authorization header")
        if not authorization.startswith(BEARER_PREFIX):
            raise unauthorized("Not Bearer in Authorization header")

        token = authorization[len(BEARER_PREFIX) :].strip()
        # Verification failures propagate as raised by the token service
        payload = TokenPayload.model_validate(
            self.tokens.verify_jwt_getting_payload(token)
        )
        request.state.token_payload = payload
        return payload

    async def authorized_for_films(self, request: Request, film_id) -> None:
        payload = get_token_payload(request)
        if payload is None:
            raise token_missing("Token not found in Authorized interceptor")

        film = await self.film_repo.query_by_id(film_id)
        if str(film.owner.id) != str(payload.id):
            logger.warning(f"User {payload.id} is not the owner of film {film_id}")
            raise unauthorized("Not authorized", status_message="Not authorized")


def get_auth_interceptor(
    film_repo: Repository = Depends(get_film_repository),
    tokens: TokenService = Depends(get_token_service),
) -> AuthInterceptor:
    return AuthInterceptor(film_repo, tokens)


def get_token_payload(request: Request) -> TokenPayload | None:
    """Payload recorded by ``logged`` for this request, if any."""
    return getattr(request.state, "token_payload", None)


async def logged(
    request: Request,
    interceptor: AuthInterceptor = Depends(get_auth_interceptor),
) -> TokenPayload:
    """Dependency requiring a valid bearer token."""
    return interceptor.logged(request)


async def authorized_for_films(
    request: Request,
    film_id: uuid.UUID = Path(..., description="The ID of the film to modify"),
    interceptor: AuthInterceptor = Depends(get_auth_interceptor),
) -> None:
    """Dependency requiring the authenticated user to own ``film_id``."""
    await interceptor.authorized_for_films(request, film_id)
