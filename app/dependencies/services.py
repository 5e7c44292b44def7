"""
FastAPI dependency providers wiring repositories, services and controllers.
"""

from functools import lru_cache

from fastapi import Depends

from app.config import settings
from app.controllers.film import FilmController
from app.controllers.user import UserController
from app.repositories.film import FilmRepository
from app.repositories.user import UserRepository
from app.services.auth import AuthServices, TokenService
from app.services.storage import FileStorage


def get_film_repository() -> FilmRepository:
    return FilmRepository()


def get_user_repository() -> UserRepository:
    return UserRepository()


@lru_cache
def get_auth_services() -> AuthServices:
    return AuthServices()


@lru_cache
def get_token_service() -> TokenService:
    """Shared token service; the signing secret comes from settings only here."""
    return TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )


@lru_cache
def get_file_storage() -> FileStorage:
    return FileStorage(
        settings.upload_dir, settings.storage_dir, settings.storage_public_url
    )


def get_film_controller(
    film_repo: FilmRepository = Depends(get_film_repository),
    user_repo: UserRepository = Depends(get_user_repository),
) -> FilmController:
    return FilmController(film_repo, user_repo)


def get_user_controller(
    user_repo: UserRepository = Depends(get_user_repository),
    auth: AuthServices = Depends(get_auth_services),
    tokens: TokenService = Depends(get_token_service),
) -> UserController:
    return UserController(user_repo, auth, tokens)
