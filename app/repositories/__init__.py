from app.repositories.base import BaseRepository, Repository, check_local_db
from app.repositories.film import FilmRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "Repository",
    "check_local_db",
    "FilmRepository",
    "UserRepository",
]
