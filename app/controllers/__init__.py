from app.controllers.base import Controller
from app.controllers.film import FILMS_PAGE_SIZE, FilmController
from app.controllers.user import UserController

__all__ = [
    "Controller",
    "FilmController",
    "UserController",
    "FILMS_PAGE_SIZE",
]
