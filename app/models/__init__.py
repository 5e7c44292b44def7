"""
Database models for the Films API.

Architecture: User → Film, with comments embedded in each film.
"""

from app.models.film import Film
from app.models.user import User

__all__ = [
    "User",
    "Film",
]
