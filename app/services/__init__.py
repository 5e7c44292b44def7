"""
Films API services: collaborators consumed by the controllers and gates.

- auth: bcrypt credential hashing and JWT token signing/verification
- storage: public file storage for uploaded images
"""

from app.services.auth import AuthServices, TokenService
from app.services.storage import FileStorage

__all__ = [
    "AuthServices",
    "TokenService",
    "FileStorage",
]
