from app.dependencies.auth import (
    AuthInterceptor,
    authorized_for_films,
    get_token_payload,
    logged,
)
from app.dependencies.files import FileMiddleware, image_data, store_image

__all__ = [
    "AuthInterceptor",
    "logged",
    "authorized_for_films",
    "get_token_payload",
    "FileMiddleware",
    "store_image",
    "image_data",
]
