"""
Upload handling for film images.

``single_file_store`` saves the multipart ``image`` field into the upload
directory under a collision-free name; ``save_data_image`` pushes that file
to the public storage and produces the image metadata stored on the film.
"""

import asyncio
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import Depends, File, UploadFile

from app.config import settings
from app.dependencies.services import get_file_storage
from app.errors import HttpError
from app.services.storage import FileStorage
from app.utils.logger import setup_logger

logger = setup_logger("dependencies.files")

CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class StoredFile:
    filename: str
    original_name: str
    mimetype: str
    size: int


class FileMiddleware:
    def __init__(self, storage: FileStorage, upload_dir: str | Path, max_size: int):
        self.storage = storage
        self.upload_dir = Path(upload_dir)
        self.max_size = max_size

    @staticmethod
    def unique_name(original_name: str) -> str:
        """``poster.png`` becomes ``poster-<uuid4>.png``."""
        original = Path(original_name)
        return f"{original.stem}-{uuid.uuid4()}{original.suffix}"

    async def single_file_store(self, upload: UploadFile | None) -> StoredFile | None:
        if upload is None or not upload.filename:
            return None

        chunks = []
        size = 0
        while chunk := await upload.read(CHUNK_SIZE):
            size += len(chunk)
            if size > self.max_size:
                raise HttpError(
                    413, "Payload Too Large", "File exceeds the maximum allowed size"
                )
            chunks.append(chunk)

        filename = self.unique_name(upload.filename)
        target = self.upload_dir / filename
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(target.write_bytes, b"".join(chunks))
        logger.debug(f"Stored upload {upload.filename} as {target}")

        return StoredFile(
            filename=filename,
            original_name=upload.filename,
            mimetype=upload.content_type or "application/octet-stream",
            size=size,
        )

    async def save_data_image(self, stored: StoredFile | None) -> dict[str, Any]:
        if stored is None:
            raise HttpError(406, "Not Acceptable", "Not valid image file")

        url = await self.storage.upload_file(stored.filename)
        return {
            "urlOriginal": stored.original_name,
            "url": url,
            "mimetype": stored.mimetype,
            "size": stored.size,
        }


def get_file_middleware(
    storage: FileStorage = Depends(get_file_storage),
) -> FileMiddleware:
    return FileMiddleware(storage, settings.upload_dir, settings.max_upload_size)


async def store_image(
    image: UploadFile | None = File(None),
    files: FileMiddleware = Depends(get_file_middleware),
) -> StoredFile | None:
    return await files.single_file_store(image)


async def image_data(
    stored: StoredFile | None = Depends(store_image),
    files: FileMiddleware = Depends(get_file_middleware),
) -> dict[str, Any]:
    """Dependency yielding ``{urlOriginal, url, mimetype, size}`` for the upload."""
    return await files.save_data_image(stored)
