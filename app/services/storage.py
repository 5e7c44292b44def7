"""
Public file storage for uploaded images.

Files accepted by the upload middleware land in the upload directory; the
storage copies them into its own directory and hands back the public URL
under which they are served.
"""

import asyncio
import shutil
from pathlib import Path

from app.utils.logger import setup_logger

logger = setup_logger("services.storage")


class FileStorage:
    def __init__(self, upload_dir: str | Path, storage_dir: str | Path, public_url: str):
        self.upload_dir = Path(upload_dir)
        self.storage_dir = Path(storage_dir)
        self.public_url = public_url.rstrip("/")

    def _copy(self, filename: str) -> None:
        source = self.upload_dir / filename
        if not source.is_file():
            raise FileNotFoundError(f"File not found: {source}")
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, self.storage_dir / filename)

    async def upload_file(self, filename: str) -> str:
        """Store ``filename`` from the upload directory and return its URL."""
        await asyncio.to_thread(self._copy, filename)
        url = f"{self.public_url}/{filename}"
        logger.info(f"Stored {filename} at {url}")
        return url
