"""
Common utilities for the Films API: logging and pagination helpers.
"""

from app.utils.logger import setup_logger
from app.utils.pagination import build_page_link, page_links, total_pages

__all__ = [
    "setup_logger",
    "build_page_link",
    "page_links",
    "total_pages",
]
