"""
Shared helpers.
"""

from .common import (
    chunk,
    get_content_type,
    get_extension,
    pad_empty_chars,
    random_str,
    remove_empty_chars,
    zip_map,
)
from .fetch import FetchResult, fetch_json

__all__ = [
    "FetchResult",
    "chunk",
    "fetch_json",
    "get_content_type",
    "get_extension",
    "pad_empty_chars",
    "random_str",
    "remove_empty_chars",
    "zip_map",
]
