"""
Small helpers shared by plugins.
"""

import mimetypes
import random
import string
from typing import Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")

RANDOM_STR_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def remove_empty_chars(value: str) -> str:
    """Strip the NUL padding on-chain programs use for fixed-width strings."""
    return value.replace("\u0000", "")


def pad_empty_chars(value: str, chars: int) -> str:
    """Right-pad a string with NUL characters to ``chars`` characters."""
    return value.ljust(chars, "\u0000")


def chunk(items: Sequence[T], chunk_size: int) -> List[List[T]]:
    """
    Split a sequence into consecutive lists of at most ``chunk_size`` items.

    Raises:
        ValueError: chunk_size is not positive
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return [list(items[i:i + chunk_size]) for i in range(0, len(items), chunk_size)]


def zip_map(
    left: Sequence[T],
    right: Optional[Sequence[U]],
    fn: Callable[[T, Optional[U], int], V],
) -> List[V]:
    """Map over ``left`` with the matching ``right`` item, None where ``right`` runs short."""
    right = right or ()
    return [fn(item, right[i] if i < len(right) else None, i) for i, item in enumerate(left)]


def random_str(length: int = 20, alphabet: str = RANDOM_STR_ALPHABET) -> str:
    return "".join(random.choice(alphabet) for _ in range(length))


def get_extension(file_name: str) -> Optional[str]:
    """Text after the last dot, or None when there is no dot."""
    index = file_name.rfind(".")
    return None if index < 0 else file_name[index + 1:]


def get_content_type(file_name: str) -> Optional[str]:
    """MIME type guessed from the file name's extension."""
    content_type, _ = mimetypes.guess_type(file_name, strict=False)
    return content_type
