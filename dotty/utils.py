# dotty/utils.py
"""
dotty.utils
-----------

Shared helpers for splitting dot-paths, classifying segments and expanding
file paths. Used internally by dotty and available for downstream consumers.
"""

import os
import re
from collections.abc import Mapping, Sequence
from typing import Any, List, Optional

_NUMERIC_SEGMENT = re.compile(r"[0-9]+")


def split_path(path: str) -> List[str]:
    """Split a dot-path into its segments.

    Splitting is literal: empty segments are kept, so ``"a..b"`` yields
    ``["a", "", "b"]`` and ``""`` yields ``[""]``.

    Args:
        path: Dot-separated path string.

    Returns:
        List of segments, always at least one element.

    Raises:
        TypeError: If ``path`` is not a string.
    """
    if not isinstance(path, str):
        raise TypeError(f"Path must be a string, not {type(path).__name__}")
    return path.split(".")


def is_numeric_segment(segment: Any) -> bool:
    """Return True if ``segment`` is a base-10 sequence index.

    Only non-empty runs of ASCII digits qualify. Leading zeros are allowed
    (``"007"`` is index 7); signs, decimal points and whitespace are not.

    Examples:
        >>> is_numeric_segment("0"), is_numeric_segment("12")
        (True, True)
        >>> is_numeric_segment(""), is_numeric_segment("a"), is_numeric_segment("-1")
        (False, False, False)
    """
    return isinstance(segment, str) and _NUMERIC_SEGMENT.fullmatch(segment) is not None


def is_container(value: Any) -> bool:
    """True for mappings and for sequences that are not text or bytes."""
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Mapping, Sequence))


def join_prefix(segments: List[str], index: int) -> str:
    """Join the segments that precede ``segments[index]`` with dots."""
    return ".".join(segments[:index])


def expand_path(path: Optional[str]) -> Optional[str]:
    """Expand ~ and environment variables in a path string.

    Args:
        path: Path string to expand, or None.

    Returns:
        Expanded path string, or None if input was None.

    Examples:
        >>> expand_path("$HOME/.config/dotty.toml")
        '/home/user/.config/dotty.toml'
    """
    if path is None:
        return None
    return os.path.expandvars(os.path.expanduser(path))
