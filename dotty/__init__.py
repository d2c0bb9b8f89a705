# dotty/__init__.py
"""
dotty – Dot-path access to nested mappings and sequences.

Import `DotDotty` from `dotty.accessor`, `AccessorOptions` and `load_options`
from `dotty.options`, and `InvalidPath` from `dotty.exceptions`.
"""

from .accessor import DotDotty, get_by_dot, set_by_dot
from .exceptions import InvalidOptions, InvalidPath
from .options import AccessorOptions, load_options

__version__ = "0.1.0"

__all__ = [
    "AccessorOptions",
    "DotDotty",
    "InvalidOptions",
    "InvalidPath",
    "get_by_dot",
    "load_options",
    "set_by_dot",
]
