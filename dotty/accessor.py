# dotty/accessor.py
"""
dotty.accessor
--------------

Dot-path access over nested mappings and sequences.

``DotDotty`` wraps a caller-owned container and resolves keys such as
``"c.cA"`` or ``"d.0.a"`` into its nested structure. Writes create missing
intermediate containers on the way down: a segment followed by a numeric
segment becomes a list, any other becomes a dict.

    >>> data = {"a": 1, "b": 2}
    >>> dot = DotDotty(data)
    >>> dot["c.cA"] = True
    >>> dot.set("d.0.a", "test")
    'test'
    >>> data
    {'a': 1, 'b': 2, 'c': {'cA': True}, 'd': [{'a': 'test'}]}
"""

import logging
from collections.abc import Mapping, MutableSequence, Sequence
from typing import Any, List, Optional, Union

from .exceptions import InvalidPath
from .options import AccessorOptions
from .utils import is_container, is_numeric_segment, join_prefix, split_path

log = logging.getLogger(__name__)

_MISSING = object()

Container = Union[Mapping, Sequence]


# --- Helper Functions ---

def _key_for(container: Any, segment: str) -> Any:
    """
    Translate a path segment into the key used to index ``container``.

    Sequences take an int for numeric segments. Mappings take the string
    segment, unless only the integer form of a numeric segment is present.
    """
    if is_numeric_segment(segment):
        index = int(segment)
        if isinstance(container, Mapping):
            if segment not in container and index in container:
                return index
            return segment
        return index
    return segment


def _lookup(container: Any, key: Any) -> Any:
    """Return ``container[key]`` or ``_MISSING`` when it cannot be addressed."""
    if isinstance(container, Mapping):
        return container.get(key, _MISSING)
    if is_container(container):
        if isinstance(key, int) and 0 <= key < len(container):
            return container[key]
    return _MISSING


def _store(container: Any, key: Any, value: Any, path: str) -> bool:
    """
    Assign ``container[key] = value``, padding lists with None as needed.

    Returns False when the container cannot hold that key at all (a string
    key on a sequence).
    """
    if isinstance(container, Sequence) and not isinstance(container, Mapping):
        if not isinstance(key, int):
            return False
        if isinstance(container, MutableSequence) and key >= len(container):
            log.debug("Padding list from %d to %d items for path '%s'", len(container), key + 1, path)
            container.extend([None] * (key + 1 - len(container)))
    container[key] = value
    return True


def _fail(options: AccessorOptions, path: str, parts: List[str], index: int) -> None:
    """Raise InvalidPath for ``parts[index]`` or, when errors are off, log and return None."""
    if options.throw_errors:
        raise InvalidPath(path, parts[index], index, join_prefix(parts, index))
    log.debug("Unresolvable segment '%s' in path '%s'; returning None", parts[index], path)
    return None


def get_by_dot(target: Container, path: str,
               options: Optional[AccessorOptions] = None, **flags: Any) -> Any:
    """
    Retrieve a nested value from ``target`` using a dot-notated path.

    Args:
        target: The mapping or sequence to read from.
        path: Dot-separated path, e.g. ``"d.0.a"``.
        options: Accessor options; ``flags`` override individual fields.

    Returns:
        The value at ``path``. None if it is missing and ``throw_errors`` is off.

    Raises:
        InvalidPath: If a segment is missing and ``throw_errors`` is on.
    """
    options = _resolve_options(options, flags)
    parts = split_path(path)
    current = target
    for i, part in enumerate(parts):
        current = _lookup(current, _key_for(current, part))
        if current is _MISSING:
            return _fail(options, path, parts, i)
    return current


def set_by_dot(target: Container, path: str, value: Any,
               options: Optional[AccessorOptions] = None, **flags: Any) -> Any:
    """
    Set a nested value in ``target`` using a dot-notated path.

    When ``is_expandable`` is on, every intermediate segment whose value is
    missing or not a container is replaced by a new list (if the next segment
    is numeric) or dict. Existing containers are traversed as they are.
    Containers created before a failing segment are left in place.

    Args:
        target: The mapping or sequence to modify in place.
        path: Dot-separated path, e.g. ``"c.cA"``.
        value: The value to assign at the terminal segment.
        options: Accessor options; ``flags`` override individual fields.

    Returns:
        ``value`` on success. None when ``is_immutable`` is on, or when the
        path is unresolvable and ``throw_errors`` is off.

    Raises:
        InvalidPath: If the path is unresolvable and ``throw_errors`` is on.
    """
    options = _resolve_options(options, flags)
    if options.is_immutable:
        log.debug("Ignoring write to '%s' on immutable accessor", path)
        return None

    parts = split_path(path)
    current = target
    for i, part in enumerate(parts[:-1]):
        key = _key_for(current, part)
        existing = _lookup(current, key)

        if options.is_expandable and not is_container(existing):
            new_container = [] if is_numeric_segment(parts[i + 1]) else {}
            if existing is not _MISSING:
                log.warning("Warning: Overwriting non-container value at '%s' (type: %s) in path '%s'.",
                            join_prefix(parts, i + 1), type(existing).__name__, path)
            if _store(current, key, new_container, path):
                log.debug("Created %s at '%s' for path '%s'",
                          type(new_container).__name__, join_prefix(parts, i + 1), path)
                existing = new_container

        if existing is _MISSING:
            return _fail(options, path, parts, i)
        current = existing

    last = len(parts) - 1
    key = _key_for(current, parts[last])
    if _lookup(current, key) is _MISSING and not options.is_expandable:
        return _fail(options, path, parts, last)
    if not is_container(current) or not _store(current, key, value, path):
        return _fail(options, path, parts, last)
    return value


def _resolve_options(options: Optional[AccessorOptions], flags: dict) -> AccessorOptions:
    options = options or AccessorOptions()
    return options.replace(**flags) if flags else options


# --- Accessor Class ---

class DotDotty:
    """
    Lens over a caller-owned container that reads and writes dot-paths.

    The accessor keeps a reference to ``target`` (never a copy) and its
    options; every access is an independent traversal. Subscription is the
    property-style interface, ``get``/``set`` the explicit one.

    Args:
        target: The mapping or sequence to wrap.
        options: Accessor options, defaults to ``AccessorOptions()``.
        **flags: ``is_immutable``, ``is_expandable`` or ``throw_errors``
            overriding the matching field of ``options``.
    """

    __slots__ = ("_target", "_options")

    def __init__(self, target: Container, options: Optional[AccessorOptions] = None, **flags: Any):
        if not is_container(target):
            raise TypeError(f"DotDotty target must be a mapping or sequence, not {type(target).__name__}")
        self._target = target
        self._options = _resolve_options(options, flags)

    @property
    def target(self) -> Container:
        return self._target

    @property
    def options(self) -> AccessorOptions:
        return self._options

    def get(self, path: str) -> Any:
        """Return the value at ``path`` (see ``get_by_dot``)."""
        return get_by_dot(self._target, path, self._options)

    def set(self, path: str, value: Any) -> Any:
        """Assign ``value`` at ``path`` and return it (see ``set_by_dot``)."""
        return set_by_dot(self._target, path, value, self._options)

    # --- Item Access Magic Methods ---
    def __getitem__(self, path: str) -> Any:
        return self.get(path)

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __contains__(self, path: Any) -> bool:
        """True if ``path`` resolves; never raises."""
        if not isinstance(path, str):
            return False
        try:
            get_by_dot(self._target, path, self._options, throw_errors=True)
        except InvalidPath:
            return False
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._target!r}, {self._options!r})"
