# dotty/exceptions.py
"""
dotty.exceptions
----------------

Custom exceptions for dotty.
"""


class InvalidPath(LookupError):
    """
    Raised when a dot-path cannot be resolved or must not be created.

    The message names the failing segment, the prefix leading to it and the
    full path, with a caret under the position where resolution stopped.
    """

    def __init__(self, path, segment, index, prefix=""):
        if index == 0:
            message = f'invalid target "{segment}"\n{path}\n^'
        else:
            message = f'invalid target "{segment}" in "{prefix}"\n{path}\n{" " * len(prefix)}^'
        super().__init__(message)
        self.path = path
        self.segment = segment
        self.index = index
        self.prefix = prefix


class InvalidOptions(ValueError):
    """
    Raised when accessor options name an unknown flag or a non-boolean value.
    """

    def __init__(self, key, value=None, reason="unknown option"):
        super().__init__(f"Invalid accessor option '{key}' ({reason}): {value!r}")
        self.key = key
        self.value = value
