# dotty/options.py
"""
dotty.options
-------------

Accessor configuration. ``AccessorOptions`` is the immutable record every
``DotDotty`` carries; ``load_options`` assembles one from a defaults mapping,
a JSON/TOML file, environment variables (optionally seeded from a .env file)
and an overrides mapping.

Loading precedence (lowest to highest):
1.  Built-in defaults (mutable, expandable, raising).
2.  ``defaults`` mapping.
3.  Options file (``file_path``). Flags may sit at the root of the file or
    inside a ``dotty`` table/object.
4.  Environment variables ``<PREFIX>_IS_IMMUTABLE``, ``<PREFIX>_IS_EXPANDABLE``
    and ``<PREFIX>_THROW_ERRORS``.
5.  ``overrides_dict``.
"""

import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib

from dotenv import find_dotenv, load_dotenv

from .exceptions import InvalidOptions
from .utils import expand_path

log = logging.getLogger(__name__)

FILE_SECTION = "dotty"

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


@dataclass(frozen=True)
class AccessorOptions:
    """Policy switches for a path accessor.

    Attributes:
        is_immutable: When True every write is a no-op returning None.
        is_expandable: When True missing intermediate containers are created
            during writes and new terminal keys may be added.
        throw_errors: When True unresolvable paths raise ``InvalidPath``;
            otherwise the operation returns None.
    """

    is_immutable: bool = False
    is_expandable: bool = True
    throw_errors: bool = True

    def replace(self, **changes: Any) -> "AccessorOptions":
        """Return a copy with the given flags changed."""
        return dataclasses.replace(self, **_validate(changes))

    def as_dict(self) -> Dict[str, bool]:
        return dataclasses.asdict(self)


OPTION_NAMES = tuple(f.name for f in dataclasses.fields(AccessorOptions))


def _parse_bool(key: str, raw_value: Any) -> bool:
    """Coerce a flag value to bool, accepting the usual string spellings."""
    if isinstance(raw_value, bool):
        return raw_value
    if isinstance(raw_value, int) and raw_value in (0, 1):
        return bool(raw_value)
    if isinstance(raw_value, str):
        lower_val = raw_value.strip().lower()
        if lower_val in _TRUE_STRINGS:
            return True
        if lower_val in _FALSE_STRINGS:
            return False
    raise InvalidOptions(key, raw_value, reason="expected a boolean")


def _validate(values: Mapping[str, Any]) -> Dict[str, bool]:
    validated = {}
    for key, raw_value in values.items():
        if key not in OPTION_NAMES:
            raise InvalidOptions(key, raw_value)
        validated[key] = _parse_bool(key, raw_value)
    return validated


def _load_options_file(file_path: Optional[str]) -> Dict[str, Any]:
    """
    Load option flags from a JSON or TOML file.

    A top-level ``dotty`` table wins over root-level keys. Keys that are not
    option names are ignored so the flags can live in a shared config file.
    """
    if not file_path:
        return {}
    file_path = expand_path(file_path)
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Options file not found: {file_path}")

    ext = os.path.splitext(file_path)[1].lower()
    try:
        if ext == ".toml":
            with open(file_path, mode="rb") as f:
                content = tomllib.load(f)
        elif ext == ".json":
            with open(file_path, mode="r", encoding="utf-8") as f:
                content = json.load(f)
        else:
            raise ValueError(f"Unsupported options file type: {ext}")
    except Exception as e:
        raise RuntimeError(f"Error loading/parsing file {file_path}: {e}") from e

    if not isinstance(content, dict):
        raise RuntimeError(f"Options file {file_path} must contain a table/object at the root")

    section = content.get(FILE_SECTION)
    if isinstance(section, dict):
        content = section
    found = {k: v for k, v in content.items() if k in OPTION_NAMES}
    log.debug("Loaded options %s from %s", found, file_path)
    return found


def _load_dotenv_file(dotenv_path: Optional[str]) -> None:
    """Load a .env file into os.environ without overriding existing variables."""
    actual_dotenv_path = expand_path(dotenv_path) or find_dotenv(usecwd=True)
    if actual_dotenv_path and os.path.exists(actual_dotenv_path):
        if load_dotenv(dotenv_path=actual_dotenv_path, override=False):
            log.debug("Loaded .env file from %s", actual_dotenv_path)
    elif dotenv_path:
        log.warning("Warning: .env file not found at %s", actual_dotenv_path)


def _collect_env_vars(prefix: Optional[str]) -> Dict[str, str]:
    """Collect ``<PREFIX>_<OPTION>`` environment variables (case-insensitive)."""
    if prefix is None:
        return {}
    prefix_match = prefix.strip().rstrip("_").upper()
    prefix_match = f"{prefix_match}_" if prefix_match else ""

    env_data = {}
    for name in OPTION_NAMES:
        var = f"{prefix_match}{name.upper()}"
        for candidate in (var, var.lower()):
            if candidate in os.environ:
                env_data[name] = os.environ[candidate]
                log.debug("Option '%s' taken from environment variable %s", name, candidate)
                break
    return env_data


def load_options(defaults: Optional[Mapping[str, Any]] = None,
                 file_path: Optional[str] = None,
                 prefix: Optional[str] = None,
                 overrides_dict: Optional[Mapping[str, Any]] = None,
                 load_dotenv_file: bool = False,
                 dotenv_path: Optional[str] = None) -> AccessorOptions:
    """
    Build an ``AccessorOptions`` from layered sources.

    Args:
        defaults: Flags applied on top of the built-in defaults.
        file_path: JSON or TOML file holding flags (``~`` and ``$VARS`` expand).
        prefix: Environment variable prefix, e.g. ``"DOTTY"`` reads
            ``DOTTY_THROW_ERRORS``. ``None`` skips the environment.
        overrides_dict: Highest-precedence flags.
        load_dotenv_file: Load a .env file into the environment first.
        dotenv_path: Explicit .env path; searched from the cwd when omitted.

    Returns:
        The merged, validated options.

    Raises:
        InvalidOptions: On an unknown flag or a value that is not a boolean.
        FileNotFoundError: If ``file_path`` does not exist.
        RuntimeError: If the options file cannot be parsed.
    """
    if load_dotenv_file:
        _load_dotenv_file(dotenv_path)

    merged: Dict[str, bool] = {}
    for source, values in (("defaults", defaults or {}),
                           ("file", _load_options_file(file_path)),
                           ("env", _collect_env_vars(prefix)),
                           ("overrides_dict", overrides_dict or {})):
        validated = _validate(values)
        if validated:
            log.debug("Applying options from %s: %s", source, validated)
        merged.update(validated)

    return AccessorOptions(**merged)
