"""
Environment variable parsing for hledger-sidecar.

Single source of truth for reading HLEDGER_SIDECAR_* and build-system
variables. Only the CLI and logging read these; the placeholder and
resolver functions take their inputs as arguments.
"""

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv

DEFAULT_BINARIES_DIR = "binaries"

_TRUTHY = frozenset({"true", "1", "yes", "on"})
_FALSY = frozenset({"false", "0", "no", "off", ""})


def _raw_env(key: str, legacy_key: Optional[str]) -> Optional[str]:
    """Value of ``key``, or of ``legacy_key`` when ``key`` is absent."""
    if key in os.environ:
        return os.environ[key]
    if legacy_key:
        return os.environ.get(legacy_key)
    return None


def parse_bool_env(
    key: str,
    default: bool,
    legacy_key: Optional[str] = None,
) -> bool:
    """
    Read an on/off switch from the environment.

    Recognised words (any case): true/yes/on/1 and false/no/off/0. A set
    but empty variable reads as off; anything unrecognised keeps ``default``.
    """
    raw = _raw_env(key, legacy_key)
    if raw is None:
        return default

    word = raw.strip().lower()
    if word in _TRUTHY:
        return True
    if word in _FALSY:
        return False
    return default

    value_lower = value.lower().strip()
    if value_lower in ("true", "1", "yes", "on"):
        return True
    if value_lower in ("false", "0", "no", "off", ""):
        return False
    return default


def get_str_env(
    key: str,
    default: str,
    legacy_key: Optional[str] = None,
) -> str:
    """
    Read a string from environment variable, stripped of whitespace.

    Empty values count as unset.
    """
    value = os.environ.get(key, "").strip()
    if not value and legacy_key:
        value = os.environ.get(legacy_key, "").strip()
    return value or default


def get_build_target() -> str:
    """Target triple of the current build. TARGET (set by Cargo) or HLEDGER_SIDECAR_TARGET."""
    return get_str_env("TARGET", "", "HLEDGER_SIDECAR_TARGET")


def get_binaries_dir() -> str:
    """Directory holding sidecar artifacts. HLEDGER_SIDECAR_BINARIES_DIR."""
    return get_str_env("HLEDGER_SIDECAR_BINARIES_DIR", DEFAULT_BINARIES_DIR)


def is_verbose() -> bool:
    """Debug logging switch. HLEDGER_SIDECAR_VERBOSE."""
    return parse_bool_env("HLEDGER_SIDECAR_VERBOSE", False)


def load_env(path: Optional[Union[str, Path]] = None) -> bool:
    """
    Load variables from a .env file without overriding the environment.

    Args:
        path: Explicit .env file. Defaults to searching from the working directory.

    Returns:
        True if a file was found and loaded.
    """
    dotenv_path = Path(path) if path is not None else find_dotenv(usecwd=True)
    if not dotenv_path:
        return False
    return load_dotenv(dotenv_path, override=False)
