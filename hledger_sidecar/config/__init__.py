"""
Configuration module - env parsing and .env loading.
"""

from .env_config import (
    parse_bool_env,
    get_str_env,
    get_build_target,
    get_binaries_dir,
    is_verbose,
    load_env,
)

__all__ = [
    "parse_bool_env",
    "get_str_env",
    "get_build_target",
    "get_binaries_dir",
    "is_verbose",
    "load_env",
]
