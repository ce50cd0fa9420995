"""
Build-time placeholder for the hledger sidecar.

Packaging expects ``binaries/hledger-<target-triple>[.exe]`` to exist.
During development the real binary is often not downloaded yet, so an
empty file is created in its place. This is a convenience only: every
filesystem error is logged and ignored so the build is never aborted here.
"""

from pathlib import Path
from typing import Union

from ..logger import get_logger
from .naming import SIDECAR_BASE_NAME

logger = get_logger("hledger_sidecar.sidecar.placeholder")


def target_exe_suffix(target_triple: str) -> str:
    """Executable extension for a build target (".exe" for Windows triples)."""
    return ".exe" if "windows" in target_triple else ""


def placeholder_name(target_triple: str) -> str:
    """
    Sidecar artifact name for a target.

    >>> placeholder_name("x86_64-pc-windows-msvc")
    'hledger-x86_64-pc-windows-msvc.exe'
    """
    return f"{SIDECAR_BASE_NAME}-{target_triple}{target_exe_suffix(target_triple)}"


def placeholder_path(target_triple: str, binaries_dir: Union[str, Path] = "binaries") -> Path:
    """Path where packaging looks for the sidecar built for ``target_triple``."""
    return Path(binaries_dir) / placeholder_name(target_triple)


def ensure_placeholder(target_triple: str, binaries_dir: Union[str, Path] = "binaries") -> bool:
    """
    Create an empty sidecar file for ``target_triple`` if none exists.

    Args:
        target_triple: Build target, e.g. ``aarch64-apple-darwin``. Empty skips the step.
        binaries_dir: Directory the packaging step reads sidecars from.

    Returns:
        True if a placeholder was written by this call. The result is
        informational; callers are free to ignore it.
    """
    if not target_triple:
        return False

    path = placeholder_path(target_triple, binaries_dir)
    if path.exists():
        logger.debug(f"Sidecar already present: {path}")
        return False

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.debug(f"Could not create {path.parent}: {e}")

    try:
        path.write_bytes(b"")
    except OSError as e:
        logger.debug(f"Could not write placeholder {path}: {e}")
        return False

    logger.info(f"Created empty sidecar placeholder: {path}")
    return True
