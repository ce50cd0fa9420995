"""
Runtime resolution of the hledger sidecar.

The application calls ``init_from_app()`` once during startup. It looks
for the sidecar in the application's resource directory and, if a real
binary is found there, caches its path for the rest of the process.
Everything else calls ``hledger_path()``, which returns the cached path or
the bare name ``hledger`` so the OS resolves it through PATH (the usual
situation when running from a source checkout).

Resolution never raises: every failure leaves the path unresolved.
"""

import os
import stat
from pathlib import Path
from typing import Optional, Union

from ..logger import get_logger
from .naming import SIDECAR_BASE_NAME, sidecar_name
from .once import SetOnce
from .resources import AppHandle

logger = get_logger("hledger_sidecar.sidecar.resolver")


def is_usable_sidecar(path: Union[str, Path]) -> bool:
    """
    Check that ``path`` looks like a real sidecar binary.

    It must exist, be a regular file and be non-empty. Empty files are the
    placeholders written at build time and are never usable.
    """
    try:
        st = os.stat(path)
    except OSError:
        return False

    if not stat.S_ISREG(st.st_mode) or st.st_size == 0:
        return False

    return True


class SidecarResolver:
    """
    Write-once holder of the sidecar path.

    One process-wide instance backs the module functions below. Hosts that
    prefer passing state explicitly can create their own instance at startup
    and hand it to consumers.
    """

    def __init__(self, fallback: str = SIDECAR_BASE_NAME):
        self._fallback_name = fallback
        self._resolved: SetOnce[str] = SetOnce()
        self._fallback: SetOnce[str] = SetOnce()

    @property
    def resolved(self) -> Optional[str]:
        """The validated bundled path, or None while unresolved."""
        return self._resolved.get()

    @property
    def is_resolved(self) -> bool:
        return self._resolved.is_set

    def init_from_app(self, app: AppHandle) -> bool:
        """
        Resolve the sidecar from ``app``'s resource directory.

        Call once during startup. A later call never replaces a path that
        was already resolved.

        Returns:
            True if this call stored the path.
        """
        name = sidecar_name()

        try:
            # Cached path must be absolute
            candidate = Path(app.resource_dir()).absolute() / name
        except Exception as e:
            logger.debug(f"No resource directory, using PATH lookup for {name}: {e}")
            return False

        if not is_usable_sidecar(candidate):
            logger.debug(f"No usable bundled sidecar at {candidate}")
            return False

        if not self._resolved.set(str(candidate)):
            logger.warning(
                f"Sidecar already resolved to {self._resolved.get()}, ignoring {candidate}"
            )
            return False

        logger.info(f"Using bundled sidecar: {candidate}")
        return True

    def path(self) -> str:
        """Path to spawn: the bundled sidecar if resolved, else the bare name."""
        resolved = self._resolved.get()
        if resolved is not None:
            return resolved
        return self._fallback.get_or_init(lambda: self._fallback_name)


_default_resolver = SidecarResolver()


def get_resolver() -> SidecarResolver:
    """Return the process-wide resolver."""
    return _default_resolver


def init_from_app(app: AppHandle) -> bool:
    """Resolve the process-wide sidecar path. Must be called during startup."""
    return _default_resolver.init_from_app(app)


def hledger_path() -> str:
    """
    Return the hledger binary path.

    Falls back to ``"hledger"`` (PATH lookup) when no bundled sidecar was
    found, e.g. during development.
    """
    return _default_resolver.path()
