"""
Resource directory lookup for the running application.

The resolver only needs something that can answer ``resource_dir()``.
Host applications with their own packaging pass their own handle;
``BundleAppHandle`` covers PyInstaller builds and explicit directories.
"""

import sys
from pathlib import Path
from typing import Optional, Protocol, Union


class ResourceDirUnavailable(RuntimeError):
    """Raised when the application has no resource directory to report."""


class AppHandle(Protocol):
    """Anything able to report the application's bundled resource directory."""

    def resource_dir(self) -> Path:
        ...


class BundleAppHandle:
    """
    Resource directory of a bundled Python application.

    Lookup order:
    1. ``resource_dir`` passed to the constructor
    2. ``sys._MEIPASS`` when running from a frozen PyInstaller build

    Raises ``ResourceDirUnavailable`` otherwise, which is the normal case
    when running from a source checkout.
    """

    def __init__(self, resource_dir: Optional[Union[str, Path]] = None):
        self._resource_dir = Path(resource_dir) if resource_dir is not None else None

    @property
    def is_frozen(self) -> bool:
        return bool(getattr(sys, "frozen", False)) and hasattr(sys, "_MEIPASS")

    def resource_dir(self) -> Path:
        if self._resource_dir is not None:
            return self._resource_dir
        if self.is_frozen:
            return Path(sys._MEIPASS)  # type: ignore[attr-defined]
        raise ResourceDirUnavailable(
            "Not running from a bundled build and no resource directory was given"
        )

    def __repr__(self) -> str:
        return f"BundleAppHandle(resource_dir={self._resource_dir!r})"
