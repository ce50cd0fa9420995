"""
hledger-sidecar - locate the hledger binary bundled with an application.

Creates build-time placeholders so packaging does not fail before the real
binary is fetched, and resolves the bundled binary once at startup with a
PATH fallback.
"""

__version__ = "0.1.0"

from .logger import get_logger, setup_logging
from .sidecar import (
    SIDECAR_BASE_NAME,
    AppHandle,
    BundleAppHandle,
    ResourceDirUnavailable,
    SidecarResolver,
    ensure_placeholder,
    get_resolver,
    hledger_path,
    init_from_app,
    is_usable_sidecar,
    placeholder_path,
)

__all__ = [
    "__version__",
    "get_logger",
    "setup_logging",
    "SIDECAR_BASE_NAME",
    "AppHandle",
    "BundleAppHandle",
    "ResourceDirUnavailable",
    "SidecarResolver",
    "ensure_placeholder",
    "get_resolver",
    "hledger_path",
    "init_from_app",
    "is_usable_sidecar",
    "placeholder_path",
]
