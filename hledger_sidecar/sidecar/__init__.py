"""
hledger sidecar location.

Build-time placeholder creation and runtime resolution of the bundled
hledger binary.
"""

from .naming import SIDECAR_BASE_NAME, sidecar_name
from .once import SetOnce
from .placeholder import (
    target_exe_suffix,
    placeholder_name,
    placeholder_path,
    ensure_placeholder,
)
from .resolver import (
    SidecarResolver,
    is_usable_sidecar,
    get_resolver,
    init_from_app,
    hledger_path,
)
from .resources import AppHandle, BundleAppHandle, ResourceDirUnavailable

__all__ = [
    "SIDECAR_BASE_NAME",
    "sidecar_name",
    "SetOnce",
    "target_exe_suffix",
    "placeholder_name",
    "placeholder_path",
    "ensure_placeholder",
    "SidecarResolver",
    "is_usable_sidecar",
    "get_resolver",
    "init_from_app",
    "hledger_path",
    "AppHandle",
    "BundleAppHandle",
    "ResourceDirUnavailable",
]
