"""
Sidecar file names.
"""

import sys

SIDECAR_BASE_NAME = "hledger"


def sidecar_name() -> str:
    """Sidecar filename for the platform this process runs on."""
    return f"{SIDECAR_BASE_NAME}.exe" if sys.platform == "win32" else SIDECAR_BASE_NAME
