"""
Platform detection, resolved once per process.
"""
from functools import lru_cache
import sys

from .interfaces import Platform


def detect_platform(identifier: str) -> Platform:
    """Map a sys.platform style identifier to a Platform."""
    if identifier.startswith(("win", "cygwin", "msys")):
        return Platform.WINDOWS
    if identifier == "darwin":
        return Platform.MACOS
    return Platform.LINUX


@lru_cache(maxsize=1)
def current_platform() -> Platform:
    """Platform of the running interpreter."""
    return detect_platform(sys.platform)
