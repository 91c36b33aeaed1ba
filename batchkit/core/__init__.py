"""
Core module - Interfaces, protocols, errors and data types for batchkit.
"""
from .interfaces import (
    # Enums
    Platform,
    SelectionContext,
    SortKey,

    # Data classes
    BatchRequest,
    ToolInvocation,
    RunResult,
    LogEntry,

    # Abstract interfaces
    ILogSink,
    ISelectionSource,
    IPrompter,
    IBatchRunner,
    IArchiver,
    IAppLauncher,
)
from .errors import BatchKitError, ConfigurationError, UnsupportedPlatformError
from .platform import current_platform, detect_platform

__all__ = [
    # Enums
    "Platform",
    "SelectionContext",
    "SortKey",

    # Data classes
    "BatchRequest",
    "ToolInvocation",
    "RunResult",
    "LogEntry",

    # Abstract interfaces
    "ILogSink",
    "ISelectionSource",
    "IPrompter",
    "IBatchRunner",
    "IArchiver",
    "IAppLauncher",

    # Errors
    "BatchKitError",
    "ConfigurationError",
    "UnsupportedPlatformError",

    # Platform
    "current_platform",
    "detect_platform",
]
