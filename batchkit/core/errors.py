"""
Exception types raised by batchkit.
"""


class BatchKitError(ValueError):
    """Base class for errors that abort an action before or during dispatch."""


class ConfigurationError(BatchKitError):
    """An enumerated parameter received a value outside its closed set."""

    def __init__(self, name: str, value, allowed):
        self.name = name
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid {name}: {value!r} (expected one of: {', '.join(map(str, self.allowed))})"
        )


class UnsupportedPlatformError(BatchKitError):
    """A platform-restricted action was invoked on another platform."""

    def __init__(self, action: str, platform):
        self.action = action
        self.platform = platform
        name = getattr(platform, "value", platform)
        super().__init__(f"{action} is not supported on {name}")
