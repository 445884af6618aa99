"""Plugin subsystem exceptions."""

from vibepack.exceptions import VibekitError


class PluginError(VibekitError):
    """Base class for plugin subsystem errors."""


class PluginConfigError(PluginError):
    """Raised when plugin config is malformed."""


class PluginLoadError(PluginError):
    """Raised when plugin entrypoint loading/instantiation fails."""
