"""vibekit exceptions."""


class VibekitError(Exception):
    """Base class for vibekit errors."""


class IntegrationConfigError(VibekitError, ValueError):
    """Raised when integration options are malformed."""
