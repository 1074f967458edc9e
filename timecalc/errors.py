"""Custom exceptions for configuration and console input handling."""


class ConfigError(Exception):
    """Raised when a configuration file exists but cannot be loaded."""


class UnknownKeyError(ValueError):
    """Raised when a console key token does not map to any calculator key."""
