"""Perch exception hierarchy.

Shared across the filter, registry, and application loading so every
module raises and catches the same types.

Static-location problems have no exception type: a bad static folder is
logged and skipped, never raised.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when filter configuration is invalid.

    Typically raised during lifespan startup, before any request is served.
    """


class ApplicationError(PerchError):
    """Raised when the wrapped application fails its ``init()`` hook."""
