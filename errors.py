# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every error raised by the machine."""


class ConfigurationError(EnigmaError):
    """Raised when an alphabet, wiring or configuration text is invalid."""


class UsageError(EnigmaError):
    """Raised when a valid machine is driven with bad settings or symbols."""
