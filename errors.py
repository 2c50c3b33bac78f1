# errors.py
from __future__ import annotations


class ConfigurationError(ValueError):
    """A starting position, plugboard or key sheet that cannot be used."""


class UsageError(Exception):
    """Unknown command-line option or an option missing its argument."""
