from __future__ import annotations


class NamingError(Exception):
    """Base class for every error raised while naming a ticket directory."""


class InvalidInputError(NamingError, ValueError):
    """A required identifying field of the ticket is missing."""


class PolicyError(NamingError):
    """The selected naming policy cannot be loaded or used."""


class ConfigError(NamingError, ValueError):
    """The naming configuration file is malformed."""
