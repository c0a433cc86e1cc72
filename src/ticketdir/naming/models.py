from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError, InvalidInputError


# Load .env configuration at module import
load_dotenv()


def _parse_bool(value: str, default: bool = True) -> bool:
    """Parse boolean environment variable values."""
    if value.lower() in ('true', '1', 'yes', 'on'):
        return True
    elif value.lower() in ('false', '0', 'no', 'off'):
        return False
    else:
        return default


@dataclass(frozen=True)
class Ticket:
    """A work item from an issue tracker, as seen by the naming policies."""

    id: str
    title: str = ""
    kpm: int = 0
    url: str = ""
    tracker: str = ""
    description: str = ""
    analysis: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Ticket:
        """Build a Ticket from a parsed YAML/JSON mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        if values.get("id") is None:
            raise InvalidInputError(f"Ticket record has no id: {dict(data)!r}")
        values["id"] = str(values["id"])
        kpm = values.pop("kpm", None)
        if kpm is not None:
            try:
                values["kpm"] = int(kpm)
            except (TypeError, ValueError) as e:
                raise InvalidInputError(f"Ticket {values['id']} has a non-numeric kpm: {e}") from e
        return cls(**values)


@dataclass
class NamingConfig:
    """Configuration of the ticket directory naming policy."""

    # Registry name or "package.module:attribute" of the policy
    policy: str = None
    # Directory under which ticket directories are placed
    base_dir: Optional[str] = None

    # Title sanitization settings
    punctuation: str = None
    join_token: str = None
    word_separator: str = None
    lowercase: bool = None

    # Format expression used by the "template" policy
    template: str = None

    def __post_init__(self):
        """Load configuration from environment variables if not provided."""
        if self.policy is None:
            self.policy = os.getenv("TICKETDIR_POLICY", "default")
        if self.base_dir is None:
            self.base_dir = os.getenv("TICKETDIR_BASE_DIR") or None
        if self.punctuation is None:
            self.punctuation = os.getenv("TICKETDIR_PUNCTUATION", "unicode")
        if self.join_token is None:
            self.join_token = os.getenv("TICKETDIR_JOIN_TOKEN", "_")
        if self.word_separator is None:
            self.word_separator = os.getenv("TICKETDIR_WORD_SEPARATOR", "_")
        if self.lowercase is None:
            self.lowercase = _parse_bool(os.getenv("TICKETDIR_LOWERCASE", "true"))
        if self.template is None:
            self.template = os.getenv("TICKETDIR_TEMPLATE", "{id}_{title}")

        if not self.policy:
            raise ConfigError("TICKETDIR_POLICY must not be empty")
