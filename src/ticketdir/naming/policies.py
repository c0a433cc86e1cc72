from __future__ import annotations

import logging
import os
import string
from typing import Any, Callable, Mapping, Optional, Protocol, runtime_checkable

from .errors import InvalidInputError, PolicyError
from .models import NamingConfig
from .text import is_path_illegal, sanitize, strip_path_illegal, to_text

# Logger setup
logger = logging.getLogger("ticketdir.naming.policies")


@runtime_checkable
class NamingPolicy(Protocol):
    """Anything that can turn a ticket into a directory name."""

    def generate_name(
        self,
        ticket: Any,
        base_dir: Optional[str] = None,
        separator: str = os.sep,
    ) -> str:
        ...


def ticket_field(ticket: Any, name: str, default: Any = None) -> Any:
    """Read a field from a Ticket, any attribute-bearing object or a mapping."""
    if isinstance(ticket, Mapping):
        return ticket.get(name, default)
    return getattr(ticket, name, default)


def ticket_id(ticket: Any) -> str:
    """Return the ticket id as text; a missing or blank id is refused."""
    value = ticket_field(ticket, "id")
    if value is None:
        raise InvalidInputError("Ticket has no id: cannot build a unique directory name")
    text = to_text(value)
    if not text.strip():
        raise InvalidInputError("Ticket id is blank: cannot build a unique directory name")
    return text


def compose(base_dir: Any, separator: str, name: str) -> str:
    """Prefix ``name`` with ``base_dir`` and ``separator`` when a base is given."""
    if base_dir is None:
        return name
    base = os.fspath(base_dir)
    if not base:
        return name
    return f"{base}{separator}{name}"


def _check_token(value: str, setting: str) -> None:
    if any(ch.isspace() or is_path_illegal(ch) for ch in value):
        raise PolicyError(f"{setting} {value!r} contains whitespace or characters not allowed in a path")


class BaseNamingPolicy:
    """Shared behaviour of the built-in policies.

    Subclasses only decide the bare name through ``name_for()``; id
    validation and base directory composition happen here.
    """

    name = "base"

    def __init__(self, config: Optional[NamingConfig] = None):
        self.config = config or NamingConfig()

    def generate_name(
        self,
        ticket: Any,
        base_dir: Optional[str] = None,
        separator: str = os.sep,
    ) -> str:
        tid = ticket_id(ticket)
        logger.debug("Generating name for ticket id %s", tid)
        logger.debug("Base directory: %s", base_dir)
        return compose(base_dir, separator, self.name_for(ticket, tid))

    def name_for(self, ticket: Any, tid: str) -> str:
        raise NotImplementedError("name_for() must be implemented by subclasses")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class TitlePolicy(BaseNamingPolicy):
    """``<id><join_token><sanitized title>``, e.g. ``artf1_hello_world``."""

    name = "default"

    def __init__(self, config: Optional[NamingConfig] = None):
        super().__init__(config)
        _check_token(self.config.join_token, "join_token")
        _check_token(self.config.word_separator, "word_separator")

    def clean(self, value: Any) -> str:
        return sanitize(
            value,
            punctuation=self.config.punctuation,
            word_separator=self.config.word_separator,
            lowercase=self.config.lowercase,
        )

    def name_for(self, ticket: Any, tid: str) -> str:
        return f"{tid}{self.config.join_token}{self.clean(ticket_field(ticket, 'title'))}"


class IdOnlyPolicy(BaseNamingPolicy):
    """The bare ticket id; also the fallback name when a policy fails."""

    name = "id-only"

    def name_for(self, ticket: Any, tid: str) -> str:
        return tid


class TemplatePolicy(TitlePolicy):
    """Name built from a restricted format expression such as ``{kpm}_{id}_{title}``.

    Only plain replacement fields from ``FIELDS`` are accepted: no attribute
    or index access, no conversions and no nested fields, so a template taken
    from a configuration file cannot reach into the ticket object. The
    template must contain ``{id}``.
    """

    name = "template"
    FIELDS = ("id", "title", "kpm", "tracker")

    def __init__(self, config: Optional[NamingConfig] = None, template: Optional[str] = None):
        super().__init__(config)
        self.template = template if template is not None else self.config.template
        self._check_template(self.template)

    @classmethod
    def _check_template(cls, template: str) -> None:
        try:
            parsed = list(string.Formatter().parse(template))
        except ValueError as e:
            raise PolicyError(f"Invalid naming template {template!r}: {e}") from e

        seen = set()
        for literal, field, spec, conversion in parsed:
            if any(is_path_illegal(ch) for ch in literal):
                raise PolicyError(f"Naming template {template!r} contains characters not allowed in a path")
            if field is None:
                continue
            if field not in cls.FIELDS:
                allowed = ", ".join(cls.FIELDS)
                raise PolicyError(f"Unsupported field {{{field}}} in naming template; allowed: {allowed}")
            if conversion is not None or (spec and "{" in spec):
                raise PolicyError(f"Conversions and nested fields are not allowed in naming template {template!r}")
            if field == "id" and spec:
                raise PolicyError(f"Format specs on {{id}} are not allowed in naming template {template!r}")
            seen.add(field)

        if "id" not in seen:
            raise PolicyError(f"Naming template {template!r} must contain {{id}}")

    def name_for(self, ticket: Any, tid: str) -> str:
        kpm = ticket_field(ticket, "kpm", 0)
        values = {
            "id": tid,
            "title": self.clean(ticket_field(ticket, "title")),
            "kpm": kpm if kpm is not None else 0,
            "tracker": self.clean(ticket_field(ticket, "tracker")),
        }
        try:
            name = self.template.format_map(values)
        except (ValueError, TypeError) as e:
            raise PolicyError(f"Cannot apply naming template {self.template!r}: {e}") from e
        # format specs may pad with spaces
        return strip_path_illegal("".join(name.split()))


class FunctionPolicy(BaseNamingPolicy):
    """Adapter for a plain ``func(ticket, base_dir, separator) -> str``.

    The function owns the whole name, base directory included.
    """

    def __init__(self, func: Callable[..., str], config: Optional[NamingConfig] = None):
        super().__init__(config)
        self.func = func
        self.name = getattr(func, "__name__", "function")

    def generate_name(
        self,
        ticket: Any,
        base_dir: Optional[str] = None,
        separator: str = os.sep,
    ) -> str:
        ticket_id(ticket)
        return self.func(ticket, base_dir, separator)


__all__ = [
    "NamingPolicy",
    "BaseNamingPolicy",
    "TitlePolicy",
    "IdOnlyPolicy",
    "TemplatePolicy",
    "FunctionPolicy",
    "ticket_field",
    "ticket_id",
    "compose",
]
