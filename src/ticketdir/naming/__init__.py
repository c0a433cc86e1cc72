"""Naming subpackage public API and policy registry setup."""

from .cli import main as naming_main
from .config import load_config
from .errors import ConfigError, InvalidInputError, NamingError, PolicyError
from .models import NamingConfig, Ticket
from .namer import TicketDirectoryNamer, generate_name
from .policies import (
    BaseNamingPolicy,
    FunctionPolicy,
    IdOnlyPolicy,
    NamingPolicy,
    TemplatePolicy,
    TitlePolicy,
)
from .registry import available_policies, get_policy, load_policy, register_policy

# Register built-in policies in deterministic order.
register_policy("default", TitlePolicy)
register_policy("id-only", IdOnlyPolicy)
register_policy("template", TemplatePolicy)

__all__ = [
    "naming_main",
    "load_config",
    "NamingError",
    "InvalidInputError",
    "PolicyError",
    "ConfigError",
    "NamingConfig",
    "Ticket",
    "TicketDirectoryNamer",
    "generate_name",
    "NamingPolicy",
    "BaseNamingPolicy",
    "TitlePolicy",
    "IdOnlyPolicy",
    "TemplatePolicy",
    "FunctionPolicy",
    "available_policies",
    "get_policy",
    "load_policy",
    "register_policy",
]
