"""Registry of naming policies and loading of custom ones."""

from __future__ import annotations

import importlib
import logging
from typing import Any, Callable, Dict, List, Optional

from .errors import PolicyError
from .models import NamingConfig
from .policies import BaseNamingPolicy, FunctionPolicy, NamingPolicy

logger = logging.getLogger("ticketdir.naming.registry")

PolicyFactory = Callable[[NamingConfig], NamingPolicy]

_POLICIES: Dict[str, PolicyFactory] = {}


def canonical_name(name: str | None) -> str:
    """Normalize policy identifiers: case, surrounding blanks, ``_`` vs ``-``."""
    return str(name or "").strip().lower().replace("_", "-")


def register_policy(name: str, factory: PolicyFactory) -> None:
    """Make a policy selectable by name; a later registration replaces an earlier one."""
    key = canonical_name(name)
    if not key:
        raise PolicyError("Naming policy name must not be empty")
    _POLICIES[key] = factory


def available_policies() -> List[str]:
    return list(_POLICIES)


def get_policy(name: str, config: Optional[NamingConfig] = None) -> NamingPolicy:
    """Instantiate a registered policy."""
    key = canonical_name(name)
    try:
        factory = _POLICIES[key]
    except KeyError:
        available = ", ".join(available_policies())
        raise PolicyError(f"Unknown naming policy '{name}'. Available: {available}") from None
    return factory(config or NamingConfig())


def as_policy(target: Any, config: Optional[NamingConfig] = None) -> NamingPolicy:
    """Turn a class, instance or function into a NamingPolicy.

    Subclasses of BaseNamingPolicy are built with the configuration, other
    classes with no arguments. Plain callables are wrapped in FunctionPolicy.
    """
    config = config or NamingConfig()
    if isinstance(target, type):
        try:
            if issubclass(target, BaseNamingPolicy):
                return target(config)
            target = target()
        except PolicyError:
            raise
        except Exception as e:
            raise PolicyError(f"Cannot instantiate naming policy {target!r}: {e}") from e
    if isinstance(target, NamingPolicy):
        return target
    if callable(target):
        return FunctionPolicy(target, config)
    raise PolicyError(f"{target!r} is neither a naming policy nor a callable")


def _import_policy(spec: str, config: NamingConfig) -> NamingPolicy:
    module_name, _, attr_path = spec.partition(":")
    if not module_name or not attr_path:
        raise PolicyError(f"Policy path '{spec}' must look like 'package.module:attribute'")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise PolicyError(f"Cannot import naming policy module '{module_name}': {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError:
            raise PolicyError(f"'{module_name}' has no attribute '{attr_path}'") from None

    logger.info("Loaded custom naming policy %s", spec)
    return as_policy(target, config)


def load_policy(spec: Optional[str] = None, config: Optional[NamingConfig] = None) -> NamingPolicy:
    """Select the naming policy by registry name or ``package.module:attribute``.

    Without ``spec`` the policy named in the configuration is used.
    """
    config = config or NamingConfig()
    spec = spec or config.policy
    if ":" in spec:
        return _import_policy(spec.strip(), config)
    return get_policy(spec, config)


__all__ = [
    "register_policy",
    "available_policies",
    "get_policy",
    "as_policy",
    "load_policy",
]
