from __future__ import annotations

import logging
import os
from typing import Any, Optional, Union

from .errors import InvalidInputError
from .models import NamingConfig
from .policies import NamingPolicy, TitlePolicy, compose, ticket_id
from .registry import load_policy
from .text import UNICODE

# Logger setup
logger = logging.getLogger("ticketdir.naming.namer")

# Fixed settings, independent of the environment, for generate_name()
_DEFAULT_POLICY = TitlePolicy(
    NamingConfig(
        policy="default",
        punctuation=UNICODE,
        join_token="_",
        word_separator="_",
        lowercase=True,
        template="{id}_{title}",
    )
)


def generate_name(
    ticket: Any,
    base_dir: Optional[str] = None,
    separator: str = os.sep,
    policy: Union[NamingPolicy, str, None] = None,
) -> str:
    """Return the directory name for a ticket's artifacts.

    With the default policy the name is ``<id>_<title>`` where the title is
    trimmed, stripped of punctuation, whitespace-collapsed, joined with
    underscores and lowercased. When ``base_dir`` is given the result is
    ``base_dir + separator + name``. An empty ``base_dir`` counts as no base
    directory, so the bare name is returned rather than a root-anchored one.

    Raises InvalidInputError when the ticket has no id.
    """
    if policy is None:
        policy = _DEFAULT_POLICY
    elif isinstance(policy, str):
        policy = load_policy(policy)
    return policy.generate_name(ticket, base_dir, separator)


class TicketDirectoryNamer:
    """Names ticket directories under a base directory with a configured policy.

    A failing custom policy does not stop the download: the ticket falls
    back to ``base_dir + separator + id``. A ticket without id is always
    refused.
    """

    def __init__(
        self,
        config: Optional[NamingConfig] = None,
        policy: Union[NamingPolicy, str, None] = None,
        separator: str = os.sep,
    ):
        self.config = config or NamingConfig()
        if policy is None or isinstance(policy, str):
            policy = load_policy(policy, self.config)
        self.policy = policy
        self.separator = separator
        self._base_dir = self.config.base_dir

    @property
    def base_dir(self) -> Optional[str]:
        return self._base_dir

    def set_base_dir(self, dir_name: Optional[Union[str, os.PathLike]]) -> None:
        """Set the directory the ticket directories are placed in."""
        logger.debug("Base directory set to %s", dir_name)
        self._base_dir = os.fspath(dir_name) if dir_name is not None else None

    def get_ticket_path(self, ticket: Any) -> str:
        """Return the path of the ticket directory."""
        try:
            path = self.policy.generate_name(ticket, self._base_dir, self.separator)
        except InvalidInputError:
            raise
        except Exception as e:
            logger.error(f"Naming policy {self.policy!r} failed: {e}")
            path = self.backup_name(ticket)
            logger.debug("Backup name: %s", path)
            return path

        if not isinstance(path, str) or not path:
            logger.error(f"Naming policy {self.policy!r} returned {path!r} instead of a path")
            path = self.backup_name(ticket)
            logger.debug("Backup name: %s", path)
            return path

        logger.debug("Generated: %s", path)
        return path

    def backup_name(self, ticket: Any) -> str:
        """Name used when the policy cannot produce one: the bare id."""
        return compose(self._base_dir, self.separator, ticket_id(ticket))
