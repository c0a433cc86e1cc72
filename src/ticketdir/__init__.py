"""ticketdir: filesystem-safe directory names for downloaded ticket artifacts."""

from .naming import (
    NamingConfig,
    Ticket,
    TicketDirectoryNamer,
    generate_name,
)

__all__ = [
    "NamingConfig",
    "Ticket",
    "TicketDirectoryNamer",
    "generate_name",
]
