"""Tests for TicketDirectoryNamer: base directory handling and the backup name."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from types import SimpleNamespace

import pytest

from ticketdir.naming import (
    FunctionPolicy,
    IdOnlyPolicy,
    InvalidInputError,
    NamingConfig,
    Ticket,
    TicketDirectoryNamer,
)

TICKET = Ticket(id="artf74149", title="[Screen] The buttons are not visible")


def failing(ticket, base_dir, separator):
    raise RuntimeError("boom")


def test_default_policy_with_configured_base_dir():
    namer = TicketDirectoryNamer(NamingConfig(base_dir="/data/tickets"), separator="/")
    assert namer.base_dir == "/data/tickets"
    assert namer.get_ticket_path(TICKET) == "/data/tickets/artf74149_screen_the_buttons_are_not_visible"


def test_without_base_dir_the_name_is_bare():
    namer = TicketDirectoryNamer(NamingConfig(), separator="/")
    assert namer.get_ticket_path(TICKET) == "artf74149_screen_the_buttons_are_not_visible"


def test_base_dir_from_environment(monkeypatch):
    monkeypatch.setenv("TICKETDIR_BASE_DIR", "/env/base")
    namer = TicketDirectoryNamer(separator="/")
    assert namer.get_ticket_path(TICKET).startswith("/env/base/artf74149_")


def test_set_base_dir_accepts_paths():
    namer = TicketDirectoryNamer(NamingConfig(), separator="/")
    namer.set_base_dir(PurePosixPath("/new/base"))
    assert namer.base_dir == "/new/base"
    assert namer.get_ticket_path(TICKET) == "/new/base/artf74149_screen_the_buttons_are_not_visible"
    namer.set_base_dir(None)
    assert namer.get_ticket_path(TICKET) == "artf74149_screen_the_buttons_are_not_visible"


def test_policy_selected_by_config():
    namer = TicketDirectoryNamer(NamingConfig(policy="id-only", base_dir="b"), separator="/")
    assert isinstance(namer.policy, IdOnlyPolicy)
    assert namer.get_ticket_path(TICKET) == "b/artf74149"


def test_policy_argument_overrides_config():
    namer = TicketDirectoryNamer(NamingConfig(policy="id-only"), policy="template", separator="/")
    assert namer.get_ticket_path(TICKET) == "artf74149_screen_the_buttons_are_not_visible"


def test_failing_policy_falls_back_to_id(caplog):
    namer = TicketDirectoryNamer(NamingConfig(base_dir="/base"), policy=FunctionPolicy(failing), separator="/")
    with caplog.at_level(logging.ERROR, logger="ticketdir.naming.namer"):
        assert namer.get_ticket_path(TICKET) == "/base/artf74149"
    assert "boom" in caplog.text


@pytest.mark.parametrize("returned", [None, "", 42])
def test_non_path_result_falls_back_to_id(returned, caplog):
    policy = FunctionPolicy(lambda ticket, base_dir, separator: returned)
    namer = TicketDirectoryNamer(NamingConfig(), policy=policy, separator="/")
    with caplog.at_level(logging.ERROR, logger="ticketdir.naming.namer"):
        assert namer.get_ticket_path(TICKET) == "artf74149"
    assert "instead of a path" in caplog.text


def test_missing_id_is_never_replaced_by_a_backup_name():
    namer = TicketDirectoryNamer(NamingConfig(base_dir="/base"), policy=FunctionPolicy(failing), separator="/")
    with pytest.raises(InvalidInputError):
        namer.get_ticket_path(SimpleNamespace(id=None, title="x"))


def test_repeated_calls_are_identical():
    namer = TicketDirectoryNamer(NamingConfig(base_dir="/base"), separator="/")
    assert namer.get_ticket_path(TICKET) == namer.get_ticket_path(TICKET)


def test_debug_log_mentions_ticket_and_base(caplog):
    namer = TicketDirectoryNamer(NamingConfig(base_dir="/base"), separator="/")
    with caplog.at_level(logging.DEBUG, logger="ticketdir.naming"):
        namer.get_ticket_path(TICKET)
    assert "artf74149" in caplog.text
    assert "/base" in caplog.text
