from __future__ import annotations

import pytest

from anyllm.base.errors import ValidationError
from anyllm.base.http import close_all_clients, get_httpx_client
from anyllm.base.tool_specs import EMPTY_SCHEMA, normalize_tool, tool_choice_name


@pytest.fixture(autouse=True)
def _fresh_pool():
    close_all_clients()
    yield
    close_all_clients()


def test_clients_are_pooled_per_base_url_purpose_and_timeout():
    a = get_httpx_client("https://api.example/v1", "openai", 30)
    assert get_httpx_client("https://api.example/v1", "openai", 30.0) is a
    assert get_httpx_client("https://api.example/v1", "openai", 10) is not a
    assert get_httpx_client("https://api.example/v1", "xai", 30) is not a


def test_closed_clients_are_replaced():
    a = get_httpx_client(None, "misc", 5)
    close_all_clients()
    assert a.is_closed
    b = get_httpx_client(None, "misc", 5)
    assert b is not a and not b.is_closed


def test_normalize_tool_accepts_both_shapes():
    nested = {
        "type": "function",
        "function": {"name": "sum", "description": "Add", "parameters": {"type": "object"}},
    }
    flat = {"name": "sum", "description": "Add", "parameters": {"type": "object"}}
    assert normalize_tool(nested) == normalize_tool(flat) == {
        "name": "sum",
        "description": "Add",
        "parameters": {"type": "object"},
    }
    assert normalize_tool({"name": "noop"}) == {"name": "noop", "parameters": EMPTY_SCHEMA}


@pytest.mark.parametrize("bad", [{"description": "nameless"}, "sum", {"function": {"name": ""}}])
def test_normalize_tool_rejects_malformed_specs(bad):
    with pytest.raises(ValidationError):
        normalize_tool(bad)


def test_tool_choice_name():
    assert tool_choice_name({"type": "function", "function": {"name": "f"}}) == "f"
    assert tool_choice_name({"name": "g"}) == "g"
    assert tool_choice_name("auto") is None
