"""Tests for scope pruning and normalization. No database needed: clients are transient model objects."""
import pytest

from admin_server.models import Client
from admin_server.scopes import normalize_scopes, prune_client_scopes, removed_scopes


def _client(client_id: str, scopes: list[str]) -> Client:
    c = Client(client_id=client_id, resource_server_id=1)
    c.set_scopes_list(scopes)
    return c


def test_shrinking_scopes_prunes_client():
    """[a,b,c] -> [a]: client holding [a,c] keeps only [a]."""
    c = _client("c1", ["a", "c"])
    changed = prune_client_scopes(["a"], ["a", "b", "c"], [c])
    assert changed == [c]
    assert c.get_scopes_list() == ["a"]


def test_growing_scopes_leaves_clients_alone():
    """[a,b,c] -> [a,b,c,d]: nothing removed, nothing touched."""
    c = _client("c1", ["a", "c"])
    before = c.scopes
    assert prune_client_scopes(["a", "b", "c", "d"], ["a", "b", "c"], [c]) == []
    assert c.scopes == before


def test_reordering_scopes_is_noop():
    c = _client("c1", ["c", "a"])
    assert prune_client_scopes(["c", "b", "a"], ["a", "b", "c"], [c]) == []
    assert c.get_scopes_list() == ["c", "a"]


def test_only_intersecting_clients_are_returned():
    holds_b = _client("holds-b", ["a", "b"])
    no_b = _client("no-b", ["a", "c"])
    changed = prune_client_scopes(["a", "c"], ["a", "b", "c"], [holds_b, no_b])
    assert changed == [holds_b]
    assert holds_b.get_scopes_list() == ["a"]
    assert no_b.get_scopes_list() == ["a", "c"]


def test_remaining_order_is_preserved():
    c = _client("c1", ["d", "b", "a", "c"])
    prune_client_scopes(["a", "c", "d"], ["a", "b", "c", "d"], [c])
    assert c.get_scopes_list() == ["d", "a", "c"]


def test_empty_old_scopes_is_noop():
    c = _client("c1", ["x"])
    assert prune_client_scopes([], [], [c]) == []
    assert c.get_scopes_list() == ["x"]


def test_empty_new_scopes_removes_everything_offered():
    c = _client("c1", ["a", "b"])
    prune_client_scopes([], ["a", "b", "c"], [c])
    assert c.get_scopes_list() == []


def test_never_removes_scope_not_dropped_by_resource_server():
    """A client scope the parent never listed is not ours to remove."""
    c = _client("c1", ["a", "legacy"])
    prune_client_scopes(["b"], ["a", "b"], [c])
    assert c.get_scopes_list() == ["legacy"]


def test_duplicates_do_not_cause_partial_removal():
    """Duplicate entries are compared as sets: every copy of a removed scope goes."""
    c = _client("c1", ["a", "b", "a", "c"])
    prune_client_scopes(["c", "c"], ["a", "a", "b", "c"], [c])
    assert c.get_scopes_list() == ["c"]


def test_duplicate_in_new_scopes_keeps_scope():
    c = _client("c1", ["a", "b"])
    assert prune_client_scopes(["a", "a", "b"], ["a", "b"], [c]) == []


def test_prune_is_idempotent():
    c = _client("c1", ["a", "b", "c"])
    prune_client_scopes(["a"], ["a", "b", "c"], [c])
    once = c.get_scopes_list()
    assert prune_client_scopes(["a"], ["a", "b", "c"], [c]) == []
    assert c.get_scopes_list() == once == ["a"]


def test_never_adds_scopes():
    c = _client("c1", [])
    prune_client_scopes(["a"], ["a", "b"], [c])
    assert c.get_scopes_list() == []


@pytest.mark.parametrize(
    "new, old, expected",
    [
        (["a"], ["a", "b", "c"], ["b", "c"]),
        (["a", "b"], ["a", "b"], []),
        ([], ["b", "a", "b"], ["b", "a"]),
        (["x"], [], []),
    ],
)
def test_removed_scopes(new, old, expected):
    assert removed_scopes(new, old) == expected


def test_normalize_scopes_strips_and_dedupes():
    assert normalize_scopes([" read ", "write", "read"]) == ["read", "write"]


@pytest.mark.parametrize("bad", ["", "   ", "two words", "x" * 256])
def test_normalize_scopes_rejects_bad_values(bad):
    with pytest.raises(ValueError):
        normalize_scopes([bad])
