"""
Scope handling for resource servers and their clients.

A resource server's scopes are the universe its clients may be granted. When an
update drops scopes from that universe, prune_client_scopes removes exactly the
dropped ones from every client holding them. Lists are compared as sets; order
and duplicates in the inputs do not matter for what counts as removed.
"""
import logging

from admin_server.config import SCOPE_MAX_LENGTH

logger = logging.getLogger(__name__)


def normalize_scopes(scopes: list[str]) -> list[str]:
    """
    Strip each scope and drop repeats (first occurrence wins).
    Raises ValueError on empty, whitespace-containing or over-long scopes.
    """
    result: list[str] = []
    seen: set[str] = set()
    for raw in scopes:
        scope = raw.strip()
        if not scope:
            raise ValueError("scope must not be empty")
        if any(ch.isspace() for ch in scope):
            raise ValueError(f"scope must not contain whitespace: {scope!r}")
        if len(scope) > SCOPE_MAX_LENGTH:
            raise ValueError(f"scope longer than {SCOPE_MAX_LENGTH} characters")
        if scope not in seen:
            seen.add(scope)
            result.append(scope)
    return result


def removed_scopes(new_scopes: list[str], old_scopes: list[str]) -> list[str]:
    """Scopes in old_scopes but not in new_scopes, once each, in the order they appear in old_scopes."""
    keep = set(new_scopes)
    removed: list[str] = []
    for scope in old_scopes:
        if scope not in keep and scope not in removed:
            removed.append(scope)
    return removed


def prune_client_scopes(new_scopes: list[str], old_scopes: list[str], clients) -> list:
    """
    Remove scopes that new_scopes no longer offers from each client's scopes.

    Only clients that actually hold a removed scope are modified; the order of
    their remaining scopes is kept. Returns the modified clients so the caller
    saves just those. Growing or reordering the scope list is a no-op.
    """
    outdated = removed_scopes(new_scopes, old_scopes)
    if not outdated:
        return []
    logger.info("Resource server dropped scopes %s; removing them from its clients", outdated)

    outdated_set = set(outdated)
    changed = []
    for client in clients:
        client_scopes = client.get_scopes_list()
        if outdated_set.isdisjoint(client_scopes):
            continue
        client.set_scopes_list([s for s in client_scopes if s not in outdated_set])
        changed.append(client)
    return changed
