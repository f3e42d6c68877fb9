"""Route matching used to decide whether a menu item is active."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .models import FRAGMENT_KEY, MenuItem, RouteTarget


def _as_query_text(value: Any) -> str:
    # Booleans and integral floats take the form they have in a query string.
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _loosely_equal(expected: Any, actual: Any) -> bool:
    left, right = _as_query_text(expected), _as_query_text(actual)
    if left == right:
        return True
    try:
        return float(left) == float(right)
    except ValueError:
        return False


def is_item_active(item: MenuItem, route: str, params: Mapping[str, Any] | None) -> bool:
    """Return whether ``item`` points at ``route`` with matching ``params``.

    Only structured :class:`RouteTarget` links can match; plain URL strings
    never do. Every parameter of the link, apart from the fragment, has to be
    present in ``params`` with an equal value.
    """

    link = getattr(item, "url", None)
    if not isinstance(link, RouteTarget) or not isinstance(link.route, str):
        return False
    if link.route.strip("/") != route:
        return False

    current = params if isinstance(params, Mapping) else {}
    for name, value in link.params.items():
        if name == FRAGMENT_KEY:
            continue
        if current.get(name) is None or not _loosely_equal(value, current[name]):
            return False
    return True


__all__ = ["is_item_active"]
