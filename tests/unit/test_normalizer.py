"""Tests for :mod:`webmenu.normalizer`."""

from __future__ import annotations

import logging
from typing import List

import pytest

from webmenu.errors import MalformedMenuError
from webmenu.models import MenuConfig, MenuItem, RequestContext, RouteTarget
from webmenu.normalizer import normalize_items


def _labels(items) -> List[str]:
    return [item.label for item in items]


def test_invisible_items_and_their_subtrees_are_dropped() -> None:
    """Given an invisible parent with children When normalized Then neither parent nor children remain."""

    items = [
        MenuItem(label="A", visible=False, items=[MenuItem(label="A1", url="/a1")]),
        MenuItem(label="B", url="/b"),
        MenuItem(label="C", url="/c"),
    ]

    normalized, _ = normalize_items(items, MenuConfig())

    assert _labels(normalized) == ["B", "C"]


def test_invisible_active_child_does_not_activate_parent() -> None:
    """Given a hidden child that would be active When normalized Then it takes no part in activation."""

    items = [
        MenuItem(
            label="Parent",
            url="/p",
            items=[
                MenuItem(label="Hidden", visible=False, active=True),
                MenuItem(label="Shown", url="/shown"),
            ],
        )
    ]

    normalized, has_active = normalize_items(items, MenuConfig(activate_parents=True))

    assert has_active is False
    assert normalized[0].active is False
    assert _labels(normalized[0].items) == ["Shown"]


def test_missing_label_defaults_to_empty_string() -> None:
    normalized, _ = normalize_items([MenuItem(url="/x")], MenuConfig())

    assert normalized[0].label == ""


def test_labels_are_encoded_when_enabled() -> None:
    """Given a label with markup When encode_labels is on Then the label is escaped."""

    items = [MenuItem(label="Fish & <Chips>", url="/f")]

    encoded, _ = normalize_items(items, MenuConfig())
    raw, _ = normalize_items(items, MenuConfig(encode_labels=False))

    assert encoded[0].label == "Fish &amp; &lt;Chips&gt;"
    assert raw[0].label == "Fish & <Chips>"


def test_escaping_does_not_accumulate_across_calls() -> None:
    """Given the same raw tree When normalized twice Then the escaped labels are identical."""

    items = [MenuItem(label="R&D", url="/rd", items=[MenuItem(label="<Lab>", url="/lab")])]
    config = MenuConfig()

    first, _ = normalize_items(items, config)
    second, _ = normalize_items(items, config)

    assert first == second
    assert first[0].label == "R&amp;D"
    assert items[0].label == "R&D"


def test_custom_escape_collaborator_is_used() -> None:
    normalized, _ = normalize_items([MenuItem(label="home")], MenuConfig(), escape=str.upper)

    assert normalized[0].label == "HOME"


def test_emptied_submenu_without_url_drops_the_item() -> None:
    """Given an item whose only children are hidden and no url When normalized Then it is removed."""

    items = [
        MenuItem(label="Admin", items=[MenuItem(label="Users", url="/users", visible=False)]),
        MenuItem(label="Help", url="/help"),
    ]

    normalized, _ = normalize_items(items, MenuConfig())

    assert _labels(normalized) == ["Help"]


def test_emptied_submenu_with_url_keeps_item_without_children() -> None:
    """Given a linked item whose children all vanish When normalized Then the item stays without items."""

    items = [MenuItem(label="Admin", url="/admin", items=[MenuItem(label="Users", visible=False)])]

    normalized, _ = normalize_items(items, MenuConfig())

    assert _labels(normalized) == ["Admin"]
    assert normalized[0].items is None


def test_declared_empty_list_counts_as_emptied_submenu() -> None:
    normalized, _ = normalize_items([MenuItem(label="Nothing", items=[])], MenuConfig())

    assert normalized == []


def test_item_without_items_field_and_url_is_kept() -> None:
    """Given a label-only item that never declared items When normalized Then it is not pruned.

    Only entries that declared sub-items are subject to emptiness pruning; a
    plain label with neither url nor items survives as a documented quirk.
    """

    normalized, _ = normalize_items([MenuItem(label="Heading")], MenuConfig())

    assert _labels(normalized) == ["Heading"]
    assert normalized[0].items is None


def test_hide_empty_items_disabled_keeps_empty_branches() -> None:
    items = [MenuItem(label="Admin", items=[MenuItem(label="Users", visible=False)])]

    normalized, _ = normalize_items(items, MenuConfig(hide_empty_items=False))

    assert _labels(normalized) == ["Admin"]
    assert normalized[0].items == []


def test_route_match_activates_item(new_arrivals_context: RequestContext) -> None:
    items = [
        MenuItem(label="Home", url=RouteTarget(route="site/index")),
        MenuItem(label="New", url=RouteTarget(route="product/index", params={"tag": "new"})),
    ]

    normalized, has_active = normalize_items(items, MenuConfig(), new_arrivals_context)

    assert [item.active for item in normalized] == [False, True]
    assert has_active is True


def test_activate_items_disabled_skips_route_matching(new_arrivals_context: RequestContext) -> None:
    items = [MenuItem(label="New", url=RouteTarget(route="product/index", params={"tag": "new"}))]

    normalized, has_active = normalize_items(items, MenuConfig(activate_items=False), new_arrivals_context)

    assert normalized[0].active is False
    assert has_active is False


def test_parents_are_not_activated_by_default() -> None:
    """Given an active child When activate_parents is off Then the parent only activates on its own route."""

    context = RequestContext(route="site/login", params={"tag": "new"})
    items = [
        MenuItem(
            label="Products",
            url=RouteTarget(route="product/index"),
            items=[MenuItem(label="Login", url=RouteTarget(route="site/login"))],
        )
    ]

    normalized, has_active = normalize_items(items, MenuConfig(), context)

    assert normalized[0].active is False
    assert normalized[0].items[0].active is True
    assert has_active is False


def test_activation_propagates_to_every_ancestor() -> None:
    """Given a deeply nested active leaf When activate_parents is on Then the whole chain is active."""

    leaf = MenuItem(label="Leaf", url=RouteTarget(route="a/b/c"))
    tree = [MenuItem(label="Root", items=[MenuItem(label="Mid", items=[leaf])])]

    normalized, has_active = normalize_items(
        tree, MenuConfig(activate_parents=True), RequestContext(route="a/b/c")
    )

    root = normalized[0]
    mid = root.items[0]
    assert has_active is True
    assert root.active and mid.active and mid.items[0].active


def test_explicit_false_is_never_overridden_but_still_passes_nothing_up() -> None:
    """Given an explicit inactive parent When a child is active Then the parent stays inactive.

    The explicit parent reports no activity of its own, so its ancestors are
    not activated through it.
    """

    tree = [
        MenuItem(
            label="Top",
            items=[
                MenuItem(
                    label="Section",
                    active=False,
                    items=[MenuItem(label="Page", url=RouteTarget(route="docs/page"))],
                )
            ],
        )
    ]

    normalized, has_active = normalize_items(
        tree, MenuConfig(activate_parents=True), RequestContext(route="docs/page")
    )

    top = normalized[0]
    section = top.items[0]
    assert section.active is False
    assert section.items[0].active is True
    assert top.active is False
    assert has_active is False


def test_explicit_true_is_kept_and_reported() -> None:
    normalized, has_active = normalize_items([MenuItem(label="Pinned", active=True)], MenuConfig())

    assert normalized[0].active is True
    assert has_active is True


def test_config_route_and_params_override_context() -> None:
    """Given route/params in the config When a different context is supplied Then the config wins."""

    items = [MenuItem(label="New", url=RouteTarget(route="product/index", params={"tag": "new"}))]
    config = MenuConfig(route="product/index", params={"tag": "new"})

    normalized, _ = normalize_items(items, config, RequestContext(route="site/index"))

    assert normalized[0].active is True


def test_input_tree_is_not_mutated(shop_menu, new_arrivals_context) -> None:
    before = [item.to_dict() for item in shop_menu]

    normalize_items(shop_menu, MenuConfig(activate_parents=True), new_arrivals_context)

    assert [item.to_dict() for item in shop_menu] == before
    assert shop_menu[0].active is None


def test_cyclic_tree_raises_malformed_menu_error() -> None:
    """Given an item that lists itself as a child When normalized Then a clear error is raised."""

    loop = MenuItem(label="Loop", url="/loop", items=[])
    loop.items.append(loop)

    with pytest.raises(MalformedMenuError, match="contains itself") as excinfo:
        normalize_items([loop], MenuConfig())

    assert excinfo.value.path == (0, 0)


def test_shared_subtree_is_not_mistaken_for_a_cycle() -> None:
    shared = MenuItem(label="Shared", url="/shared")
    tree = [MenuItem(label="A", items=[shared]), MenuItem(label="B", items=[shared])]

    normalized, _ = normalize_items(tree, MenuConfig())

    assert [item.items[0].label for item in normalized] == ["Shared", "Shared"]


def test_nesting_deeper_than_max_depth_raises() -> None:
    """Given a chain deeper than max_depth When normalized Then MalformedMenuError is raised."""

    node = MenuItem(label="leaf", url="/leaf")
    for depth in range(5):
        node = MenuItem(label=f"level-{depth}", items=[node])

    normalize_items([node], MenuConfig(max_depth=6))
    with pytest.raises(MalformedMenuError, match="exceeds 5 levels"):
        normalize_items([node], MenuConfig(max_depth=5))


def test_pruned_items_are_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    items = [MenuItem(label="Hidden", visible=False), MenuItem(label="Empty", items=[])]

    with caplog.at_level(logging.DEBUG, logger="webmenu.normalizer"):
        normalize_items(items, MenuConfig())

    assert "Dropping invisible menu item 0" in caplog.text
    assert "Dropping empty menu item 1" in caplog.text
