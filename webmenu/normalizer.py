"""Normalization of raw menu trees.

One depth-first pass over the items drops invisible entries, prepares
labels, prunes sub-menus that ended up empty and resolves the ``active``
flag of every kept entry. Each call builds new :class:`NormalizedMenuItem`
objects; the caller's :class:`MenuItem` tree is left untouched.

Only entries that declared ``items`` are subject to emptiness pruning. An
entry without ``items`` and without a url is kept as a plain label.
"""

from __future__ import annotations

import logging
from typing import FrozenSet, List, Optional, Sequence, Tuple

from .errors import MalformedMenuError, format_menu_path
from .markup import Escaper, encode
from .matching import is_item_active
from .models import MenuConfig, MenuItem, NormalizedMenuItem, RequestContext

_LOGGER = logging.getLogger(__name__)


def normalize_items(
    items: Sequence[MenuItem],
    config: MenuConfig,
    context: RequestContext | None = None,
    *,
    escape: Escaper = encode,
) -> Tuple[List[NormalizedMenuItem], bool]:
    """Normalize ``items`` and report whether an entry of this level is active.

    The flag is raised by top-level entries only, whether active explicitly,
    by route or through ``activate_parents``. An active grandchild below an
    inactive parent does not raise it.

    ``context`` supplies the current route and parameters; the ``route`` and
    ``params`` options of ``config`` take precedence over it.

    Raises:
        MalformedMenuError: if the tree refers back to one of its ancestors
            or is nested deeper than ``config.max_depth``.
    """

    resolved = config.resolve_context(context)
    return _normalize_level(items, config, resolved, escape, (), frozenset())


def _normalize_level(
    items: Sequence[MenuItem],
    config: MenuConfig,
    context: RequestContext,
    escape: Escaper,
    path: Tuple[int, ...],
    ancestors: FrozenSet[int],
) -> Tuple[List[NormalizedMenuItem], bool]:
    if len(path) >= config.max_depth:
        raise MalformedMenuError(
            f"Malformed menu tree: nesting exceeds {config.max_depth} levels at {format_menu_path(path)}",
            path=path,
        )

    normalized: List[NormalizedMenuItem] = []
    level_active = False

    for index, item in enumerate(items):
        item_path = path + (index,)
        if item.visible is not None and not item.visible:
            _LOGGER.debug("Dropping invisible menu item %s", format_menu_path(item_path))
            continue
        if id(item) in ancestors:
            raise MalformedMenuError(
                f"Malformed menu tree: item at {format_menu_path(item_path)} contains itself",
                path=item_path,
            )

        label = item.label if isinstance(item.label, str) else ""
        if config.encode_labels:
            label = escape(label)

        children: Optional[List[NormalizedMenuItem]] = None
        child_active = False
        if item.items is not None:
            children, child_active = _normalize_level(
                item.items,
                config,
                context,
                escape,
                item_path,
                ancestors | {id(item)},
            )
            if not children and config.hide_empty_items:
                children = None
                if item.url is None:
                    _LOGGER.debug("Dropping empty menu item %s", format_menu_path(item_path))
                    continue

        if item.active is not None:
            active = bool(item.active)
        else:
            active = (config.activate_parents and child_active) or (
                config.activate_items
                and is_item_active(item, context.route, context.params)
            )
        if active:
            level_active = True

        normalized.append(
            NormalizedMenuItem(
                label=label,
                active=active,
                url=item.url,
                items=children,
                template=item.template,
                item_options=dict(item.item_options),
            )
        )

    return normalized, level_active


__all__ = ["normalize_items"]
