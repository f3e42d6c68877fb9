"""Render normalized menu trees into nested list markup."""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Sequence

from .markup import TagSerializer, UrlResolver, render_tag, url_for
from .models import MenuConfig, NormalizedMenuItem


def substitute(template: str, replacements: Mapping[str, str]) -> str:
    """Replace every token of ``replacements`` found in ``template``.

    Replacement happens in a single left-to-right pass, so text inserted for
    one token is never scanned for another token. Longer tokens win when
    tokens overlap.
    """

    if not replacements:
        return template
    tokens = sorted(replacements, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(token) for token in tokens))
    return pattern.sub(lambda match: replacements[match.group(0)], template)


def item_classes(
    item: NormalizedMenuItem, index: int, count: int, config: MenuConfig
) -> List[str]:
    """Return the computed classes of the ``index``-th of ``count`` siblings."""

    classes: List[str] = []
    if item.active:
        classes.append(config.active_css_class)
    if index == 0 and config.first_item_css_class is not None:
        classes.append(config.first_item_css_class)
    if index == count - 1 and config.last_item_css_class is not None:
        classes.append(config.last_item_css_class)
    return classes


def render_item(
    item: NormalizedMenuItem,
    config: MenuConfig,
    *,
    resolve_url: UrlResolver = url_for,
) -> str:
    """Render the content of one item, without its container or sub-menu."""

    if item.url is not None:
        template = item.template if item.template is not None else config.link_template
        return substitute(template, {"{url}": resolve_url(item.url), "{label}": item.label})
    template = item.template if item.template is not None else config.label_template
    return substitute(template, {"{label}": item.label})


def render_items(
    items: Sequence[NormalizedMenuItem],
    config: MenuConfig,
    *,
    resolve_url: UrlResolver = url_for,
    serialize_tag: TagSerializer = render_tag,
) -> str:
    """Recursively render ``items`` as ``<li>`` elements joined by newlines."""

    count = len(items)
    lines: List[str] = []
    for index, item in enumerate(items):
        options: Dict[str, str] = dict(item.item_options)
        classes = item_classes(item, index, count, config)
        if classes:
            computed = " ".join(classes)
            options["class"] = f"{options['class']} {computed}" if options.get("class") else computed

        menu = render_item(item, config, resolve_url=resolve_url)
        if item.items:
            menu += substitute(
                config.submenu_template,
                {
                    "{items}": render_items(
                        item.items,
                        config,
                        resolve_url=resolve_url,
                        serialize_tag=serialize_tag,
                    )
                },
            )
        lines.append(serialize_tag("li", menu, options))
    return "\n".join(lines)


__all__ = ["item_classes", "render_item", "render_items", "substitute"]
