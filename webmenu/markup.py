"""Default markup collaborators: label escaping, URL resolution and tag output."""

from __future__ import annotations

import html
from collections.abc import Mapping
from typing import Any, Callable
from urllib.parse import urlencode

from .models import LinkSpec, RouteTarget

Escaper = Callable[[str], str]
UrlResolver = Callable[[LinkSpec], str]
TagSerializer = Callable[[str, str, Mapping[str, Any]], str]


def encode(text: str) -> str:
    """Escape ``text`` for inclusion in HTML content or attribute values."""

    return html.escape(text, quote=True)


def url_for(link: LinkSpec, base_url: str = "") -> str:
    """Turn a link spec into a URL string.

    Plain strings are returned unchanged. A :class:`RouteTarget` becomes
    ``/<route>`` followed by its urlencoded parameters and fragment.
    """

    if isinstance(link, str):
        return link
    if not isinstance(link, RouteTarget):
        return ""

    url = f"{base_url.rstrip('/')}/{link.route.strip('/')}"
    if link.params:
        url += "?" + urlencode(
            {key: "" if value is None else value for key, value in link.params.items()},
            doseq=True,
        )
    if link.fragment:
        url += "#" + link.fragment
    return url


def make_url_resolver(base_url: str = "") -> UrlResolver:
    """Return a resolver that prefixes route URLs with ``base_url``."""

    def _resolve(link: LinkSpec) -> str:
        return url_for(link, base_url)

    return _resolve


def render_attributes(attributes: Mapping[str, Any]) -> str:
    parts = []
    for name, value in attributes.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {encode(str(name))}")
        else:
            parts.append(f' {encode(str(name))}="{encode(str(value))}"')
    return "".join(parts)


def render_tag(name: str, content: str = "", attributes: Mapping[str, Any] | None = None) -> str:
    """Serialise one element, e.g. ``<li class="active">content</li>``."""

    return f"<{name}{render_attributes(attributes or {})}>{content}</{name}>"


__all__ = [
    "Escaper",
    "TagSerializer",
    "UrlResolver",
    "encode",
    "make_url_resolver",
    "render_attributes",
    "render_tag",
    "url_for",
]
