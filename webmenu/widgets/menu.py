"""Menu widget: normalizes a menu tree and renders it inside a ``<ul>``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional, Sequence

from .base import Widget
from ..markup import Escaper, TagSerializer, UrlResolver, encode, render_tag, url_for
from ..models import MenuConfig, MenuItem, RenderedMenu, RequestContext, parse_items
from ..normalizer import normalize_items
from ..renderer import render_items
from ..tracing import trace

MenuInput = tuple[Sequence[MenuItem], Optional[RequestContext]]


class MenuWidget(Widget[MenuInput, RenderedMenu]):
    """Render a multi-level menu as nested HTML lists.

    The widget only emits list markup; styling and behaviour are left to the
    page. Items whose route and parameters match the request context are
    marked with :attr:`MenuConfig.active_css_class`.
    """

    def __init__(
        self,
        config: MenuConfig | Mapping[str, Any] | None = None,
        *,
        escape: Escaper = encode,
        resolve_url: UrlResolver = url_for,
        serialize_tag: TagSerializer = render_tag,
    ) -> None:
        super().__init__(name="menu")
        if config is None:
            config = MenuConfig()
        elif not isinstance(config, MenuConfig):
            config = MenuConfig.model_validate(dict(config))
        self._config = config
        self._escape = escape
        self._resolve_url = resolve_url
        self._serialize_tag = serialize_tag

    @property
    def config(self) -> MenuConfig:
        return self._config

    def run(self, data: MenuInput) -> RenderedMenu:
        items, context = data
        config = self._config
        resolved = config.resolve_context(context)

        with trace("menu.render", logger=self.logger, route=resolved.route) as span:
            normalized, has_active = normalize_items(items, config, resolved, escape=self._escape)
            body = render_items(
                normalized,
                config,
                resolve_url=self._resolve_url,
                serialize_tag=self._serialize_tag,
            )
            markup = self._serialize_tag("ul", body, config.options)
            span.record(items=len(normalized), has_active=has_active)

        return RenderedMenu(html=markup, items=normalized, has_active=has_active)

    def render(
        self,
        items: Sequence[MenuItem | Mapping[str, Any]],
        context: RequestContext | None = None,
    ) -> str:
        """Render ``items`` (plain mappings are accepted) and return the markup."""

        return self.run((parse_items(items, max_depth=self._config.max_depth), context)).html


def render_menu(
    items: Sequence[MenuItem | Mapping[str, Any]],
    config: MenuConfig | Dict[str, Any] | None = None,
    context: RequestContext | None = None,
    **collaborators: Any,
) -> str:
    """Render ``items`` with a one-off :class:`MenuWidget`."""

    return MenuWidget(config, **collaborators).render(items, context)


__all__ = ["MenuInput", "MenuWidget", "render_menu"]
