"""Normalize menu trees and render them as nested HTML lists.

Typical use::

    from webmenu import MenuConfig, RequestContext, render_menu

    html = render_menu(
        [
            {"label": "Home", "url": {"route": "site/index"}},
            {"label": "Products", "url": {"route": "product/index"}, "items": [
                {"label": "New Arrivals", "url": ["product/index", {"tag": "new"}]},
            ]},
        ],
        MenuConfig(activate_parents=True),
        RequestContext(route="product/index", params={"tag": "new"}),
    )
"""

from .errors import MalformedMenuError, MenuDefinitionError, MenuError
from .matching import is_item_active
from .models import (
    MenuConfig,
    MenuItem,
    NormalizedMenuItem,
    RenderedMenu,
    RequestContext,
    RouteTarget,
)
from .normalizer import normalize_items
from .renderer import render_item, render_items
from .widgets import MenuWidget, render_menu

__all__ = [
    "MalformedMenuError",
    "MenuConfig",
    "MenuDefinitionError",
    "MenuError",
    "MenuItem",
    "MenuWidget",
    "NormalizedMenuItem",
    "RenderedMenu",
    "RequestContext",
    "RouteTarget",
    "is_item_active",
    "normalize_items",
    "render_item",
    "render_items",
    "render_menu",
]
