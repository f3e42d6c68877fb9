"""Shared pytest fixtures for the webmenu test-suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import sys

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from webmenu.models import MenuItem, RequestContext, parse_items


@pytest.fixture
def shop_menu_data() -> List[Dict[str, Any]]:
    """Return the Home / Products / New Arrivals menu as plain mappings."""

    return [
        {"label": "Home", "url": {"route": "site/index"}},
        {
            "label": "Products",
            "url": {"route": "product/index"},
            "items": [
                {"label": "New", "url": {"route": "product/index", "params": {"tag": "new"}}},
                {"label": "Popular", "url": ["product/index", {"tag": "popular"}]},
            ],
        },
        {"label": "Login", "url": {"route": "site/login"}, "visible": False},
    ]


@pytest.fixture
def shop_menu(shop_menu_data: List[Dict[str, Any]]) -> List[MenuItem]:
    """Return the shop menu parsed into :class:`MenuItem` objects."""

    return parse_items(shop_menu_data)


@pytest.fixture
def new_arrivals_context() -> RequestContext:
    """Return the context of a request for ``product/index?tag=new``."""

    return RequestContext(route="product/index", params={"tag": "new"})
