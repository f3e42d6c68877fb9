"""Data models describing menu trees, request context and render options."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import MalformedMenuError, format_menu_path

FRAGMENT_KEY = "#"

DEFAULT_LINK_TEMPLATE = '<a href="{url}">{label}</a>'
DEFAULT_LABEL_TEMPLATE = "{label}"
DEFAULT_SUBMENU_TEMPLATE = "\n<ul>\n{items}\n</ul>\n"
DEFAULT_MAX_DEPTH = 64


@dataclass(slots=True)
class Serializable:
    """Base dataclass providing JSON serialisation helpers."""

    def to_dict(self) -> Dict:
        """Convert the dataclass to a serialisable dictionary."""

        def _convert(value):
            if dataclasses.is_dataclass(value):
                return {f.name: _convert(getattr(value, f.name)) for f in dataclasses.fields(value)}
            if isinstance(value, list):
                return [_convert(item) for item in value]
            if isinstance(value, dict):
                return {key: _convert(val) for key, val in value.items()}
            return value

        return _convert(self)

    def to_json(self, path: Path) -> None:
        """Write the dataclass as JSON to the provided ``path``."""

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")


@dataclass(slots=True)
class RouteTarget(Serializable):
    """Structured link target: a route plus its query parameters."""

    route: str
    params: Dict[str, Any] = field(default_factory=dict)
    fragment: Optional[str] = None

    @classmethod
    def parse(cls, value: Any) -> "LinkSpec | None":
        """Coerce ``value`` into a link spec, returning ``None`` when unusable.

        Accepted shapes are a plain URL string, an existing :class:`RouteTarget`,
        a mapping with ``route``/``params``/``fragment`` keys, or a sequence
        ``[route, {params}]`` in which a ``"#"`` parameter carries the fragment.
        """

        if value is None:
            return None
        if isinstance(value, (str, RouteTarget)):
            return value
        if isinstance(value, Mapping):
            route = value.get("route")
            params = value.get("params")
            fragment = value.get("fragment")
        elif isinstance(value, (list, tuple)) and value:
            route = value[0]
            params = value[1] if len(value) > 1 else None
            fragment = None
        else:
            return None

        if not isinstance(route, str):
            return None
        cleaned: Dict[str, Any] = {}
        if isinstance(params, Mapping):
            cleaned = {str(key): val for key, val in params.items()}
        if fragment is None and FRAGMENT_KEY in cleaned:
            fragment = cleaned.pop(FRAGMENT_KEY)
        else:
            cleaned.pop(FRAGMENT_KEY, None)
        return cls(
            route=route,
            params=cleaned,
            fragment=str(fragment) if fragment is not None else None,
        )


LinkSpec = Union[str, RouteTarget]


@dataclass(slots=True)
class MenuItem(Serializable):
    """One raw menu entry as supplied by the caller.

    ``items`` is ``None`` when the entry never declared sub-items, which is
    not the same as declaring an empty list.
    """

    label: Optional[str] = None
    url: Optional[LinkSpec] = None
    visible: Optional[bool] = None
    items: Optional[List["MenuItem"]] = None
    active: Optional[bool] = None
    template: Optional[str] = None
    item_options: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, max_depth: int = DEFAULT_MAX_DEPTH) -> "MenuItem":
        """Build an item from a plain mapping, degrading bad fields to defaults.

        Raises:
            MalformedMenuError: if ``items`` refer back to an enclosing mapping
                or nest deeper than ``max_depth``.
        """

        return _build_item(data, max_depth, (), frozenset())


def _build_item(
    data: Mapping[str, Any],
    max_depth: int,
    path: Tuple[int, ...],
    ancestors: FrozenSet[int],
) -> MenuItem:
    label = data.get("label")
    visible = data.get("visible")
    active = data.get("active")
    template = data.get("template")
    raw_options = data.get("item_options", data.get("itemOptions"))

    return MenuItem(
        label=None if label is None else str(label),
        url=RouteTarget.parse(data.get("url")),
        visible=None if visible is None else bool(visible),
        items=_parse_children(data.get("items"), max_depth, path, ancestors | {id(data)}),
        active=None if active is None else bool(active),
        template=template if isinstance(template, str) else None,
        item_options=_parse_options(raw_options),
    )


def _parse_children(
    value: Any,
    max_depth: int,
    path: Tuple[int, ...],
    ancestors: FrozenSet[int],
) -> Optional[List[MenuItem]]:
    if not isinstance(value, (list, tuple)):
        return None
    if len(path) >= max_depth:
        raise MalformedMenuError(
            f"Malformed menu tree: nesting exceeds {max_depth} levels at {format_menu_path(path)}",
            path=path,
        )
    children: List[MenuItem] = []
    for index, entry in enumerate(value):
        entry_path = path + (index,)
        if isinstance(entry, MenuItem):
            children.append(entry)
        elif isinstance(entry, Mapping):
            if id(entry) in ancestors:
                raise MalformedMenuError(
                    f"Malformed menu tree: item at {format_menu_path(entry_path)} contains itself",
                    path=entry_path,
                )
            children.append(_build_item(entry, max_depth, entry_path, ancestors))
    return children


def _parse_options(value: Any) -> Dict[str, str]:
    if not isinstance(value, Mapping):
        return {}
    return {str(key): str(val) for key, val in value.items() if val is not None}


def parse_items(entries: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> List[MenuItem]:
    """Convert a list of mappings (or items) into :class:`MenuItem` objects.

    Raises:
        MalformedMenuError: if the mappings form a cycle or nest deeper than
            ``max_depth``.
    """

    return _parse_children(entries, max_depth, (), frozenset()) or []


@dataclass(slots=True)
class NormalizedMenuItem(Serializable):
    """A filtered menu entry with its label prepared and ``active`` resolved."""

    label: str
    active: bool
    url: Optional[LinkSpec] = None
    items: Optional[List["NormalizedMenuItem"]] = None
    template: Optional[str] = None
    item_options: Dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class RenderedMenu(Serializable):
    """Outcome of a menu render: the markup and the tree it was built from.

    ``has_active`` is true when a top-level entry is active, directly or via
    parent activation; it does not report active entries deeper down.
    """

    html: str
    items: List[NormalizedMenuItem]
    has_active: bool


@dataclass(slots=True)
class RequestContext(Serializable):
    """Route and query parameters of the request a menu is rendered for."""

    route: str = ""
    params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_path(cls, path: str, params: Mapping[str, Any] | None = None) -> "RequestContext":
        """Build a context from a URL path such as ``/product/index``."""

        return cls(route=path.strip("/"), params=dict(params or {}))


class MenuConfig(BaseModel):
    """Options controlling normalization and rendering of a menu."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    link_template: str = Field(
        default=DEFAULT_LINK_TEMPLATE,
        alias="linkTemplate",
        description="Content template for items that carry a url",
    )
    label_template: str = Field(
        default=DEFAULT_LABEL_TEMPLATE,
        alias="labelTemplate",
        description="Content template for items without a url",
    )
    submenu_template: str = Field(
        default=DEFAULT_SUBMENU_TEMPLATE,
        alias="submenuTemplate",
        description="Wraps a rendered list of sub-items via the {items} token",
    )
    encode_labels: bool = Field(default=True, alias="encodeLabels")
    active_css_class: str = Field(default="active", alias="activeCssClass")
    activate_items: bool = Field(default=True, alias="activateItems")
    activate_parents: bool = Field(default=False, alias="activateParents")
    hide_empty_items: bool = Field(default=True, alias="hideEmptyItems")
    first_item_css_class: str | None = Field(default=None, alias="firstItemCssClass")
    last_item_css_class: str | None = Field(default=None, alias="lastItemCssClass")
    route: str | None = Field(
        default=None,
        description="Route used for activation instead of the request route",
    )
    params: Dict[str, Any] | None = Field(
        default=None,
        description="Parameters used for activation instead of the request query",
    )
    options: Dict[str, str] = Field(
        default_factory=dict,
        description="HTML attributes of the outer <ul> container",
    )
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, alias="maxDepth")

    @field_validator("route", mode="before")
    @classmethod
    def _normalise_route(cls, value: Any) -> str | None:
        if value is None:
            return None
        return str(value).strip().strip("/")

    @field_validator("options", mode="before")
    @classmethod
    def _stringify_options(cls, value: Any) -> Dict[str, str]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("options must be a mapping of HTML attributes")
        return {str(key): str(val) for key, val in value.items() if val is not None}

    def resolve_context(self, context: RequestContext | None = None) -> RequestContext:
        """Return the context used for activation, applying configured overrides."""

        base = context or RequestContext()
        route = self.route if self.route is not None else base.route
        params = self.params if self.params is not None else base.params
        return RequestContext(route=route, params=dict(params))


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_LABEL_TEMPLATE",
    "DEFAULT_LINK_TEMPLATE",
    "DEFAULT_SUBMENU_TEMPLATE",
    "FRAGMENT_KEY",
    "LinkSpec",
    "MenuConfig",
    "MenuItem",
    "NormalizedMenuItem",
    "RenderedMenu",
    "RequestContext",
    "RouteTarget",
    "Serializable",
    "parse_items",
]
