"""Loading of render options and menu definition files."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .errors import MenuDefinitionError
from .models import MenuConfig, MenuItem, parse_items

_LOGGER = logging.getLogger(__name__)

_ENV_PREFIX = "WEBMENU_"
_ENV_FIELDS = {
    "ACTIVE_CSS_CLASS": "active_css_class",
    "ACTIVATE_ITEMS": "activate_items",
    "ACTIVATE_PARENTS": "activate_parents",
    "ENCODE_LABELS": "encode_labels",
    "HIDE_EMPTY_ITEMS": "hide_empty_items",
    "FIRST_ITEM_CSS_CLASS": "first_item_css_class",
    "LAST_ITEM_CSS_CLASS": "last_item_css_class",
}
_TRUE_VALUES = {"1", "true", "yes", "on"}
_BOOL_FIELDS = {"activate_items", "activate_parents", "encode_labels", "hide_empty_items"}


def _canonical(options: Mapping[str, Any]) -> Dict[str, Any]:
    aliases = {info.alias: name for name, info in MenuConfig.model_fields.items() if info.alias}
    return {aliases.get(str(key), str(key)): value for key, value in options.items()}


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for suffix, name in _ENV_FIELDS.items():
        raw = os.environ.get(_ENV_PREFIX + suffix)
        if raw is None:
            continue
        if name in _BOOL_FIELDS:
            overrides[name] = raw.strip().lower() in _TRUE_VALUES
        else:
            overrides[name] = raw.strip()
    return overrides


def load_menu_config(
    path: Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> MenuConfig:
    """Build a :class:`MenuConfig` from a JSON file, the environment and ``overrides``.

    A missing file yields the defaults; an undecodable one is logged and
    ignored. Environment variables (``WEBMENU_ACTIVATE_PARENTS`` and friends)
    take precedence over the file, explicit ``overrides`` over both.
    """

    data: Dict[str, Any] = {}
    if path is not None and path.exists():
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            _LOGGER.warning("Unable to decode menu config at %s: %s", path, exc)
        else:
            if isinstance(loaded, dict):
                data.update(_canonical(loaded))
            else:
                _LOGGER.warning("Ignoring menu config at %s: expected a JSON object", path)

    data.update(_env_overrides())
    if overrides:
        data.update(_canonical(overrides))
    return MenuConfig.model_validate(data)


@dataclass(slots=True)
class MenuDefinition:
    """Menu items together with the options they should be rendered with."""

    items: List[MenuItem] = field(default_factory=list)
    config: MenuConfig = field(default_factory=MenuConfig)


def _read_definition(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MenuDefinitionError(f"Unable to read menu definition {path}: {exc}") from exc

    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            return yaml.safe_load(text)
        return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise MenuDefinitionError(f"Unable to parse menu definition {path}: {exc}") from exc


def load_menu_definition(path: Path, overrides: Mapping[str, Any] | None = None) -> MenuDefinition:
    """Load a menu definition from a JSON or YAML file.

    The document is either a list of items or a mapping with ``items`` and
    an optional ``options`` mapping.

    Raises:
        MenuDefinitionError: if the file cannot be read or has the wrong shape.
        MalformedMenuError: if the items nest deeper than ``max_depth``.
    """

    document = _read_definition(path)
    options: Dict[str, Any] = {}
    if isinstance(document, Mapping):
        raw_options = document.get("options") or {}
        if not isinstance(raw_options, Mapping):
            raise MenuDefinitionError(f"'options' in {path} must be a mapping")
        options.update(_canonical(raw_options))
        entries = document.get("items")
    else:
        entries = document

    if not isinstance(entries, list):
        raise MenuDefinitionError(f"Menu definition {path} must contain a list of items")

    options.update(_env_overrides())
    if overrides:
        options.update(_canonical(overrides))

    _LOGGER.debug("Loaded %d top-level menu items from %s", len(entries), path)
    config = MenuConfig.model_validate(options)
    return MenuDefinition(items=parse_items(entries, max_depth=config.max_depth), config=config)


__all__ = ["MenuDefinition", "load_menu_config", "load_menu_definition"]
