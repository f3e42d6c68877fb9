"""Exceptions raised by the menu normalizer and its entry points."""

from __future__ import annotations


class MenuError(RuntimeError):
    """Base class for menu related failures."""


class MalformedMenuError(MenuError):
    """Raised when a menu tree is cyclic or nested deeper than allowed."""

    def __init__(self, message: str, *, path: tuple[int, ...] = ()) -> None:
        super().__init__(message)
        self.path = path


class MenuDefinitionError(MenuError):
    """Raised when a menu definition file cannot be read or parsed."""


def format_menu_path(path: tuple[int, ...]) -> str:
    """Render an index path such as ``(1, 0)`` as ``"1/0"``."""

    return "/".join(str(index) for index in path) or "<root>"


__all__ = ["MalformedMenuError", "MenuDefinitionError", "MenuError", "format_menu_path"]
