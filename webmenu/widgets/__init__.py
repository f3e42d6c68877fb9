"""Widgets rendering menu trees."""

from .base import Widget
from .menu import MenuWidget, render_menu

__all__ = ["MenuWidget", "Widget", "render_menu"]
