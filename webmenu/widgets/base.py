"""Base class shared by renderable widgets."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class Widget(ABC, Generic[InputT, OutputT]):
    """Abstract widget turning prepared input into rendered output."""

    def __init__(self, name: str, logger: Optional[logging.Logger] = None) -> None:
        self._name = name
        self._logger = logger or logging.getLogger(f"webmenu.widgets.{name}")

    @property
    def name(self) -> str:
        return self._name

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @abstractmethod
    def run(self, data: InputT) -> OutputT:
        """Render ``data``."""

        raise NotImplementedError


__all__ = ["Widget"]
