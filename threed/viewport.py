"""The rectangle of a screen or render target that is drawn to."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Viewport:
    """Part of the screen or render target, in pixels from the top left."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def at_origin(cls, width: int, height: int) -> "Viewport":
        """A viewport whose x and y are both zero."""
        return cls(0, 0, width, height)

    def aspect(self) -> float:
        """Width divided by height."""
        if self.height == 0:
            return math.inf if self.width else math.nan
        return self.width / self.height