"""Offset and scale applied to texture coordinates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TextureTransform:
    """Offset and scale of uv coordinates."""

    offset_x: float = 0.0
    offset_y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0

    def halve(self) -> None:
        """Halve both the offset and the scale."""
        self.offset_x /= 2.0
        self.offset_y /= 2.0
        self.scale_x /= 2.0
        self.scale_y /= 2.0

    def shift(self, dx: float, dy: float) -> None:
        """Move the offset by (dx, dy)."""
        self.offset_x += dx
        self.offset_y += dy

    def to_vec4(self) -> tuple[float, float, float, float]:
        """The transform as (offset_x, offset_y, scale_x, scale_y)."""
        return (self.offset_x, self.offset_y, self.scale_x, self.scale_y)