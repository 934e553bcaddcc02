"""Checks and layout helpers for pixel data handed to GPU textures."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional, Sequence

from threed.texture import Format, check_data_length

CUBE_FACE_COUNT = 6


class DepthFormat(Enum):
    """Formats of depth render targets."""

    DEPTH16 = 16
    DEPTH24 = 24
    DEPTH32F = 32


def _default_is_max(value: Any) -> bool:
    if isinstance(value, float):
        return value > 0.99
    return value == 255


def has_transparency(
    data: Sequence[Any],
    format: Format,
    width: int,
    height: int,
    is_max: Optional[Callable[[Any], bool]] = None,
) -> bool:
    """Whether any pixel of an RGBA image has an alpha value below maximum.

    Raises TextureLengthError when the data does not fill a width x height image.
    Without `is_max`, floats count as maximal above 0.99 and integers at 255.
    """
    check_data_length(width, height, 1, format, len(data))
    if format is not Format.RGBA:
        return False
    test = is_max or _default_is_max
    alphas = data[3:width * height * 4:4]
    return not all(test(alpha) for alpha in alphas)


def split_cube_faces(
    data: Sequence[Any], width: int, height: int, format: Format
) -> tuple:
    """Split cube map data into its six faces.

    The faces come in the order right, left, top, bottom, front, back.
    Raises TextureLengthError when a face does not hold a width x height image.
    """
    face_length = len(data) // CUBE_FACE_COUNT
    check_data_length(width, height, 1, format, face_length)
    return tuple(
        data[face * face_length:(face + 1) * face_length]
        for face in range(CUBE_FACE_COUNT)
    )