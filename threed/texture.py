"""CPU-side texture description and helpers shared by the GPU texture types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, MutableSequence, Optional


class Interpolation(Enum):
    """How the texture is sampled between texture pixels."""

    NEAREST = "nearest"
    LINEAR = "linear"


class Wrapping(Enum):
    """How a texture is applied outside of the [0..1] uv coordinate range."""

    REPEAT = "repeat"
    MIRRORED_REPEAT = "mirrored_repeat"
    CLAMP_TO_EDGE = "clamp_to_edge"


class Format(Enum):
    """Pixel formats of a texture."""

    R = "R"
    RG = "RG"
    RGB = "RGB"
    RGBA = "RGBA"

    def color_channel_count(self) -> int:
        """Number of channels per pixel in this format."""
        return len(self.value)


class TextureLengthError(ValueError):
    """The data does not hold the number of pixels the texture needs."""

    def __init__(self, actual: int, expected: int) -> None:
        super().__init__(
            f"the texture data holds {actual} pixels but {expected} are needed"
        )
        self.actual = actual
        self.expected = expected


def _default_data() -> list:
    return [0, 0, 0, 0]


@dataclass(repr=False)
class CPUTexture:
    """A texture kept in main memory, ready to be uploaded to the GPU."""

    data: MutableSequence[Any] = field(default_factory=_default_data)
    width: int = 1
    height: int = 1
    depth: int = 1
    format: Format = Format.RGBA
    min_filter: Interpolation = Interpolation.LINEAR
    mag_filter: Interpolation = Interpolation.LINEAR
    # Mipmaps are only created when width and height are powers of two.
    mip_map_filter: Optional[Interpolation] = Interpolation.LINEAR
    wrap_s: Wrapping = Wrapping.REPEAT
    wrap_t: Wrapping = Wrapping.REPEAT
    wrap_r: Wrapping = Wrapping.REPEAT

    def add_padding(self, left: int, right: int, top: int, bottom: int) -> None:
        """Surround the texture with pixels of default value on each side."""
        channels = self.format.color_channel_count()
        fill = type(self.data[0])() if len(self.data) else 0
        width = left + self.width + right
        height = top + self.height + bottom
        row_len = self.width * channels

        padded: list = [fill] * (width * channels * top)
        left_pad = [fill] * (left * channels)
        right_pad = [fill] * (right * channels)
        for start in range(0, self.height * row_len, row_len):
            padded.extend(left_pad)
            padded.extend(self.data[start:start + row_len])
            padded.extend(right_pad)
        padded.extend([fill] * (width * channels * bottom))

        if isinstance(self.data, (bytes, bytearray)):
            self.data = type(self.data)(padded)
        else:
            self.data = padded
        self.width = width
        self.height = height

    def __repr__(self) -> str:
        return (
            f"CPUTexture(format={self.format}, data length={len(self.data)}, "
            f"width={self.width}, height={self.height}, depth={self.depth}, "
            f"min_filter={self.min_filter}, mag_filter={self.mag_filter}, "
            f"mip_map_filter={self.mip_map_filter}, wrap_s={self.wrap_s}, "
            f"wrap_t={self.wrap_t}, wrap_r={self.wrap_r})"
        )


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


def number_of_mip_maps(
    mip_map_filter: Optional[Interpolation], width: int, height: int
) -> int:
    """Number of mipmap levels for a texture of the given size."""
    if (
        mip_map_filter is not None
        and _is_power_of_two(width)
        and _is_power_of_two(height)
    ):
        return max(width.bit_length(), height.bit_length())
    return 1


def check_data_length(
    width: int, height: int, depth: int, format: Format, length: int
) -> None:
    """Raise TextureLengthError unless `length` values fill the texture exactly."""
    expected = width * height * depth
    actual = length // format.color_channel_count()
    if expected != actual:
        raise TextureLengthError(actual, expected)