"""Decoding images into textures and saving rendered pixels as images."""

from __future__ import annotations

import io
import os
from typing import Union

from PIL import Image, UnidentifiedImageError

from threed.errors import ImageFormatError
from threed.texture import CPUTexture, Format

_MODE_FORMATS = {
    "L": Format.R,
    "LA": Format.RG,
    "RGB": Format.RGB,
    "RGBA": Format.RGBA,
}

_CHANNELS = 4


def image_from_bytes(data: bytes) -> CPUTexture:
    """Decode an encoded image into an 8-bit CPUTexture.

    Raises ImageFormatError if the data is not a supported image.
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ImageFormatError(str(exc)) from exc

    if img.mode == "P":
        img = img.convert("RGBA" if "transparency" in img.info else "RGB")
    elif img.mode == "1":
        img = img.convert("L")
    elif img.mode == "PA":
        img = img.convert("RGBA")

    format = _MODE_FORMATS.get(img.mode)
    if format is None:
        raise ImageFormatError(f"unsupported pixel mode {img.mode}")

    return CPUTexture(
        data=bytearray(img.tobytes()),
        width=img.width,
        height=img.height,
        format=format,
    )


def flip_rows(pixels: bytes, width: int, height: int) -> bytes:
    """Reverse the row order of RGBA pixels, turning bottom-up into top-down."""
    row_len = _CHANNELS * width
    needed = row_len * height
    if len(pixels) < needed:
        raise ValueError(
            f"expected at least {needed} bytes of RGBA pixels, got {len(pixels)}"
        )
    rows = [pixels[start:start + row_len] for start in range(0, needed, row_len)]
    return bytes(b"".join(bytes(row) for row in reversed(rows)))


def save_pixels(
    path: Union[str, os.PathLike], pixels: bytes, width: int, height: int
) -> None:
    """Save bottom-up RGBA pixels as an image; the format follows the extension."""
    flipped = flip_rows(pixels, width, height)
    img = Image.frombytes("RGBA", (width, height), flipped)
    try:
        img.save(path)
    except (ValueError, KeyError) as exc:
        raise ImageFormatError(str(exc)) from exc