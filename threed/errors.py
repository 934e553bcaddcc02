"""Errors raised while loading and parsing assets."""

from __future__ import annotations

from typing import Optional


class AssetError(Exception):
    """Base class of the errors raised while reading assets."""

    message = "error while reading an asset"

    def __init__(self, detail: Optional[str] = None) -> None:
        self.detail = detail
        text = self.message if detail is None else f"{self.message}: {detail}"
        super().__init__(text)


class NotLoadedError(AssetError, LookupError):
    """A resource was requested that was not loaded."""

    def __init__(self, path: str) -> None:
        self.path = str(path)
        self.detail = None
        Exception.__init__(self, f"tried to use {self.path} which was not loaded")


class ImageFormatError(AssetError):
    """An image file could not be parsed."""

    message = "error while parsing an image file"


class ThreeDFormatError(AssetError):
    """A .3d file could not be parsed."""

    message = "error while parsing a .3d file"


class ObjFormatError(AssetError):
    """An .obj or .mtl file could not be parsed."""

    message = "error while parsing an .obj file"