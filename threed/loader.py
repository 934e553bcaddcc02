"""Loading resources from disk or the network, and access to the loaded bytes."""

from __future__ import annotations

import os
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Callable, Dict, Generic, Iterable, Optional, TypeVar, Union

from threed.errors import NotLoadedError
from threed.imaging import image_from_bytes
from threed.texture import CPUTexture

PathLike = Union[str, os.PathLike]
T = TypeVar("T")

_URL_SCHEMES = {"http", "https", "ftp", "file"}


class Loaded:
    """Resources that were loaded or inserted by hand, keyed by their path."""

    def __init__(self) -> None:
        self._loaded: Dict[Path, Union[bytes, OSError]] = {}

    def __repr__(self) -> str:
        return f"Loaded(paths={[str(key) for key in self._loaded]})"

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, os.PathLike)) and Path(path) in self._loaded

    def __len__(self) -> int:
        return len(self._loaded)

    def _find_key(self, path: PathLike) -> Path:
        needle = os.fspath(path)
        for key in self._loaded:
            if needle in str(key):
                return key
        raise NotLoadedError(needle)

    def remove_bytes(self, path: PathLike) -> bytes:
        """Remove and return the bytes of the resource at `path`.

        A resource whose path contains `path` is used when there is no exact match.
        Raises NotLoadedError if nothing matches or the resource failed to load.
        """
        key = Path(path)
        if key in self._loaded:
            entry = self._loaded.pop(key)
            if isinstance(entry, OSError):
                raise NotLoadedError(str(key)) from entry
            return entry
        entry = self._loaded.pop(self._find_key(path))
        if isinstance(entry, OSError):
            raise entry
        return entry

    def get_bytes(self, path: PathLike) -> bytes:
        """Return the bytes of the resource at `path` without removing them.

        A resource whose path contains `path` is used when there is no exact match.
        Raises NotLoadedError if nothing matches or the resource failed to load.
        """
        key = Path(path)
        if key in self._loaded:
            entry = self._loaded[key]
            if isinstance(entry, OSError):
                raise NotLoadedError(os.fspath(path)) from entry
            return entry
        entry = self._loaded[self._find_key(path)]
        if isinstance(entry, OSError):
            raise entry
        return entry

    def insert_bytes(self, path: PathLike, data: bytes) -> None:
        """Add the bytes as the resource at `path`, replacing any earlier one."""
        self._loaded[Path(path)] = bytes(data)

    def _insert_result(self, path: PathLike, result: Union[bytes, OSError]) -> None:
        self._loaded[Path(path)] = result

    def image(self, path: PathLike) -> CPUTexture:
        """Decode the loaded image at `path` into a CPUTexture."""
        return image_from_bytes(self.get_bytes(path))

    def cube_image(
        self,
        right: PathLike,
        left: PathLike,
        top: PathLike,
        bottom: PathLike,
        front: PathLike,
        back: PathLike,
    ) -> CPUTexture:
        """Decode six loaded images into one texture holding all cube faces.

        The face data follows in the order right, left, top, bottom, front, back;
        size and format are those of the right image.
        """
        texture = self.image(right)
        for path in (left, top, bottom, front, back):
            texture.data.extend(self.image(path).data)
        return texture


def _is_url(path: PathLike) -> bool:
    text = os.fspath(path)
    if not isinstance(text, str):
        return False
    parsed = urllib.parse.urlparse(text)
    return parsed.scheme.lower() in _URL_SCHEMES and bool(parsed.netloc or parsed.path)


def _fetch(path: PathLike) -> Union[bytes, OSError]:
    if _is_url(path):
        with urllib.request.urlopen(os.fspath(path)) as response:
            return response.read()
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        return exc


def load(paths: Iterable[PathLike], on_done: Callable[[Loaded], None]) -> None:
    """Load every resource in `paths`, then call `on_done` with the results.

    Files that cannot be read are recorded and reported when their bytes are asked for.
    """
    loaded = Loaded()
    for path in paths:
        loaded._insert_result(path, _fetch(path))
    on_done(loaded)


class Loading(Generic[T]):
    """Loads resources and turns them into an object with `on_load`."""

    def __init__(
        self, paths: Iterable[PathLike], on_load: Callable[[Loaded], T]
    ) -> None:
        self._done = False
        self._value: Optional[T] = None
        self._error: Optional[BaseException] = None

        def finish(loaded: Loaded) -> None:
            try:
                self._value = on_load(loaded)
            except Exception as exc:
                self._error = exc
            self._done = True

        load(paths, finish)

    def is_loaded(self) -> bool:
        """Whether the resources are loaded and `on_load` has run."""
        return self._done

    def result(self) -> Optional[T]:
        """The object made by `on_load`, or None if it has not run yet.

        Re-raises the exception `on_load` raised, if any.
        """
        if not self._done:
            return None
        if self._error is not None:
            raise self._error
        return self._value