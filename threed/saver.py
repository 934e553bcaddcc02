"""Writing raw data to files."""

from __future__ import annotations

import os
from typing import Union


def save_file(path: Union[str, os.PathLike], data: bytes) -> None:
    """Write the bytes to the file at `path`, replacing any existing content."""
    with open(path, "wb") as file:
        file.write(data)