"""Reading and writing the compact binary .3d mesh format."""

from __future__ import annotations

import math
import os
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar, Union

from PIL import Image

from threed.errors import ThreeDFormatError
from threed.loader import Loaded
from threed.mesh import WHITE, Material, Mesh
from threed.saver import save_file

MAGIC_NUMBER = 61
VERSION = 3

_ITEM = TypeVar("_ITEM")
_COLOR_MODES = {1: "L", 3: "RGB", 4: "RGBA"}


@dataclass
class _StoredMaterial:
    """A material as it is kept in a .3d file."""

    name: str = ""
    texture_path: Optional[str] = None
    color: Optional[Tuple[float, float, float, float]] = None
    roughness: Optional[float] = None
    metallic: Optional[float] = None


@dataclass
class _Document:
    magic_number: int
    version: int
    meshes: List[Mesh] = field(default_factory=list)
    materials: List[_StoredMaterial] = field(default_factory=list)


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def _take(self, count: int) -> bytes:
        end = self._pos + count
        if end > len(self._data):
            raise ThreeDFormatError("unexpected end of data")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def u8(self) -> int:
        return self._take(1)[0]

    def u64(self) -> int:
        return struct.unpack("<Q", self._take(8))[0]

    def f32(self) -> float:
        return struct.unpack("<f", self._take(4))[0]

    def f32s(self) -> List[float]:
        count = self.u64()
        return list(struct.unpack(f"<{count}f", self._take(4 * count)))

    def u32s(self) -> List[int]:
        count = self.u64()
        return list(struct.unpack(f"<{count}I", self._take(4 * count)))

    def string(self) -> str:
        raw = self._take(self.u64())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ThreeDFormatError("invalid utf-8 in string") from exc

    def option(self, read: Callable[[], _ITEM]) -> Optional[_ITEM]:
        tag = self.u8()
        if tag == 0:
            return None
        if tag == 1:
            return read()
        raise ThreeDFormatError(f"invalid option tag {tag}")

    def sequence(self, read: Callable[[], _ITEM]) -> List[_ITEM]:
        return [read() for _ in range(self.u64())]

    def color(self) -> Tuple[float, float, float, float]:
        return (self.f32(), self.f32(), self.f32(), self.f32())


class _Writer:
    def __init__(self) -> None:
        self.buffer = bytearray()

    def u8(self, value: int) -> None:
        self.buffer.append(value)

    def u64(self, value: int) -> None:
        self.buffer += struct.pack("<Q", value)

    def f32(self, value: float) -> None:
        self.buffer += struct.pack("<f", value)

    def f32s(self, values: Sequence[float]) -> None:
        self.u64(len(values))
        self.buffer += struct.pack(f"<{len(values)}f", *values)

    def u32s(self, values: Sequence[int]) -> None:
        self.u64(len(values))
        self.buffer += struct.pack(f"<{len(values)}I", *values)

    def string(self, value: str) -> None:
        raw = value.encode("utf-8")
        self.u64(len(raw))
        self.buffer += raw

    def option(self, value, write: Callable) -> None:
        if value is None:
            self.u8(0)
        else:
            self.u8(1)
            write(value)

    def color(self, value: Sequence[float]) -> None:
        for channel in value:
            self.f32(channel)


def _read_submesh(reader: _Reader) -> Mesh:
    return Mesh(
        name=reader.string(),
        material_name=reader.option(reader.string),
        indices=reader.option(reader.u32s),
        positions=reader.f32s(),
        normals=reader.option(reader.f32s),
        uvs=reader.option(reader.f32s),
    )


def _read_material(reader: _Reader) -> _StoredMaterial:
    return _StoredMaterial(
        name=reader.string(),
        texture_path=reader.option(reader.string),
        color=reader.option(reader.color),
        roughness=reader.option(reader.f32),
        metallic=reader.option(reader.f32),
    )


def _roughness_from_power(power: float) -> float:
    if power == 0:
        return math.inf
    ratio = _f32(1.999 / power)
    return _f32(math.sqrt(ratio)) if ratio >= 0 else math.nan


def _read_material_v1(reader: _Reader) -> _StoredMaterial:
    name = reader.string()
    texture_path = reader.option(reader.string)
    color = reader.option(reader.color)
    reader.option(reader.f32)  # diffuse intensity, no longer used
    specular_intensity = reader.option(reader.f32)
    specular_power = reader.option(reader.f32)
    return _StoredMaterial(
        name=name,
        texture_path=texture_path,
        color=color,
        metallic=specular_intensity,
        roughness=None
        if specular_power is None
        else _roughness_from_power(specular_power),
    )


def _decode_v3(data: bytes) -> _Document:
    reader = _Reader(data)
    magic = reader.u8()
    version = reader.u8()
    meshes = reader.sequence(lambda: _read_submesh(reader))
    materials = reader.sequence(lambda: _read_material(reader))
    return _Document(magic, version, meshes, materials)


def _decode_v2(data: bytes) -> _Document:
    reader = _Reader(data)
    magic = reader.u8()
    reader.u8()
    meshes = reader.sequence(lambda: _read_submesh(reader))
    materials = reader.sequence(lambda: _read_material_v1(reader))
    return _Document(magic, VERSION, meshes, materials)


def _decode_v1(data: bytes) -> _Document:
    reader = _Reader(data)
    magic = reader.u8()
    reader.u8()
    indices = reader.u32s()
    positions = reader.f32s()
    normals = reader.f32s()
    mesh = Mesh(
        indices=indices or None,
        positions=positions,
        normals=normals or None,
    )
    return _Document(magic, VERSION, [mesh], [])


def deserialize(data: bytes) -> Tuple[List[Mesh], List[_StoredMaterial]]:
    """Decode a .3d file of any version into meshes and stored materials.

    Raises ThreeDFormatError if the data is corrupt or holds no mesh.
    """
    try:
        document = _decode_v3(data)
    except ThreeDFormatError:
        try:
            document = _decode_v2(data)
        except ThreeDFormatError:
            document = _decode_v1(data)

    if not document.meshes:
        document = _decode_v1(data)
    if document.magic_number != MAGIC_NUMBER:
        raise ThreeDFormatError("Corrupt file!")
    if not document.meshes:
        raise ThreeDFormatError("No mesh data in file!")
    return document.meshes, document.materials


def _texture_file_name(filename: str, material: Material) -> str:
    return f"{filename}_{material.name}.png"


def serialize(
    filename: str, meshes: Sequence[Mesh], materials: Sequence[Material]
) -> bytes:
    """Encode meshes and materials as the current version of the .3d format.

    Albedo textures are referred to as `<filename>_<material name>.png`.
    """
    writer = _Writer()
    writer.u8(MAGIC_NUMBER)
    writer.u8(VERSION)

    writer.u64(len(meshes))
    for mesh in meshes:
        writer.string(mesh.name)
        writer.option(mesh.material_name, writer.string)
        indices = None if mesh.indices is None else [int(i) for i in mesh.indices]
        writer.option(indices, writer.u32s)
        writer.f32s(mesh.positions)
        writer.option(mesh.normals, writer.f32s)
        writer.option(mesh.uvs, writer.f32s)

    writer.u64(len(materials))
    for material in materials:
        writer.string(material.name)
        texture_path = (
            None
            if material.albedo_texture is None
            else _texture_file_name(filename, material)
        )
        writer.option(texture_path, writer.string)
        writer.option(tuple(material.albedo), writer.color)
        writer.option(material.roughness, writer.f32)
        writer.option(material.metallic, writer.f32)
    return bytes(writer.buffer)


def load_three_d(
    loaded: Loaded, path: Union[str, os.PathLike]
) -> Tuple[List[Mesh], List[Material]]:
    """Parse the loaded .3d file at `path`, loading albedo textures beside it."""
    meshes, stored = deserialize(loaded.get_bytes(path))
    directory = Path(path).parent
    materials = []
    for item in stored:
        texture = None
        if item.texture_path is not None:
            texture = loaded.image(directory / item.texture_path)
        materials.append(
            Material(
                name=item.name,
                albedo=item.color if item.color is not None else WHITE,
                albedo_texture=texture,
            )
        )
    return meshes, materials


def save_three_d(
    path: Union[str, os.PathLike],
    meshes: Sequence[Mesh],
    materials: Sequence[Material],
) -> None:
    """Save meshes and materials as a .3d file plus one .png per albedo texture."""
    target = Path(path)
    directory = target.parent
    filename = target.stem
    for material in materials:
        texture = material.albedo_texture
        if texture is None:
            continue
        channels = len(texture.data) // (texture.width * texture.height)
        mode = _COLOR_MODES.get(channels)
        if mode is None:
            raise ValueError(f"cannot save a texture with {channels} channels")
        image = Image.frombytes(
            mode, (texture.width, texture.height), bytes(texture.data)
        )
        image.save(directory / _texture_file_name(filename, material))
    save_file(directory / f"{filename}.3d", serialize(filename, meshes, materials))