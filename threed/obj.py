"""Parsing Wavefront .obj geometry and .mtl material files."""

from __future__ import annotations

import math
import os
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from threed.errors import ObjFormatError
from threed.loader import Loaded
from threed.mesh import Material, Mesh

Vector = Tuple[float, float, float]
VertexIndex = Tuple[int, Optional[int], Optional[int]]

_F32_EPSILON = 1.1920929e-07


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


@dataclass
class _Geometry:
    """Shapes sharing one material; faces are triples of vertex indices."""

    material_name: Optional[str] = None
    shapes: List[Tuple[VertexIndex, ...]] = field(default_factory=list)


@dataclass
class _ObjObject:
    name: str = ""
    vertices: List[Vector] = field(default_factory=list)
    tex_vertices: List[Vector] = field(default_factory=list)
    normals: List[Vector] = field(default_factory=list)
    geometry: List[_Geometry] = field(default_factory=list)


@dataclass
class _ObjFile:
    material_library: Optional[str] = None
    objects: List[_ObjObject] = field(default_factory=list)


@dataclass
class _MtlMaterial:
    name: str
    color_ambient: Vector = (0.0, 0.0, 0.0)
    color_diffuse: Vector = (0.0, 0.0, 0.0)
    color_specular: Vector = (0.0, 0.0, 0.0)
    specular_coefficient: float = 0.0
    alpha: float = 1.0
    diffuse_map: Optional[str] = None
    bump_map: Optional[str] = None


def _statements(text: str):
    for lineno, line in enumerate(text.splitlines(), start=1):
        parts = line.split("#", 1)[0].split()
        if parts:
            yield lineno, parts[0], parts[1:]


def _numbers(args: List[str], lineno: int, minimum: int, maximum: int) -> List[float]:
    if not minimum <= len(args) <= maximum:
        raise ObjFormatError(f"line {lineno}: expected {minimum} to {maximum} numbers")
    try:
        return [float(arg) for arg in args]
    except ValueError as exc:
        raise ObjFormatError(f"line {lineno}: {exc}") from exc


class _ObjParser:
    def __init__(self) -> None:
        self.result = _ObjFile()
        self._offsets = [0, 0, 0]
        self._material: Optional[str] = None

    def _object(self) -> _ObjObject:
        if not self.result.objects:
            self.result.objects.append(_ObjObject())
        return self.result.objects[-1]

    def _new_object(self, name: str) -> None:
        if self.result.objects:
            current = self.result.objects[-1]
            self._offsets[0] += len(current.vertices)
            self._offsets[1] += len(current.tex_vertices)
            self._offsets[2] += len(current.normals)
        self.result.objects.append(_ObjObject(name=name))

    def _geometry(self) -> _Geometry:
        obj = self._object()
        if not obj.geometry:
            obj.geometry.append(_Geometry(self._material))
        return obj.geometry[-1]

    def _use_material(self, name: str) -> None:
        self._material = name
        obj = self._object()
        if obj.geometry and not obj.geometry[-1].shapes:
            obj.geometry[-1].material_name = name
        else:
            obj.geometry.append(_Geometry(name))

    def _resolve(self, token: str, kind: int, count: int, lineno: int) -> int:
        try:
            value = int(token)
        except ValueError as exc:
            raise ObjFormatError(f"line {lineno}: bad index {token!r}") from exc
        offset = self._offsets[kind]
        total = offset + count
        if value > 0:
            index = value - 1
        elif value < 0:
            index = total + value
        else:
            raise ObjFormatError(f"line {lineno}: index 0 is not allowed")
        local = index - offset
        if not 0 <= local < count:
            raise ObjFormatError(f"line {lineno}: index {value} out of range")
        return local

    def _vertex_index(self, token: str, lineno: int) -> VertexIndex:
        obj = self._object()
        parts = token.split("/")
        if len(parts) > 3 or not parts[0]:
            raise ObjFormatError(f"line {lineno}: bad vertex {token!r}")
        position = self._resolve(parts[0], 0, len(obj.vertices), lineno)
        tex = None
        if len(parts) > 1 and parts[1]:
            tex = self._resolve(parts[1], 1, len(obj.tex_vertices), lineno)
        normal = None
        if len(parts) > 2 and parts[2]:
            normal = self._resolve(parts[2], 2, len(obj.normals), lineno)
        return (position, tex, normal)

    def feed(self, lineno: int, keyword: str, args: List[str]) -> None:
        if keyword == "v":
            x, y, z = _numbers(args, lineno, 3, 7)[:3]
            self._object().vertices.append((x, y, z))
        elif keyword == "vt":
            values = _numbers(args, lineno, 1, 3) + [0.0, 0.0]
            self._object().tex_vertices.append(tuple(values[:3]))
        elif keyword == "vn":
            x, y, z = _numbers(args, lineno, 3, 3)
            self._object().normals.append((x, y, z))
        elif keyword == "f":
            if len(args) < 3:
                raise ObjFormatError(f"line {lineno}: a face needs three vertices")
            corners = [self._vertex_index(arg, lineno) for arg in args]
            shapes = self._geometry().shapes
            first = corners[0]
            for second, third in zip(corners[1:], corners[2:]):
                shapes.append((first, second, third))
        elif keyword == "l":
            if len(args) < 2:
                raise ObjFormatError(f"line {lineno}: a line needs two vertices")
            points = [self._vertex_index(arg, lineno) for arg in args]
            self._geometry().shapes.extend(zip(points, points[1:]))
        elif keyword == "p":
            points = [self._vertex_index(arg, lineno) for arg in args]
            self._geometry().shapes.extend((point,) for point in points)
        elif keyword == "o":
            self._new_object(" ".join(args))
        elif keyword == "usemtl":
            if not args:
                raise ObjFormatError(f"line {lineno}: usemtl needs a name")
            self._use_material(" ".join(args))
        elif keyword == "mtllib":
            if not args:
                raise ObjFormatError(f"line {lineno}: mtllib needs a file name")
            self.result.material_library = " ".join(args)


def parse_obj(text: str) -> _ObjFile:
    """Parse the text of an .obj file into objects with object-local indices.

    Polygons are split into triangle fans. Raises ObjFormatError on bad input.
    """
    parser = _ObjParser()
    for lineno, keyword, args in _statements(text):
        parser.feed(lineno, keyword, args)
    for obj in parser.result.objects:
        obj.geometry = [geometry for geometry in obj.geometry if geometry.shapes]
    return parser.result


def parse_mtl(text: str) -> List[_MtlMaterial]:
    """Parse the text of an .mtl file into its materials.

    Raises ObjFormatError on bad input.
    """
    materials: List[_MtlMaterial] = []
    for lineno, keyword, args in _statements(text):
        if keyword == "newmtl":
            if not args:
                raise ObjFormatError(f"line {lineno}: newmtl needs a name")
            materials.append(_MtlMaterial(name=" ".join(args)))
            continue
        if not materials:
            raise ObjFormatError(f"line {lineno}: {keyword} before newmtl")
        current = materials[-1]
        if keyword in ("Ka", "Kd", "Ks"):
            values = _numbers(args, lineno, 1, 3)
            color = tuple(values) if len(values) == 3 else (values[0],) * 3
            attribute = {
                "Ka": "color_ambient",
                "Kd": "color_diffuse",
                "Ks": "color_specular",
            }[keyword]
            setattr(current, attribute, color)
        elif keyword == "Ns":
            current.specular_coefficient = _numbers(args, lineno, 1, 1)[0]
        elif keyword == "d":
            current.alpha = _numbers(args, lineno, 1, 1)[0]
        elif keyword == "Tr":
            current.alpha = 1.0 - _numbers(args, lineno, 1, 1)[0]
        elif keyword == "map_Kd":
            current.diffuse_map = _map_name(args, lineno)
        elif keyword in ("map_Bump", "map_bump", "bump"):
            current.bump_map = _map_name(args, lineno)
    return materials


def _map_name(args: List[str], lineno: int) -> str:
    if not args:
        raise ObjFormatError(f"line {lineno}: a texture map needs a file name")
    return args[-1]


def _is_gray(color: Vector) -> bool:
    r, g, b = color
    return r == g == b


def _material_color(material: _MtlMaterial) -> Vector:
    for color in (
        material.color_diffuse,
        material.color_specular,
        material.color_ambient,
    ):
        if not _is_gray(color):
            return color
    return material.color_diffuse


def _convert_material(
    loaded: Loaded, directory: Path, material: _MtlMaterial
) -> Material:
    normal_texture = (
        loaded.image(directory / material.bump_map) if material.bump_map else None
    )
    albedo_texture = (
        loaded.image(directory / material.diffuse_map)
        if material.diffuse_map
        else None
    )
    r, g, b = _material_color(material)
    specular = material.color_specular
    if material.specular_coefficient > 0.1:
        roughness = min(
            _f32(math.sqrt(1.999 / material.specular_coefficient)), 1.0
        )
    else:
        roughness = 1.0
    return Material(
        name=material.name,
        albedo=(_f32(r), _f32(g), _f32(b), _f32(material.alpha)),
        albedo_texture=albedo_texture,
        metallic=_f32(sum(specular) / 3.0),
        roughness=roughness,
        normal_texture=normal_texture,
    )


def _differs(a: float, b: float) -> bool:
    return abs(_f32(a - b)) > _F32_EPSILON


def _build_mesh(obj: _ObjObject, geometry: _Geometry) -> Mesh:
    positions: List[float] = []
    normals: List[float] = []
    uvs: List[float] = []
    indices: List[int] = []
    seen: Dict[int, int] = {}

    for shape in geometry.shapes:
        if len(shape) != 3:
            continue
        for position_index, tex_index, normal_index in shape:
            tex = None if tex_index is None else obj.tex_vertices[tex_index]
            normal = None if normal_index is None else obj.normals[normal_index]
            index = seen.get(position_index)

            if index is not None and tex is not None:
                if _differs(uvs[index * 2], _f32(tex[0])) or _differs(
                    uvs[index * 2 + 1], _f32(tex[1])
                ):
                    index = None
            if index is not None and normal is not None:
                stored = normals[index * 3:index * 3 + 3]
                if any(_differs(s, _f32(n)) for s, n in zip(stored, normal)):
                    index = None

            if index is None:
                index = len(positions) // 3
                seen[position_index] = index
                positions.extend(_f32(c) for c in obj.vertices[position_index])
                if tex is not None:
                    uvs.append(_f32(tex[0]))
                    uvs.append(_f32(1.0 - _f32(tex[1])))
                if normal is not None:
                    normals.extend(_f32(c) for c in normal)
            indices.append(index)

    return Mesh(
        name=obj.name,
        material_name=geometry.material_name,
        positions=positions,
        indices=indices,
        normals=normals,
        uvs=uvs,
        colors=None,
        tangents=None,
    )


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ObjFormatError("file is not valid utf-8") from exc


def load_obj(
    loaded: Loaded, path: Union[str, os.PathLike]
) -> Tuple[List[Mesh], List[Material]]:
    """Parse the loaded .obj file at `path` and its .mtl library, if it names one.

    The .obj and .mtl bytes are removed from `loaded`; textures are read beside them.
    """
    parsed = parse_obj(_decode_text(loaded.remove_bytes(path)))
    directory = Path(path).parent

    materials: List[Material] = []
    if parsed.material_library is not None:
        library = loaded.remove_bytes(directory / parsed.material_library)
        materials = [
            _convert_material(loaded, directory, material)
            for material in parse_mtl(_decode_text(library))
        ]

    meshes = [
        _build_mesh(obj, geometry)
        for obj in parsed.objects
        for geometry in obj.geometry
    ]
    return meshes, materials