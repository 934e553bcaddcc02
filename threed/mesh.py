"""CPU-side meshes and materials produced by the asset parsers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from threed.texture import CPUTexture

Color = Tuple[float, float, float, float]

WHITE: Color = (1.0, 1.0, 1.0, 1.0)
BLACK: Color = (0.0, 0.0, 0.0, 1.0)


@dataclass
class Mesh:
    """Vertex data of one mesh, with flat lists of per-vertex components."""

    name: str = ""
    material_name: Optional[str] = None
    positions: List[float] = field(default_factory=list)
    indices: Optional[List[int]] = None
    normals: Optional[List[float]] = None
    uvs: Optional[List[float]] = None
    colors: Optional[List[int]] = None
    tangents: Optional[List[float]] = None


@dataclass
class Material:
    """A physically based material; colours are RGBA in the range 0 to 1."""

    name: str = "default"
    albedo: Color = WHITE
    albedo_texture: Optional[CPUTexture] = None
    metallic: float = 0.0
    roughness: float = 1.0
    metallic_roughness_texture: Optional[CPUTexture] = None
    normal_texture: Optional[CPUTexture] = None
    normal_scale: float = 1.0
    occlusion_texture: Optional[CPUTexture] = None
    occlusion_strength: float = 1.0
    occlusion_metallic_roughness_texture: Optional[CPUTexture] = None
    emissive: Color = BLACK
    emissive_texture: Optional[CPUTexture] = None
    alpha_cutout: Optional[float] = None