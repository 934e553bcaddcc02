from threed.mesh import Material, Mesh
from threed.texture import CPUTexture


def test_mesh_defaults_are_empty():
    mesh = Mesh()
    assert mesh.name == ""
    assert mesh.positions == []
    assert mesh.indices is None and mesh.normals is None and mesh.uvs is None


def test_mesh_positions_not_shared():
    first = Mesh()
    second = Mesh()
    first.positions.append(1.0)
    assert second.positions == []


def test_mesh_equality_compares_fields():
    a = Mesh(name="m", positions=[0.0, 1.0, 2.0], indices=[0])
    b = Mesh(name="m", positions=[0.0, 1.0, 2.0], indices=[0])
    assert a == b
    b.indices = [1]
    assert not a == b


def test_material_defaults():
    material = Material()
    assert material.albedo == (1.0, 1.0, 1.0, 1.0)
    assert material.metallic == 0.0
    assert material.roughness == 1.0
    assert material.albedo_texture is None and material.alpha_cutout is None


def test_material_keeps_texture():
    texture = CPUTexture(data=bytearray(4))
    material = Material(name="stone", albedo_texture=texture, metallic=0.5)
    assert material.albedo_texture is texture
    assert material.name == "stone"
    assert material.metallic == 0.5