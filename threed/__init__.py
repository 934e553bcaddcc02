"""CPU-side textures, meshes and materials, with loaders for images, .obj/.mtl and .3d files."""

__version__ = "0.1.0"