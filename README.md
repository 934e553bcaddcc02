# threed

Asset handling for 3D applications, done on the CPU side:

- `threed.texture`: `CPUTexture` with `Format`, `Interpolation` and `Wrapping`, padding (`CPUTexture.add_padding`), mip-map level counts (`number_of_mip_maps`) and data length checks (`check_data_length`, which raises `TextureLengthError`);
- `threed.texture_data`: `DepthFormat`, `has_transparency` for RGBA pixel data and `split_cube_faces` for six-face cube map data;
- `threed.viewport.Viewport` and `threed.texture_transform.TextureTransform`;
- `threed.loader`: loading files or URLs into a `Loaded` set and decoding images from it;
- `threed.imaging`: `image_from_bytes`, `flip_rows` and `save_pixels`;
- `threed.obj` and `threed.threed`: Wavefront `.obj`/`.mtl` files and the compact `.3d` binary mesh format;
- `threed.mesh`: the `Mesh` and `Material` dataclasses that the parsers return;
- `threed.errors`: `AssetError` and its subclasses `NotLoadedError`, `ImageFormatError`, `ThreeDFormatError` and `ObjFormatError`.

## Installation

```
pip install threed
```

Pillow is the only runtime dependency. It decodes and saves images.

## Loading resources

```python
from threed.loader import Loaded, load

def on_done(loaded: Loaded) -> None:
    texture = loaded.image("assets/checker.png")
    print(texture.width, texture.height, texture.format)

load(["assets/checker.png"], on_done)
```

`load` reads every path, then calls `on_done`. A path with an `http`, `https`, `ftp` or `file` scheme is fetched with `urllib`, and errors from that fetch are raised straight away. A local file that cannot be read is recorded instead, and the error is reported only when its bytes are requested.

`Loaded.get_bytes` and `Loaded.remove_bytes` first look up a resource by its exact path. If nothing matches exactly, they use the first stored path whose text contains the requested one. When no path matches at all, `NotLoadedError` is raised. A resource that failed to load raises `NotLoadedError` on an exact match. On a partial match it re-raises the original `OSError`.

You can also add bytes from any source yourself:

```python
loaded = Loaded()
loaded.insert_bytes("model.obj", obj_bytes)
```

`Loaded.cube_image(right, left, top, bottom, front, back)` decodes six images into one texture. The face data is stored in that order, and the size and format come from the right image.

`Loading(paths, on_load)` runs `load` and passes the result to `on_load`. Afterwards `is_loaded()` returns true. `result()` returns the object that `on_load` made, or re-raises the exception it raised.

## Meshes and materials

```python
from threed.obj import load_obj
from threed.threed import load_three_d, save_three_d

meshes, materials = load_obj(loaded, "model.obj")
save_three_d("out/model.3d", meshes, materials)
```

`load_obj` removes the `.obj` bytes from `loaded`. It also removes the bytes of the `.mtl` library the file names, if it names one. Textures are looked up relative to the `.obj` file. Polygons are split into triangle fans, and only triangles end up in the meshes. The lower-level `parse_obj` and `parse_mtl` parse text directly.

`save_three_d` writes `<file>.3d`. Each material that has an albedo texture also gets a PNG file, named `<file>_<material>.png` and placed next to it. `serialize` and `deserialize` work on bytes. `deserialize` and `load_three_d` accept the current version of the format and also the two older versions. `load_three_d` restores each material's name, albedo colour and albedo texture. Metallic and roughness values are stored in the file but are not read back into the materials.

## Textures

```python
from threed.texture import CPUTexture, Format

tex = CPUTexture(data=[255] * 16, width=2, height=2, format=Format.RGBA)
tex.add_padding(1, 1, 1, 1)   # now 4x4, new pixels are zero
```

`threed.imaging.save_pixels(path, pixels, width, height)` saves bottom-up RGBA pixels as an image. The image format follows the file extension.

## What this package does not do

Everything here runs on the CPU. There is no GPU upload, no rendering, no window, no input handling and no GUI. glTF files are not read. The texture types only describe and check pixel data. Nothing is drawn.

## Running the tests

```
pip install -e ".[test]"
pytest
```