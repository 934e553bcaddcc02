import io

import pytest
from PIL import Image

from threed.errors import NotLoadedError
from threed.loader import Loaded, Loading, load
from threed.texture import Format


def _png(color, size=(1, 1), mode="RGBA"):
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def test_insert_and_get_bytes():
    loaded = Loaded()
    loaded.insert_bytes("assets/a.bin", b"abc")
    assert loaded.get_bytes("assets/a.bin") == b"abc"
    assert loaded.get_bytes("assets/a.bin") == b"abc"


def test_get_bytes_matches_partial_path():
    loaded = Loaded()
    loaded.insert_bytes("some/dir/model.obj", b"data")
    assert loaded.get_bytes("model.obj") == b"data"


def test_get_missing_raises():
    loaded = Loaded()
    with pytest.raises(NotLoadedError) as info:
        loaded.get_bytes("missing.png")
    assert info.value.path == "missing.png"


def test_remove_bytes_removes_entry():
    loaded = Loaded()
    loaded.insert_bytes("x.bin", b"123")
    assert loaded.remove_bytes("x.bin") == b"123"
    assert len(loaded) == 0
    with pytest.raises(NotLoadedError):
        loaded.remove_bytes("x.bin")


def test_remove_bytes_partial_path():
    loaded = Loaded()
    loaded.insert_bytes("deep/path/tex.png", b"q")
    assert loaded.remove_bytes("tex.png") == b"q"
    assert "deep/path/tex.png" not in loaded


def test_load_reads_files(tmp_path):
    target = tmp_path / "data.bin"
    target.write_bytes(b"hello")
    results = []
    load([target], results.append)
    assert len(results) == 1
    assert results[0].get_bytes(target) == b"hello"


def test_load_missing_file_reported_on_access(tmp_path):
    missing = tmp_path / "nothing.bin"
    results = []
    load([missing], results.append)
    with pytest.raises(NotLoadedError):
        results[0].get_bytes(missing)
    with pytest.raises(NotLoadedError):
        results[0].remove_bytes(missing)


def test_image_decodes_png():
    loaded = Loaded()
    loaded.insert_bytes("img.png", _png((10, 20, 30, 40), size=(2, 3)))
    texture = loaded.image("img.png")
    assert texture.width == 2
    assert texture.height == 3
    assert texture.format is Format.RGBA
    assert bytes(texture.data[:4]) == bytes([10, 20, 30, 40])


def test_cube_image_concatenates_faces():
    loaded = Loaded()
    names = ["right", "left", "top", "bottom", "front", "back"]
    for value, name in enumerate(names):
        loaded.insert_bytes(f"{name}.png", _png((value, value, value, 255)))
    texture = loaded.cube_image(*(f"{name}.png" for name in names))
    assert texture.width == 1
    assert texture.height == 1
    assert len(texture.data) == 6 * 4
    assert [texture.data[i * 4] for i in range(6)] == list(range(6))


def test_loading_stores_result(tmp_path):
    target = tmp_path / "f.txt"
    target.write_bytes(b"content")
    loading = Loading([target], lambda loaded: loaded.get_bytes(target).upper())
    assert loading.is_loaded()
    assert loading.result() == b"CONTENT"


def test_loading_reraises_error(tmp_path):
    missing = tmp_path / "gone.txt"
    loading = Loading([missing], lambda loaded: loaded.get_bytes(missing))
    assert loading.is_loaded()
    with pytest.raises(NotLoadedError):
        loading.result()