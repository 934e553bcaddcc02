import pytest

from threed.texture import Format, TextureLengthError
from threed.texture_data import has_transparency, split_cube_faces


def test_opaque_rgba_bytes():
    data = bytes([10, 20, 30, 255] * 4)
    assert has_transparency(data, Format.RGBA, 2, 2) is False


def test_translucent_rgba_bytes():
    data = bytes([10, 20, 30, 255] * 3 + [1, 2, 3, 254])
    assert has_transparency(data, Format.RGBA, 2, 2) is True


def test_float_alpha_threshold():
    assert has_transparency([0.0, 0.0, 0.0, 1.0], Format.RGBA, 1, 1) is False
    assert has_transparency([0.0, 0.0, 0.0, 0.5], Format.RGBA, 1, 1) is True


def test_non_rgba_is_never_transparent():
    data = bytes([0, 0, 0] * 4)
    assert has_transparency(data, Format.RGB, 2, 2) is False


def test_custom_is_max():
    data = [0, 0, 0, 7, 0, 0, 0, 7]
    assert has_transparency(data, Format.RGBA, 2, 1, is_max=lambda v: True) is False
    assert has_transparency(data, Format.RGBA, 2, 1, is_max=lambda v: v == 8) is True


def test_wrong_length_raises():
    with pytest.raises(TextureLengthError) as info:
        has_transparency(bytes(12), Format.RGBA, 2, 2)
    assert info.value.expected == 4
    assert info.value.actual == 3


def test_split_cube_faces_order_and_round_trip():
    faces_in = [bytes([face] * 4) for face in range(6)]
    data = b"".join(faces_in)
    faces = split_cube_faces(data, 1, 1, Format.RGBA)
    assert len(faces) == 6
    assert list(faces) == faces_in
    assert b"".join(faces) == data


def test_split_cube_faces_with_list_data():
    data = list(range(6 * 2 * 3))
    faces = split_cube_faces(data, 2, 1, Format.RGB)
    assert all(len(face) == 6 for face in faces)
    assert [v for face in faces for v in face] == data


def test_split_cube_faces_wrong_size():
    with pytest.raises(TextureLengthError):
        split_cube_faces(bytes(6 * 4), 2, 2, Format.RGBA)