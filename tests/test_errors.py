import pytest

from threed.errors import (
    AssetError,
    ImageFormatError,
    NotLoadedError,
    ObjFormatError,
    ThreeDFormatError,
)


def test_not_loaded_message():
    err = NotLoadedError("models/cube.obj")
    assert str(err) == "tried to use models/cube.obj which was not loaded"
    assert err.path == "models/cube.obj"


def test_not_loaded_is_lookup_error():
    err = NotLoadedError("a.png")
    assert isinstance(err, LookupError)
    assert isinstance(err, AssetError)
    assert err.path == "a.png"
    with pytest.raises(LookupError) as info:
        raise err
    assert info.value.path == "a.png"


@pytest.mark.parametrize(
    "cls, text",
    [
        (ImageFormatError, "error while parsing an image file"),
        (ThreeDFormatError, "error while parsing a .3d file"),
        (ObjFormatError, "error while parsing an .obj file"),
    ],
)
def test_format_error_messages(cls, text):
    assert str(cls()) == text
    err = cls("Corrupt file!")
    assert str(err) == f"{text}: Corrupt file!"
    assert err.detail == "Corrupt file!"


def test_format_errors_share_base():
    err = ThreeDFormatError("No mesh data in file!")
    assert isinstance(err, AssetError)
    assert err.detail == "No mesh data in file!"
    assert str(err) == "error while parsing a .3d file: No mesh data in file!"