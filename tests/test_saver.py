import pytest

from threed.saver import save_file


def test_save_file_writes_bytes(tmp_path):
    target = tmp_path / "data.bin"
    payload = bytes(range(256))
    save_file(target, payload)
    assert target.read_bytes() == payload


def test_save_file_replaces_content(tmp_path):
    target = tmp_path / "data.bin"
    save_file(target, b"a much longer first content")
    save_file(str(target), b"short")
    assert target.read_bytes() == b"short"


def test_save_file_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        save_file(tmp_path / "missing" / "data.bin", b"x")