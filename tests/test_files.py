import pytest

from utilkit.files import TextFile, create_file
from utilkit.text import Text


def test_create_and_read_round_trip(tmp_path):
    path = tmp_path / "out.txt"
    with create_file(path, "first line\n") as f:
        assert f.read() == "first line\n"
        assert f.data == "first line\n"


def test_create_accepts_text(tmp_path):
    path = Text(str(tmp_path / "t.txt"))
    with create_file(path, Text("body")) as f:
        assert f.read() == "body"


def test_create_replaces_existing(tmp_path):
    path = tmp_path / "r.txt"
    create_file(path, "old content").close()
    with create_file(path, "new") as f:
        assert f.read() == "new"


def test_write_appends(tmp_path):
    path = tmp_path / "a.txt"
    with create_file(path, "one") as f:
        assert f.write("two") == len("two")
        assert f.read() == "onetwo"
    assert path.read_text(encoding="utf-8") == "onetwo"


def test_open_creates_missing_file(tmp_path):
    path = tmp_path / "new.txt"
    with TextFile(path) as f:
        assert f.read() == ""
    assert path.exists()


def test_empty_path_raises():
    with pytest.raises(ValueError):
        TextFile("")


def test_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        TextFile(tmp_path / "no_dir" / "x.txt")


def test_write_after_close_raises(tmp_path):
    f = TextFile(tmp_path / "c.txt")
    f.close()
    with pytest.raises(ValueError):
        f.write("data")