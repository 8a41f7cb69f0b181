"""Tests for file enumeration and reading."""

import pytest

from csssweep.errors import FileReadError
from csssweep.files import find_files, read_text


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "css" / "vendor").mkdir(parents=True)
    (tmp_path / "css" / "main.css").write_text(".a {}", encoding="utf-8")
    (tmp_path / "css" / "vendor" / "lib.css").write_text(".b {}", encoding="utf-8")
    (tmp_path / "css" / "notes.txt").write_text("", encoding="utf-8")
    return tmp_path


class TestFindFiles:
    def test_recursive_glob(self, tree):
        files = find_files(f"{tree}/css/**/*.css")
        assert [f.rsplit("/", 1)[-1] for f in files] == ["main.css", "lib.css"]

    def test_ignore_globs(self, tree):
        files = find_files(f"{tree}/css/**/*.css", [f"{tree}/css/vendor/*"])
        assert [f.rsplit("/", 1)[-1] for f in files] == ["main.css"]

    def test_directories_skipped(self, tree):
        assert find_files(f"{tree}/css/*") == sorted(
            [f"{tree}/css/main.css", f"{tree}/css/notes.txt"]
        )

    def test_empty_pattern(self):
        assert find_files("") == []


class TestReadText:
    def test_reads_utf8(self, tmp_path):
        path = tmp_path / "a.html"
        path.write_text("<p class=\"café\">", encoding="utf-8")
        assert "café" in read_text(path)

    def test_missing(self, tmp_path):
        with pytest.raises(FileReadError):
            read_text(tmp_path / "missing.html")

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "a.bin"
        path.write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(FileReadError):
            read_text(path)
