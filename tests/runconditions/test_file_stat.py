"""Tests for the file stat service."""

from runconditions.runtime.file_stat import FileStat, stat_file


class TestStatFile:
    def test_existing_file(self, tmp_path):
        (tmp_path / "data.bin").write_bytes(b"x" * 1024)
        stat = stat_file(tmp_path, "data.bin")
        assert stat == FileStat(path=tmp_path / "data.bin", exists=True, length=1024)

    def test_empty_file(self, tmp_path):
        (tmp_path / "empty").write_bytes(b"")
        stat = stat_file(tmp_path, "empty")
        assert stat.exists is True
        assert stat.length == 0

    def test_missing_file(self, tmp_path):
        stat = stat_file(tmp_path, "nope.txt")
        assert stat.exists is False
        assert stat.length is None

    def test_nested_relative_path(self, tmp_path):
        (tmp_path / "a" / "b").mkdir(parents=True)
        (tmp_path / "a" / "b" / "c.txt").write_text("hello")
        assert stat_file(str(tmp_path), "a/b/c.txt").length == 5

    def test_path_through_a_file_is_missing(self, tmp_path):
        (tmp_path / "file.txt").write_text("x")
        assert stat_file(tmp_path, "file.txt/child").exists is False

    def test_name_too_long_is_missing(self, tmp_path):
        stat = stat_file(tmp_path, "a" * 300)
        assert stat.exists is False
        assert stat.length is None

    def test_embedded_nul_is_missing(self, tmp_path):
        assert stat_file(tmp_path, "bad\x00name").exists is False
