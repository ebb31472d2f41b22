from __future__ import annotations

import pytest

from pathpad import history
from pathpad.errors import InvalidInputError, NotFoundError, PathPadIOError


@pytest.fixture
def hist(tmp_path):
    return tmp_path / "cfg" / "pathpad" / ".path_history"


@pytest.mark.unit
class TestHistory:
    def test_append_creates_parent_dirs(self, hist):
        history.append_history("/a:/b", hist)
        assert hist.read_text(encoding="utf-8") == "/a:/b\n"

    def test_newest_is_revision_one(self, hist):
        for v in ("/one", "/two", "/three"):
            history.append_history(v, hist)
        assert history.get_nth_last_revision(1, hist) == "/three"
        assert history.get_nth_last_revision(3, hist) == "/one"

    def test_not_enough_revisions(self, hist):
        history.append_history("/only", hist)
        with pytest.raises(NotFoundError, match="Only 1 revision"):
            history.get_nth_last_revision(2, hist)

    def test_missing_file(self, hist):
        with pytest.raises(PathPadIOError, match="not found"):
            history.get_nth_last_revision(1, hist)

    @pytest.mark.parametrize("n", [0, -1, True, "1"])
    def test_revision_must_be_positive_int(self, hist, n):
        history.append_history("/x", hist)
        with pytest.raises(InvalidInputError):
            history.get_nth_last_revision(n, hist)

    def test_newlines_rejected(self, hist):
        with pytest.raises(InvalidInputError):
            history.append_history("/a\n/b", hist)
        assert not hist.exists()

    def test_blank_lines_skipped(self, hist):
        hist.parent.mkdir(parents=True)
        hist.write_text("/old\n\n\n/new\n\n", encoding="utf-8")
        assert list(history.iter_revisions(hist)) == ["/new", "/old"]

    def test_small_blocks_split_lines_correctly(self, hist):
        values = [f"/dir{i}:/usr/bin:/opt/tool{i}" for i in range(25)]
        for v in values:
            history.append_history(v, hist)
        got = list(history.iter_revisions(hist, block_size=7))
        assert got == list(reversed(values))

    def test_crlf_endings_tolerated(self, hist):
        hist.parent.mkdir(parents=True)
        hist.write_bytes(b"/a\r\n/b\r\n")
        assert history.get_nth_last_revision(1, hist) == "/b"

    def test_recent_revisions_limit(self, hist):
        for v in ("/1", "/2", "/3"):
            history.append_history(v, hist)
        assert history.recent_revisions(2, hist) == ["/3", "/2"]
        assert history.recent_revisions(0, hist) == []

    def test_undecodable_file_is_an_io_error(self, hist):
        hist.parent.mkdir(parents=True)
        hist.write_bytes(b"/ok\n/bad\xff\n")
        with pytest.raises(PathPadIOError, match="not valid UTF-8"):
            history.get_nth_last_revision(1, hist)

    def test_unencodable_value_is_an_io_error(self, hist):
        # what os.environ holds for a PATH with bytes that are not UTF-8
        with pytest.raises(PathPadIOError):
            history.append_history("/a:/b\udcff", hist)
