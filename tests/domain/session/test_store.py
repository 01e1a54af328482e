"""Tests for the session file format."""

from pathlib import Path

from jukebox.domain.playback.state import LoopMode
from jukebox.domain.session.store import (
    SessionRecord,
    format_session,
    load_session,
    parse_session,
    save_session,
)

FULL_RECORD = SessionRecord(
    volume=65,
    track="b.mp3",
    position=42.5,
    cursor="c.mp3",
    playlist="evens",
    loop=LoopMode.SINGLE,
    shuffle=False,
    paused=True,
)


class TestFormat:
    """Test writing key=value lines."""

    def test_all_keys(self):
        """Test every field becomes one line."""
        assert format_session(FULL_RECORD).splitlines() == [
            "volume=65",
            "track=b.mp3",
            "position=42.500",
            "cursor=c.mp3",
            "playlist=evens",
            "loop=single",
            "shuffle=0",
            "paused=1",
        ]

    def test_unset_fields_omitted(self):
        """Test None fields are not written."""
        assert format_session(SessionRecord(volume=10)) == "volume=10\n"
        assert format_session(SessionRecord()) == ""


class TestParse:
    """Test reading key=value lines."""

    def test_round_trip(self):
        """Test parse(format(record)) gives the record back."""
        assert parse_session(format_session(FULL_RECORD)) == FULL_RECORD

    def test_unknown_keys_ignored(self):
        """Test keys from other versions do not break loading."""
        record = parse_session("volume=30\ncolor=blue\nshuffle=1\n")
        assert record == SessionRecord(volume=30, shuffle=True)

    def test_malformed_values_ignored(self):
        """Test bad values leave the field unset."""
        record = parse_session(
            "volume=loud\nposition=-3\nloop=forever\nshuffle=yes\npaused=1\ngarbage line\n"
        )
        assert record == SessionRecord(paused=True)

    def test_volume_clamped(self):
        """Test an out-of-range volume is clamped."""
        assert parse_session("volume=250\n").volume == 100

    def test_names_keep_equals_signs(self):
        """Test only the first '=' separates key from value."""
        assert parse_session("track=a=b.mp3\n").track == "a=b.mp3"


class TestFiles:
    """Test saving and loading the session file."""

    def test_save_and_load(self, tmp_path: Path):
        """Test a saved record loads back identically."""
        path = tmp_path / "state" / "session"
        assert save_session(path, FULL_RECORD)
        assert load_session(path) == FULL_RECORD

    def test_missing_file_is_empty(self, tmp_path: Path):
        """Test a missing file is an empty session."""
        record = load_session(tmp_path / "none")
        assert record == SessionRecord()
        assert record.is_empty()

    def test_unreadable_file_is_empty(self, tmp_path: Path):
        """Test a path that cannot be read as a file is an empty session."""
        directory = tmp_path / "session"
        directory.mkdir()
        assert load_session(directory) == SessionRecord()

    def test_save_failure_reported(self, tmp_path: Path):
        """Test an unwritable location returns False instead of raising."""
        blocker = tmp_path / "file"
        blocker.write_text("")
        assert save_session(blocker / "session", FULL_RECORD) is False
