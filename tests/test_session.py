"""Tests for recording session bookkeeping."""
import pytest

from voxpad.session import RecordingSession, format_elapsed


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0:00"), (5.9, "0:05"), (61, "1:01"), (600, "10:00"), (-3, "0:00")],
)
def test_format_elapsed(seconds, expected):
    assert format_elapsed(seconds) == expected


def test_elapsed_uses_stop_time_once_closed():
    session = RecordingSession(sample_rate=16000, channels=1, started_at=100.0)
    assert session.elapsed_seconds(now=103.5) == pytest.approx(3.5)

    session.stopped_at = 107.0
    session.close()
    assert session.stopped_at == 107.0
    assert session.elapsed_seconds() == pytest.approx(7.0)


def test_close_drops_stream_handle():
    session = RecordingSession(sample_rate=16000, channels=1, stream=object())
    session.close()
    assert session.active is False
    assert session.stream is None


def test_empty_chunks_are_ignored():
    session = RecordingSession(sample_rate=16000, channels=2)
    session.add_chunk(b"")
    session.add_chunk(b"\x01\x00\x02\x00")
    assert session.chunks == [b"\x01\x00\x02\x00"]
    assert session.frame_count == 1
