"""Tests for audio recorder behavior with mocked sounddevice streams."""
import numpy as np
import pytest

from voxpad.recorder import AudioRecorder
from voxpad import recorder as recorder_module


class _FakeRawInputStream:
    created = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.started = False
        self.stopped = False
        self.closed = False
        _FakeRawInputStream.created.append(self)

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def close(self):
        self.closed = True


@pytest.fixture
def fake_stream(monkeypatch):
    _FakeRawInputStream.created.clear()
    monkeypatch.setattr(recorder_module.sd, "RawInputStream", _FakeRawInputStream)
    return _FakeRawInputStream


def _pcm(*values):
    return np.array(values, dtype="<i2").tobytes()


def test_start_initializes_stream_and_returns_active_session(fake_stream):
    rec = AudioRecorder(sample_rate=22050, input_device="default", channels=2)

    session = rec.start()

    assert rec.is_recording is True
    assert session.active is True
    assert session.sample_rate == 22050
    assert session.channels == 2
    assert rec.input_device is None
    assert len(fake_stream.created) == 1
    stream = fake_stream.created[0]
    assert stream.started is True
    assert stream.kwargs["samplerate"] == 22050
    assert stream.kwargs["channels"] == 2
    assert stream.kwargs["dtype"] == "int16"
    assert session.stream is stream


def test_start_while_recording_returns_same_session(fake_stream):
    rec = AudioRecorder()
    first = rec.start()
    second = rec.start()
    assert first is second
    assert len(fake_stream.created) == 1


def test_audio_callback_appends_chunks_to_session(fake_stream):
    rec = AudioRecorder()
    session = rec.start()

    rec._audio_callback(_pcm(1, 2), frames=2, time=None, status=None)
    rec._audio_callback(_pcm(3), frames=1, time=None, status=None)

    assert session.chunks == [_pcm(1, 2), _pcm(3)]
    assert session.audio_bytes() == _pcm(1, 2, 3)
    assert session.frame_count == 3


def test_stop_returns_none_when_not_recording():
    rec = AudioRecorder()
    assert rec.stop() is None


def test_start_then_immediate_stop_yields_empty_session(fake_stream, capsys):
    rec = AudioRecorder()
    rec.start()
    session = rec.stop()

    assert session is not None
    assert session.active is False
    assert session.chunks == []
    assert session.audio_bytes() == b""
    assert rec.is_recording is False
    assert fake_stream.created[0].stopped is True
    assert fake_stream.created[0].closed is True
    assert "No audio recorded" in capsys.readouterr().out


def test_chunks_after_stop_are_ignored(fake_stream):
    rec = AudioRecorder()
    session = rec.start()
    rec._audio_callback(_pcm(7), 1, None, None)
    rec.stop()
    rec._audio_callback(_pcm(8), 1, None, None)
    session.add_chunk(_pcm(9))

    assert session.chunks == [_pcm(7)]


def test_start_portaudio_error_prints_devices_and_reraises(monkeypatch, capsys):
    class _ErrorInputStream:
        def __init__(self, **kwargs):
            pass

        def start(self):
            raise recorder_module.sd.PortAudioError("no device found")

    monkeypatch.setattr(recorder_module.sd, "RawInputStream", _ErrorInputStream)
    monkeypatch.setattr(recorder_module.sd, "query_devices", lambda: "device list")

    rec = AudioRecorder()
    with pytest.raises(recorder_module.sd.PortAudioError):
        rec.start()

    out = capsys.readouterr().out
    assert "[ERR]" in out
    assert "device list" in out
    assert "voxpad --setup" in out
    # State should be reset so start() can be retried
    assert rec.is_recording is False
    assert rec.session is None


def test_numeric_input_device_is_used_as_index(fake_stream):
    rec = AudioRecorder(input_device="2")
    rec.start()
    assert fake_stream.created[0].kwargs["device"] == 2


@pytest.mark.parametrize("value, expected", [
    ("default", None),
    ("", None),
    (3, 3),
    (" 4 ", 4),
    ("USB Microphone", "USB Microphone"),
])
def test_input_device_resolution(value, expected):
    assert AudioRecorder(input_device=value).input_device == expected


def test_device_value_error_resets_state_and_allows_retry(monkeypatch, capsys):
    attempts = []

    class _NoMatchInputStream(_FakeRawInputStream):
        def __init__(self, **kwargs):
            attempts.append(kwargs)
            if len(attempts) == 1:
                raise ValueError("No input device matching 'USB Mic'")
            super().__init__(**kwargs)

    _FakeRawInputStream.created.clear()
    monkeypatch.setattr(recorder_module.sd, "RawInputStream", _NoMatchInputStream)
    monkeypatch.setattr(recorder_module.sd, "query_devices", lambda: "device list")

    rec = AudioRecorder(input_device="USB Mic")
    with pytest.raises(ValueError):
        rec.start()

    assert rec.is_recording is False
    assert rec.session is None
    assert "[ERR] Could not open microphone" in capsys.readouterr().out

    session = rec.start()
    assert rec.is_recording is True
    assert session.stream is _FakeRawInputStream.created[0]
    assert len(attempts) == 2


def test_failed_stream_start_closes_created_stream(monkeypatch):
    created = []

    class _StartFailsInputStream(_FakeRawInputStream):
        def start(self):
            created.append(self)
            raise RuntimeError("device busy")

    monkeypatch.setattr(recorder_module.sd, "RawInputStream", _StartFailsInputStream)
    monkeypatch.setattr(recorder_module.sd, "query_devices", lambda: "device list")

    rec = AudioRecorder()
    with pytest.raises(RuntimeError):
        rec.start()

    assert created[0].closed is True
    assert rec.is_recording is False


def test_stop_keeps_flushed_chunks_and_closes_stream_when_stop_fails(monkeypatch):
    rec = AudioRecorder()

    class _FlushingInputStream(_FakeRawInputStream):
        def stop(self):
            # PortAudio drains pending buffers through the callback while stopping
            rec._audio_callback(_pcm(42), 1, None, None)
            raise recorder_module.sd.PortAudioError("stop failed")

    _FakeRawInputStream.created.clear()
    monkeypatch.setattr(recorder_module.sd, "RawInputStream", _FlushingInputStream)
    session = rec.start()
    rec._audio_callback(_pcm(1), 1, None, None)

    with pytest.raises(recorder_module.sd.PortAudioError):
        rec.stop()

    assert _FakeRawInputStream.created[0].closed is True
    assert session.chunks == [_pcm(1), _pcm(42)]
    assert session.active is False
    assert rec.is_recording is False


def test_stop_collects_chunks_flushed_during_stop(monkeypatch):
    rec = AudioRecorder()

    class _FlushingInputStream(_FakeRawInputStream):
        def stop(self):
            super().stop()
            rec._audio_callback(_pcm(5, 6), 2, None, None)

    monkeypatch.setattr(recorder_module.sd, "RawInputStream", _FlushingInputStream)
    rec.start()

    session = rec.stop()

    assert session.chunks == [_pcm(5, 6)]
    assert session.frame_count == 2
