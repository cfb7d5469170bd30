import subprocess

import pytest

from stages import transcoding
from stages.transcoding import TranscodingError, transcode_for_transcription, transcode_to_pcm


@pytest.fixture
def fake_run(monkeypatch):
    calls = []

    def _run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, b"", b"")

    monkeypatch.setattr(transcoding.subprocess, "run", _run)
    return calls


def _value_after(cmd, flag):
    return cmd[cmd.index(flag) + 1]


def test_pcm_command(fake_run, tmp_path):
    out = transcode_to_pcm(tmp_path / "in.webm", tmp_path / "out.raw")

    cmd = fake_run[0]
    assert out == tmp_path / "out.raw"
    assert _value_after(cmd, "-ac") == "1"
    assert _value_after(cmd, "-ar") == "44100"
    assert _value_after(cmd, "-f") == "s16le"
    assert cmd[-1] == str(tmp_path / "out.raw")


def test_transcription_command(fake_run, tmp_path):
    transcode_for_transcription(tmp_path / "in.webm", tmp_path / "out.mp3")

    cmd = fake_run[0]
    assert _value_after(cmd, "-ar") == "16000"
    assert _value_after(cmd, "-b:a") == "64k"
    assert _value_after(cmd, "-f") == "mp3"
    filters = _value_after(cmd, "-af").split(",")
    assert filters[0] == "silenceremove=1:0:-50dB"
    assert "dynaudnorm" in filters


def test_nonzero_exit_raises(monkeypatch, tmp_path):
    def _run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 1, b"", b"Invalid data found")

    monkeypatch.setattr(transcoding.subprocess, "run", _run)

    with pytest.raises(TranscodingError, match="Invalid data found"):
        transcode_to_pcm(tmp_path / "in.webm", tmp_path / "out.raw")


def test_missing_binary_raises(monkeypatch, tmp_path):
    def _run(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(transcoding.subprocess, "run", _run)

    with pytest.raises(TranscodingError):
        transcode_to_pcm(tmp_path / "in.webm", tmp_path / "out.raw")
