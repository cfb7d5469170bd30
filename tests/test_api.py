import io
import os
import time
import uuid

import pytest

import api
from model.scoreresult import IntonationScore, Scored, TextScore
from maintenance import request_file_name
from stages.scoring.text import TextCritiqueError
from stages.transcoding import TranscodingError


@pytest.fixture
def client(monkeypatch, tmp_path):
    monkeypatch.setattr(api, "TEMP_DIR", tmp_path)
    api.app.config["TESTING"] = True
    with api.app.test_client() as client:
        yield client


@pytest.fixture
def fake_critique(monkeypatch):
    calls = []

    def _critique(standard_text, kansai_text):
        calls.append((standard_text, kansai_text))
        return TextScore(kansai_level=80, analysis="語尾が自然です")

    monkeypatch.setattr(api, "critique_kansai_text", _critique)
    return calls


def test_index(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "running" in response.get_json()["message"]


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_analyze_requires_both_texts(client, fake_critique):
    response = client.post("/analyze-kansai", json={"standardText": "今日は"})

    assert response.status_code == 400
    assert fake_critique == []


def test_analyze_without_audio(client, fake_critique):
    response = client.post("/analyze-kansai", json={"standardText": "本当に", "kansaiText": "ほんまに"})
    body = response.get_json()

    assert response.status_code == 200
    assert body["kansaiLevel"] == 80
    assert body["intonationScore"] == 0
    assert body["finalScore"] == 40
    assert body["analysis"] == "語尾が自然です"
    assert body["intonationDetails"]["status"] == "unscorable"
    assert body["intonationDetails"]["reason"] == "no_audio"
    assert body["standardText"] == "本当に"
    assert body["kansaiText"] == "ほんまに"


def test_analyze_with_audio(client, fake_critique, monkeypatch, tmp_path):
    seen = {}

    def _fake_transcode(input_path, output_path, sample_rate=None):
        seen["input"] = input_path.read_bytes()
        seen["sample_rate"] = sample_rate
        output_path.write_bytes(b"\x00\x01" * 10)
        return output_path

    def _fake_evaluate(pcm):
        seen["pcm"] = pcm
        return Scored(IntonationScore(phrase_final=90, pitch_range=60, accent_pattern=50, total_score=65))

    monkeypatch.setattr(api, "transcode_to_pcm", _fake_transcode)
    monkeypatch.setattr(api, "evaluate_intonation", _fake_evaluate)

    response = client.post(
        "/analyze-kansai",
        json={"standardText": "a", "kansaiText": "b", "audioBuffer": [26, 69, 223, 163, 1, 2]},
    )
    body = response.get_json()

    assert response.status_code == 200
    assert seen["input"] == bytes([26, 69, 223, 163, 1, 2])
    assert seen["sample_rate"] == 44100
    assert seen["pcm"] == b"\x00\x01" * 10
    assert body["intonationScore"] == 65
    assert body["finalScore"] == 73  # (80 + 65) / 2 = 72.5
    assert body["intonationDetails"]["phraseFinal"] == 90
    # arquivos temporários removidos
    assert list(tmp_path.iterdir()) == []


def test_audio_failure_degrades_to_zero(client, fake_critique, monkeypatch, tmp_path):
    def _broken(*args, **kwargs):
        raise TranscodingError("ffmpeg falhou")

    monkeypatch.setattr(api, "transcode_to_pcm", _broken)

    response = client.post(
        "/analyze-kansai",
        json={"standardText": "a", "kansaiText": "b", "audioBuffer": [1, 2, 3]},
    )
    body = response.get_json()

    assert response.status_code == 200
    assert body["intonationScore"] == 0
    assert body["finalScore"] == 40
    assert body["intonationDetails"]["reason"] == "analysis_failed"
    assert list(tmp_path.iterdir()) == []


def test_analyze_llm_unavailable(client, monkeypatch):
    def _unavailable(standard_text, kansai_text):
        raise TextCritiqueError("LLM não configurado")

    monkeypatch.setattr(api, "critique_kansai_text", _unavailable)

    response = client.post("/analyze-kansai", json={"standardText": "a", "kansaiText": "b"})

    assert response.status_code == 500
    assert response.get_json()["error"] == "Failed to get analysis result"


def test_transcribe_requires_audio(client):
    response = client.post("/transcribe", data={}, content_type="multipart/form-data")

    assert response.status_code == 400


def test_transcribe_flow(client, monkeypatch, tmp_path):
    def _fake_transcode(input_path, output_path):
        assert input_path.read_bytes() == b"webm-bytes"
        output_path.write_bytes(b"mp3")
        return output_path

    monkeypatch.setattr(api, "transcode_for_transcription", _fake_transcode)
    monkeypatch.setattr(api, "_transcribe", lambda path: "ほんまにおおきに")

    response = client.post(
        "/transcribe",
        data={"audio": (io.BytesIO(b"webm-bytes"), "recording.webm")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 200
    assert response.get_json() == {"text": "ほんまにおおきに"}
    assert list(tmp_path.iterdir()) == []


def test_transcribe_failure_returns_details(client, monkeypatch, tmp_path):
    def _broken(input_path, output_path):
        raise TranscodingError("codec desconhecido")

    monkeypatch.setattr(api, "transcode_for_transcription", _broken)

    response = client.post(
        "/transcribe",
        data={"audio": (io.BytesIO(b"x"), "recording.webm")},
        content_type="multipart/form-data",
    )
    body = response.get_json()

    assert response.status_code == 500
    assert body["error"] == "Failed to transcribe audio"
    assert "codec desconhecido" in body["details"]
    assert list(tmp_path.iterdir()) == []


def test_cors_headers_for_allowed_origin(client, monkeypatch):
    monkeypatch.setattr(api.settings, "cors_origins", ["http://localhost:3000"])

    allowed = client.get("/health", headers={"Origin": "http://localhost:3000"})
    other = client.get("/health", headers={"Origin": "http://evil.example"})

    assert allowed.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
    assert "Access-Control-Allow-Origin" not in other.headers


def test_maintenance_flush_is_dry_run_by_default(client, monkeypatch, tmp_path):
    import config

    monkeypatch.setattr(config, "TEMP_DIR", tmp_path)
    request_id = uuid.uuid4()
    leftover = tmp_path / request_file_name("output.raw", request_id)
    leftover.write_bytes(b"x")
    past = time.time() - 2 * 86400
    os.utime(leftover, (past, past))

    response = client.post("/maintenance/flush", json={"max_age_days": 1})
    body = response.get_json()

    assert response.status_code == 200
    assert body["dry_run"] is True
    assert body["removed"] == {str(request_id): [leftover.name]}
    assert leftover.exists()

    applied = client.post("/maintenance/flush", json={"max_age_days": 1, "apply": True})

    assert applied.status_code == 200
    assert not leftover.exists()


def test_maintenance_flush_rejects_bad_age(client):
    response = client.post("/maintenance/flush", json={"max_age_days": "muito"})

    assert response.status_code == 400
