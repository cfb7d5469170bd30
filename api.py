"""API Flask para transcrição e avaliação do Kansai-ben."""

import logging
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from flask import Flask, abort, jsonify, request    # type: ignore

from config import TEMP_DIR, settings
from maintenance import purge_temp_dir, request_file_name
from model.scoreresult import Unscorable
from stages.scoring import evaluate_intonation, graduate_text_and_intonation, intonation_details
from stages.scoring.text import TextCritiqueError, critique_kansai_text
from stages.transcoding import transcode_for_transcription, transcode_to_pcm

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

CORS_ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type, Authorization"


@app.after_request
def _apply_cors(response):
    origin = request.headers.get("Origin")
    if origin and origin in settings.cors_origins:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
        response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Max-Age"] = "86400"
        response.headers["Vary"] = "Origin"
    return response


@contextmanager
def _temp_paths(*filenames: str) -> Iterator[List[Path]]:
    # "input.webm" -> TEMP_DIR/input-<uuid>.webm; sempre removidos ao final da requisição.
    TEMP_DIR.mkdir(parents=True, exist_ok=True)
    request_id = uuid.uuid4()
    paths = [TEMP_DIR / request_file_name(name, request_id) for name in filenames]
    try:
        yield paths
    finally:
        for path in paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Falha ao remover %s: %s", path, exc)


def _transcribe(audio_path: Path) -> str:
    # Import tardio: carregar faster-whisper/torch só quando a rota é usada
    from stages.asr import transcribe_file
    return transcribe_file(audio_path)


def _score_audio_buffer(raw_audio: list):
    """webm (lista de bytes) -> PCM 44.1 kHz -> entonação. Falhas viram Unscorable."""
    try:
        with _temp_paths("input.webm", "output.raw") as (input_path, output_path):
            input_path.write_bytes(bytes(raw_audio))
            transcode_to_pcm(input_path, output_path, sample_rate=settings.intonation_sample_rate)
            pcm = output_path.read_bytes()
            logger.info("Áudio convertido: %d bytes de PCM", len(pcm))
            return evaluate_intonation(pcm)
    except Exception as exc:
        logger.error(f"Erro no processamento do áudio: {exc}")
        return Unscorable(reason="analysis_failed", error=str(exc))


@app.get("/")
def index():
    return jsonify({"message": "Kansai intonation API is running!"})


@app.get("/health")
def health_check():
    """Retorna status simples para probes."""
    return jsonify({"status": "ok"})


@app.post("/transcribe")
def transcribe():
    """Recebe o campo multipart 'audio' (webm) e devolve o texto transcrito."""
    audio_file = request.files.get("audio")
    if audio_file is None:
        logger.error("Nenhum arquivo de áudio na requisição")
        return jsonify({"error": "No audio file provided"}), 400

    logger.info(
        "Arquivo recebido: type=%s name=%s",
        audio_file.mimetype,
        audio_file.filename,
    )
    try:
        with _temp_paths("input.webm", "output.mp3") as (input_path, output_path):
            audio_file.save(str(input_path))
            transcode_for_transcription(input_path, output_path)
            text = _transcribe(output_path)
        return jsonify({"text": text})
    except Exception as exc:
        logger.exception("Erro na transcrição")
        return jsonify({"error": "Failed to transcribe audio", "details": str(exc)}), 500


@app.post("/analyze-kansai")
def analyze_kansai():
    """
    Avalia texto + entonação. Exemplo de payload:
    {
        "standardText": "今日は早く帰りたいです",
        "kansaiText": "今日ははよ帰りたいわ",
        "audioBuffer": [26, 69, 223, 163, ...]   # opcional
    }
    """
    data = request.get_json(silent=True) or {}
    standard_text = data.get("standardText")
    kansai_text = data.get("kansaiText")
    audio_buffer = data.get("audioBuffer")

    logger.info(
        "Requisição recebida: has_audio=%s, audio_len=%d",
        bool(audio_buffer),
        len(audio_buffer) if audio_buffer else 0,
    )

    if not standard_text or not kansai_text:
        return jsonify({"error": "Both standard and Kansai texts are required"}), 400

    try:
        text_score = critique_kansai_text(standard_text, kansai_text)
    except TextCritiqueError as exc:
        logger.error(f"Crítica de texto indisponível: {exc}")
        return jsonify({"error": "Failed to get analysis result"}), 500
    except Exception:
        logger.exception("Erro na análise do Kansai-ben")
        return jsonify({"error": "Failed to analyze Kansai dialect"}), 500

    if audio_buffer:
        intonation = _score_audio_buffer(audio_buffer)
    else:
        intonation = Unscorable(reason="no_audio")

    final = graduate_text_and_intonation(text_score, intonation, standard_text, kansai_text)
    return jsonify({
        "kansaiLevel": text_score.kansai_level,
        "intonationScore": final.intonation_score,
        "finalScore": final.final_score,
        "analysis": text_score.analysis,
        "standardText": standard_text,
        "kansaiText": kansai_text,
        "classification": final.classification,
        "strengths": final.strengths,
        "improvements": final.improvements,
        "intonationDetails": intonation_details(intonation),
    })


@app.post("/maintenance/flush")
def flush_temp():
    """
    Remove arquivos antigos do diretório temporário.

    Payload opcional:
    {
        "max_age_days": 1,
        "apply": false
    }
    """
    data = request.get_json(silent=True) or {}
    try:
        max_age_days = float(data.get("max_age_days", 1))
    except (TypeError, ValueError):
        abort(400, description="'max_age_days' deve ser numérico")
    apply_changes = bool(data.get("apply", False))

    summary = purge_temp_dir(max_age_days=max_age_days, dry_run=not apply_changes)
    status_code = 207 if summary.get("errors") else 200  # Multi-Status para indicar parcial
    return jsonify(summary), status_code


def create_app():
    """Factory compatível com `flask run`."""
    return app


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=settings.port, debug=False)
