# Conversão de áudio via ffmpeg (webm do navegador -> PCM / MP3).
import logging
import subprocess
from pathlib import Path
from typing import List, Union

from config import settings

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class TranscodingError(RuntimeError):
    """ffmpeg ausente, com timeout ou com código de saída != 0."""


def _run_ffmpeg(cmd: List[str], output_path: Path) -> Path:
    logger.info(f"FFmpeg: {' '.join(cmd)}")
    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            timeout=settings.ffmpeg_timeout_seconds,
        )
    except FileNotFoundError as e:
        raise TranscodingError(f"ffmpeg não encontrado: {settings.ffmpeg_binary}") from e
    except subprocess.TimeoutExpired as e:
        raise TranscodingError(f"ffmpeg excedeu {settings.ffmpeg_timeout_seconds}s") from e

    if proc.returncode != 0:
        ff_err = (proc.stderr or b"").decode("utf-8", "ignore").strip()
        logger.error(f"FFmpeg falhou: code {proc.returncode}: {ff_err}")
        raise TranscodingError(f"ffmpeg falhou (code {proc.returncode}): {ff_err}")

    size = output_path.stat().st_size if output_path.exists() else 0
    logger.info(f"✅ Conversão concluída: {output_path} ({size} bytes)")
    return output_path


def transcode_to_pcm(input_path: PathLike, output_path: PathLike, sample_rate: int = None) -> Path:
    """Converte para PCM s16le mono cru (entrada do analisador de entonação)."""
    sample_rate = sample_rate or settings.intonation_sample_rate
    output_path = Path(output_path)
    cmd = [
        settings.ffmpeg_binary, "-hide_banner", "-loglevel", "error",
        "-y",
        "-i", str(input_path),
        "-vn", "-sn",
        "-ac", "1",
        "-ar", str(sample_rate),
        "-acodec", "pcm_s16le",
        "-f", "s16le", str(output_path),
    ]
    return _run_ffmpeg(cmd, output_path)


def transcode_for_transcription(input_path: PathLike, output_path: PathLike) -> Path:
    """Converte para MP3 mono 16 kHz com filtros de limpeza, otimizado para o Whisper."""
    output_path = Path(output_path)
    cmd = [
        settings.ffmpeg_binary, "-hide_banner", "-loglevel", "error",
        "-y",
        "-i", str(input_path),
        "-vn",
        "-ac", "1",
        "-ar", str(settings.transcription_sample_rate),
        "-b:a", settings.transcription_bitrate,
        "-q:a", str(settings.transcription_quality),
        "-af", ",".join(settings.transcription_filters),
        "-f", "mp3", str(output_path),
    ]
    return _run_ffmpeg(cmd, output_path)


__all__ = ["TranscodingError", "transcode_to_pcm", "transcode_for_transcription"]
