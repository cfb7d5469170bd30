# Transcrição (ASR) do áudio gravado com faster-whisper.
import logging
import threading
from pathlib import Path
from typing import Optional, Union
import torch  # type: ignore

from faster_whisper import WhisperModel  # type: ignore

from config import settings

logger = logging.getLogger(__name__)

_model_lock = threading.Lock()
_model: Optional[WhisperModel] = None


def _select_device() -> str:
    if getattr(settings, "prefer_gpu", False) and torch.cuda.is_available():
        return "cuda"
    return "cpu"


def _ensure_model() -> WhisperModel:
    """
    Carrega o modelo Whisper uma única vez (lazy, protegido por lock).
    """
    global _model

    if _model is None:
        with _model_lock:
            if _model is None:
                device = _select_device()
                compute_type = "float16" if device == "cuda" else settings.whisper_compute_type
                logger.info(
                    "Carregando Whisper: %s (%s, %s)",
                    settings.whisper_model,
                    device,
                    compute_type,
                )
                _model = WhisperModel(
                    settings.whisper_model,
                    device=device,
                    compute_type=compute_type,
                    download_root="./models",
                )
    return _model


def transcribe_file(audio_path: Union[str, Path], model: Optional[WhisperModel] = None) -> str:
    """Transcreve um arquivo (já convertido para 16 kHz mono) e devolve o texto completo."""
    model = model or _ensure_model()
    segments, info = model.transcribe(
        str(audio_path),
        language=settings.whisper_language,
        beam_size=settings.whisper_beam_size,
        temperature=settings.whisper_temperature,
        vad_filter=False,
    )
    text = "".join(seg.text for seg in segments).strip()
    logger.info(
        "Transcrição concluída: %d caracteres (%.1fs de áudio) → %s...",
        len(text),
        getattr(info, "duration", 0.0) or 0.0,
        text[:50],
    )
    return text


__all__ = ["transcribe_file"]
