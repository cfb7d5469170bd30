# Extração de pitch (F0) e intensidade por janela fixa.
import logging
import math
import warnings
from typing import List, Optional
import numpy as np  # type: ignore
import librosa  # type: ignore

from config import settings
from model.pitchsegment import PitchSegment

logger = logging.getLogger(__name__)


def _pyin_per_window(samples: np.ndarray, sr: int, fmin: float, fmax: float, window_size: int) -> np.ndarray:
    """
    Roda librosa.pyin uma única vez com frame = hop = janela e sem padding,
    então cada quadro corresponde exatamente a uma janela do buffer.
    Retorna a F0 por janela (NaN quando não vozeada).
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        f0, voiced_flag, _ = librosa.pyin(
            np.asarray(samples, dtype=np.float32),
            fmin=fmin,
            fmax=fmax,
            sr=sr,
            frame_length=window_size,
            hop_length=window_size,
            center=False,
        )
    f0 = np.asarray(f0, dtype=np.float64)
    f0[~np.asarray(voiced_flag, dtype=bool)] = np.nan
    return f0


def _min_window_for(sr: int, fmin: float) -> int:
    # Duas voltas completas de fmin precisam caber na janela
    return int(math.ceil(2 * sr / fmin))


def _as_pitch(value: float) -> Optional[float]:
    if not np.isfinite(value) or value <= 0:
        return None
    return float(value)


def _window_intensity(window: np.ndarray, window_size: int) -> float:
    # RMS normalizado pelo tamanho nominal da janela (a última janela curta sai mais "baixa")
    acc = np.asarray(window, dtype=np.float64)
    return float(np.sqrt(np.sum(acc * acc) / window_size))


def _tail_pitch(tail: np.ndarray, sr: int, fmin: float, fmax: float) -> Optional[float]:
    if len(tail) < _min_window_for(sr, fmin) or not np.any(tail):
        return None
    try:
        f0 = _pyin_per_window(tail, sr, fmin, fmax, len(tail))
    except Exception as e:
        logger.debug(f"Falha ao detectar pitch na janela final ({len(tail)} amostras): {e}")
        return None
    return _as_pitch(f0[0]) if f0.size else None


def extract_pitch_segments(
        samples: np.ndarray,
        sr: int,
        window_size: int = 2048,
        fmin: float = None,
        fmax: float = None,
    ) -> List[PitchSegment]:
    """
    Percorre o buffer em janelas não sobrepostas e devolve um PitchSegment por
    janela com pitch detectável, na ordem temporal. Janelas totalmente em
    silêncio são descartadas; a janela final parcial só é analisada quando
    comporta dois períodos de `fmin`.
    """
    fmin = settings.pitch_fmin if fmin is None else fmin
    fmax = settings.pitch_fmax if fmax is None else fmax

    samples = np.asarray(samples, dtype=np.float32)
    full_windows = len(samples) // window_size
    body = samples[:full_windows * window_size]

    pitches: List[Optional[float]] = []
    if full_windows and np.any(body):
        f0 = _pyin_per_window(body, sr, fmin, fmax, window_size)
        for i in range(full_windows):
            window = body[i * window_size:(i + 1) * window_size]
            pitches.append(_as_pitch(f0[i]) if np.any(window) else None)
    else:
        pitches = [None] * full_windows

    tail = samples[full_windows * window_size:]
    if tail.size:
        pitches.append(_tail_pitch(tail, sr, fmin, fmax))

    segments: List[PitchSegment] = []
    for i, pitch in enumerate(pitches):
        if pitch is None:
            continue
        window = samples[i * window_size:(i + 1) * window_size]
        segments.append(PitchSegment(pitch=pitch, intensity=_window_intensity(window, window_size)))

    logger.info(
        "Detecção de pitch: %d/%d janelas vozeadas (primeiros pitches: %s)",
        len(segments),
        len(pitches),
        [round(s.pitch, 1) for s in segments[:3]],
    )
    return segments


__all__ = ["extract_pitch_segments"]
