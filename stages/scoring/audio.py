# Heurísticas acústicas da entonação Kansai (fim de frase, faixa de pitch, acento).
#
# Os scores individuais NÃO são limitados aqui; a fusão limita a soma ponderada.

import logging
import math
from typing import List

from model.pitchsegment import PitchSegment
from stages.phrases import split_into_phrases

from .config import INTONATION_CONFIG
from .types import IntonationConfig
from .utils import _average

logger = logging.getLogger(__name__)


def _pitch_movement(pitches: List[float]) -> float:
    # Variação percentual entre a primeira e a segunda metade da sequência.
    if len(pitches) < 2:
        return 0.0
    half = len(pitches) // 2
    first = _average(pitches[:half])
    last = _average(pitches[-half:])
    return (last - first) / first * 100


def score_phrase_final(segments: List[PitchSegment], cfg: IntonationConfig = INTONATION_CONFIG) -> float:
    """
    Analisa os ~20% finais do enunciado. No Kansai o fim da frase costuma subir
    ou se sustentar, então subida/sustentação pontua mais que queda.
    """
    tail_start = int(math.floor(len(segments) * cfg.tail_start_ratio))
    tail = [s.pitch for s in segments[tail_start:]]
    delta = _pitch_movement(tail)

    if delta > 0:
        return cfg.rising_base + min(cfg.rising_cap, delta * cfg.rising_gain)
    elif delta > cfg.falling_threshold:
        return cfg.flat_score
    else:
        return max(0.0, cfg.falling_base + delta)


def score_pitch_range(segments: List[PitchSegment], cfg: IntonationConfig = INTONATION_CONFIG) -> float:
    # Kansai tende a ter faixa de pitch ampla; quanto maior, melhor (teto 100).
    pitches = [s.pitch for s in segments]
    pitch_range = max(pitches) - min(pitches)
    return min(100.0, (pitch_range / cfg.pitch_range_reference_hz) * cfg.pitch_range_scale)


def has_kansai_accent(phrase: List[PitchSegment], cfg: IntonationConfig = INTONATION_CONFIG) -> bool:
    """Pico de pitch no primeiro ou no último terço da frase."""
    if len(phrase) < cfg.accent_min_length:
        return False

    pitches = [s.pitch for s in phrase]
    third = len(phrase) // 3
    overall = _average(pitches)
    first_third = _average(pitches[:third])
    last_third = _average(pitches[-third:])

    peak = overall * cfg.accent_peak_ratio
    return first_third > peak or last_third > peak


def score_accent_pattern(segments: List[PitchSegment], cfg: IntonationConfig = INTONATION_CONFIG) -> float:
    phrases = split_into_phrases(segments, cfg.phrase_break_ratio)
    if not phrases:
        raise ValueError("score_accent_pattern requer ao menos um segmento")

    total = 0.0
    for phrase in phrases:
        total += cfg.accent_match_score if has_kansai_accent(phrase, cfg) else cfg.accent_miss_score
    return total / len(phrases)


__all__ = [
    "score_phrase_final",
    "score_pitch_range",
    "score_accent_pattern",
    "has_kansai_accent",
]
