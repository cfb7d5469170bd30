"""Typed helpers used across scoring modules."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IntonationConfig:
    """Heuristic thresholds and weights of the acoustic intonation score.

    Defaults reproduce the reference scoring curve; change them only together
    with a product decision, since scores are compared across releases.
    """

    # Extração
    sample_rate: int = 44100
    window_size: int = 2048

    # Segmentação: quebra de frase quando intensidade < ratio x média global
    phrase_break_ratio: float = 0.70

    # Fim de frase: cauda começa em floor(n * tail_start_ratio), i.e. os ~20% finais
    tail_start_ratio: float = 0.80
    rising_base: float = 80.0
    rising_gain: float = 2.0
    rising_cap: float = 20.0
    flat_score: float = 70.0
    falling_threshold: float = -10.0
    falling_base: float = 60.0

    # Faixa de pitch: (range / reference_hz) * scale, teto em 100
    pitch_range_reference_hz: float = 100.0
    pitch_range_scale: float = 80.0

    # Acento: pico do primeiro/último terço acima de ratio x média da frase
    accent_peak_ratio: float = 1.10
    accent_min_length: int = 3
    accent_match_score: float = 100.0
    accent_miss_score: float = 50.0

    # Fusão
    phrase_final_weight: float = 0.4
    pitch_range_weight: float = 0.3
    accent_pattern_weight: float = 0.3


@dataclass(frozen=True)
class ScoringContext:
    """Weighting rule for the text/intonation blend shown to the user."""

    text_weight: float = 0.5
    intonation_weight: float = 0.5


__all__ = ["IntonationConfig", "ScoringContext"]
