# Centraliza configurações e constantes para a avaliação de entonação

from config import settings

from .types import IntonationConfig, ScoringContext


INTONATION_CONFIG = IntonationConfig(
    sample_rate=settings.intonation_sample_rate,
    window_size=settings.intonation_window_size,
)

SCORING_CONTEXT = ScoringContext()

# (limite inferior, rótulo) em ordem decrescente
CLASSIFICATION_BANDS = (
    (85, "ネイティブ級"),
    (70, "かなり関西弁"),
    (55, "関西弁っぽい"),
    (40, "まだ標準語寄り"),
    (0, "ほぼ標準語"),
)


__all__ = [
    "INTONATION_CONFIG",
    "SCORING_CONTEXT",
    "CLASSIFICATION_BANDS",
    "settings",
]
