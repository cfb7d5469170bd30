# Segmentação em frases por queda de intensidade.
import logging
from typing import List

from model.pitchsegment import PitchSegment

logger = logging.getLogger(__name__)


def split_into_phrases(segments: List[PitchSegment], break_ratio: float = 0.7) -> List[List[PitchSegment]]:
    """
    Agrupa os segmentos em frases. Uma frase fecha quando a intensidade do
    segmento cai abaixo de `break_ratio` x média global, ou no último segmento.
    Concatenar as frases devolve a sequência original; nenhuma frase é vazia.
    """
    if not segments:
        return []

    # média calculada uma única vez, não por frase
    avg_intensity = sum(s.intensity for s in segments) / len(segments)
    threshold = avg_intensity * break_ratio

    phrases: List[List[PitchSegment]] = []
    current: List[PitchSegment] = []
    last_index = len(segments) - 1
    for i, segment in enumerate(segments):
        current.append(segment)
        if segment.intensity < threshold or i == last_index:
            phrases.append(current)
            current = []

    logger.debug(f"{len(phrases)} frases a partir de {len(segments)} segmentos")
    return phrases


__all__ = ["split_into_phrases"]
