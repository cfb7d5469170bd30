"""Utility helpers shared across scoring modules."""

import math
from typing import Sequence


def _average(values: Sequence[float]) -> float:
    # Soma sequencial; mantém o mesmo resultado numérico entre execuções e plataformas
    return sum(values) / len(values)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    # round() do Python arredonda para o par; aqui .5 sempre sobe
    return int(math.floor(value + 0.5))


__all__ = ["_average", "_clamp", "round_half_up"]
