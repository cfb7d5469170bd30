# File: tests/conftest.py

import os
import sys

import numpy as np
import pytest

# 1. Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from model.pitchsegment import PitchSegment

SAMPLE_RATE = 44100
WINDOW = 2048


def _tone(freqs: np.ndarray, amplitude: float) -> np.ndarray:
    # Fase contínua: sem estalos nas trocas de frequência
    phase = 2 * np.pi * np.cumsum(freqs) / SAMPLE_RATE
    return (amplitude * np.sin(phase)).astype(np.float32)


@pytest.fixture
def windowed_tone():
    """
    Builds a tone with one frequency per analysis window.
    windowed_tone([150] * 36 + [250] * 4) -> 40 full windows, no partial window.
    """
    def _build(freqs_per_window, amplitude=0.5):
        freqs = np.repeat(np.asarray(freqs_per_window, dtype=np.float64), WINDOW)
        return _tone(freqs, amplitude)
    return _build


@pytest.fixture
def timed_tone():
    """Builds a tone from (frequency_hz, seconds) pieces."""
    def _build(pieces, amplitude=0.5):
        freqs = np.concatenate([
            np.full(int(round(seconds * SAMPLE_RATE)), float(freq)) for freq, seconds in pieces
        ])
        return _tone(freqs, amplitude)
    return _build


@pytest.fixture
def to_pcm():
    """float [-1, 1] -> s16le bytes."""
    def _encode(samples):
        clipped = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 32767 / 32768)
        return (clipped * 32768).astype("<i2").tobytes()
    return _encode


@pytest.fixture
def make_segments():
    """make_segments([100, 120], intensities=[...]) -> List[PitchSegment]."""
    def _build(pitches, intensities=None):
        if intensities is None:
            intensities = [0.3] * len(pitches)
        return [PitchSegment(pitch=float(p), intensity=float(i)) for p, i in zip(pitches, intensities)]
    return _build
