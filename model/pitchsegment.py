from dataclasses import dataclass

@dataclass(frozen=True)
class PitchSegment:
    pitch: float      # Hz, sempre > 0
    intensity: float  # RMS da janela
