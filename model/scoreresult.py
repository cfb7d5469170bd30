from dataclasses import dataclass
from typing import Dict, Optional, Union

@dataclass
class IntonationScore:
    """Pontuação acústica da entonação (0-100)"""
    # Subcritérios (podem sair de 0-100; só o total é limitado)
    phrase_final: float    # Contorno do fim da frase (subida/sustentação)
    pitch_range: float     # Amplitude total do pitch
    accent_pattern: float  # Picos no início/fim de cada frase

    # Score combinado, já limitado e arredondado
    total_score: int       # 0-100

    # Detalhes técnicos
    details: Optional[Dict] = None


@dataclass
class Scored:
    """Análise acústica concluída."""
    score: IntonationScore

    def as_score(self) -> int:
        return self.score.total_score


@dataclass
class Unscorable:
    """Análise acústica sem resultado; mapeia para 0 no contrato numérico."""
    reason: str  # 'no_pitch_detected' | 'non_finite_score' | 'analysis_failed' | 'no_audio'
    error: Optional[str] = None
    details: Optional[Dict] = None

    def as_score(self) -> int:
        return 0


IntonationOutcome = Union[Scored, Unscorable]


@dataclass
class TextScore:
    """Resultado da crítica do texto feita pelo LLM"""
    kansai_level: int   # 0-100
    analysis: str       # comentário livre
    raw_response: Optional[str] = None


@dataclass
class FinalScore:
    """Resultado final da avaliação do falante"""
    standard_text: str
    kansai_text: str

    # Scores parciais
    text_score: TextScore
    intonation: IntonationOutcome

    # Média simples entre texto e entonação
    final_score: int  # 0-100

    # Classificação categórica
    classification: str

    # Feedback estruturado
    strengths: list
    improvements: list

    @property
    def intonation_score(self) -> int:
        return self.intonation.as_score()
