# Entrypoint orchestrating the intonation scoring and the final text/audio blend.

import logging
import math
from typing import Optional
import numpy as np  # type: ignore

from model.scoreresult import (
    FinalScore,
    IntonationOutcome,
    IntonationScore,
    Scored,
    TextScore,
    Unscorable,
)
from stages.decoding import decode_audio_buffer
from stages.phrases import split_into_phrases
from stages.pitch import extract_pitch_segments

from .audio import score_accent_pattern, score_phrase_final, score_pitch_range
from .config import INTONATION_CONFIG, SCORING_CONTEXT, settings
from .feedback import _generate_feedback, _get_classification
from .types import IntonationConfig
from .utils import _clamp, round_half_up

logger = logging.getLogger(__name__)


def evaluate_samples(samples: np.ndarray, cfg: IntonationConfig = INTONATION_CONFIG) -> IntonationOutcome:
    # Executa extração -> segmentação -> heurísticas -> fusão sobre amostras já decodificadas.
    try:
        segments = extract_pitch_segments(
            samples,
            cfg.sample_rate,
            window_size=cfg.window_size,
            fmin=settings.pitch_fmin,
            fmax=settings.pitch_fmax,
        )
        if not segments:
            logger.info("Nenhum segmento com pitch válido encontrado")
            return Unscorable(reason="no_pitch_detected", details={"sample_count": int(len(samples))})

        phrase_final = score_phrase_final(segments, cfg)
        pitch_range = score_pitch_range(segments, cfg)
        accent_pattern = score_accent_pattern(segments, cfg)

        logger.info(
            "Componentes do score → phrase_final=%.2f | pitch_range=%.2f | accent_pattern=%.2f",
            phrase_final,
            pitch_range,
            accent_pattern,
        )

        total = (
            phrase_final * cfg.phrase_final_weight +    # fim de frase é o traço mais marcante
            pitch_range * cfg.pitch_range_weight +
            accent_pattern * cfg.accent_pattern_weight
        )

        details = {
            "sample_count": int(len(samples)),
            "segment_count": len(segments),
            "phrase_count": len(split_into_phrases(segments, cfg.phrase_break_ratio)),
            "weighted_total": total,
            "min_pitch": min(s.pitch for s in segments),
            "max_pitch": max(s.pitch for s in segments),
        }

        if not math.isfinite(total):
            logger.warning(f"Score de entonação não finito: {total}")
            return Unscorable(reason="non_finite_score", details=details)

        final = round_half_up(_clamp(total, 0.0, 100.0))
        logger.info(f"Score final de entonação: {final}")
        return Scored(
            IntonationScore(
                phrase_final=phrase_final,
                pitch_range=pitch_range,
                accent_pattern=accent_pattern,
                total_score=final,
                details=details,
            )
        )
    except Exception as e:
        logger.exception("Erro na análise de entonação")
        return Unscorable(reason="analysis_failed", error=str(e))


def evaluate_intonation(audio_bytes: bytes, cfg: IntonationConfig = INTONATION_CONFIG) -> IntonationOutcome:
    """
    Avalia o quanto a entonação de um buffer PCM s16le mono se aproxima do Kansai.

    Nunca levanta exceção: falhas viram Unscorable com o motivo.
    """
    try:
        logger.info("Início da análise de entonação: %d bytes", len(audio_bytes or b""))
        samples = decode_audio_buffer(audio_bytes or b"")
    except Exception as e:
        logger.exception("Falha ao decodificar o buffer de áudio")
        return Unscorable(reason="analysis_failed", error=str(e))
    return evaluate_samples(samples, cfg)


def measure_kansai_intonation(audio_bytes: bytes, cfg: IntonationConfig = INTONATION_CONFIG) -> int:
    # Contrato numérico: inteiro em [0, 100]; 0 quando não há sinal ou a análise falha.
    return evaluate_intonation(audio_bytes, cfg).as_score()


def fuse_final_score(text_level: float, intonation_score: float) -> int:
    total = (
        text_level * SCORING_CONTEXT.text_weight +
        intonation_score * SCORING_CONTEXT.intonation_weight
    )
    return round_half_up(total)


def graduate_text_and_intonation(
    text_score: TextScore,
    intonation: IntonationOutcome,
    standard_text: str,
    kansai_text: str,
) -> FinalScore:
    # Junta a crítica do texto e a entonação em um resultado apresentável.
    intonation_value = intonation.as_score()
    final = fuse_final_score(text_score.kansai_level, intonation_value)

    logger.info(
        "=== Cálculo do nível de Kansai === texto=%s | entonação=%s | final=%s",
        text_score.kansai_level,
        intonation_value,
        final,
    )
    if isinstance(intonation, Unscorable):
        logger.info(f"Entonação sem score ({intonation.reason}); usando 0 na média")

    strengths, improvements = _generate_feedback(text_score, intonation)
    return FinalScore(
        standard_text=standard_text,
        kansai_text=kansai_text,
        text_score=text_score,
        intonation=intonation,
        final_score=final,
        classification=_get_classification(final),
        strengths=strengths,
        improvements=improvements,
    )


def intonation_details(intonation: IntonationOutcome) -> Optional[dict]:
    # Serialização dos sub-scores para o cliente / logs de depuração.
    if isinstance(intonation, Scored):
        score = intonation.score
        return {
            "status": "scored",
            "phraseFinal": score.phrase_final,
            "pitchRange": score.pitch_range,
            "accentPattern": score.accent_pattern,
            "total": score.total_score,
            "details": score.details or {},
        }
    return {
        "status": "unscorable",
        "reason": intonation.reason,
        "error": intonation.error,
    }


__all__ = [
    "evaluate_samples",
    "evaluate_intonation",
    "measure_kansai_intonation",
    "fuse_final_score",
    "graduate_text_and_intonation",
    "intonation_details",
]
