# Classification helpers and structured feedback generation.

from typing import Tuple

from model.scoreresult import IntonationOutcome, Scored, TextScore

from .config import CLASSIFICATION_BANDS


def _get_classification(score: float) -> str:
    """
    Classifica o falante baseado no score final.
    """
    for lower_bound, label in CLASSIFICATION_BANDS:
        if score >= lower_bound:
            return label
    return CLASSIFICATION_BANDS[-1][1]


def _generate_feedback(text_score: TextScore, intonation: IntonationOutcome) -> Tuple[list, list]:
    """
    Gera feedback estruturado com pontos fortes e áreas de melhoria.
    """
    strengths = []
    improvements = []

    if text_score.kansai_level >= 70:
        strengths.append("言い回しがしっかり関西弁になっています")
    elif text_score.kansai_level < 40:
        improvements.append("語尾や言い回しをもっと関西弁に寄せてみましょう")

    if isinstance(intonation, Scored):
        score = intonation.score
        if score.phrase_final >= 80:
            strengths.append("語尾の上がり・伸ばしが関西弁らしいです")
        elif score.phrase_final < 60:
            improvements.append("語尾が下がりすぎています。上げるか伸ばしてみましょう")

        if score.pitch_range >= 70:
            strengths.append("声の高低差がはっきりしています")
        elif score.pitch_range < 40:
            improvements.append("もう少し抑揚をつけて、高低差を大きくしましょう")

        if score.accent_pattern >= 75:
            strengths.append("フレーズの頭や終わりのアクセントが効いています")
        elif score.accent_pattern <= 50:
            improvements.append("フレーズの最初か最後を高く言ってみましょう")
    else:
        improvements.append("⚠️ 音声からイントネーションを読み取れませんでした。もう一度録音してください")

    if not strengths:
        strengths.append("これからが伸びしろです")
    if not improvements:
        improvements.append("この調子で続けましょう")

    return strengths, improvements


__all__ = ["_get_classification", "_generate_feedback"]
