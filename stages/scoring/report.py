"""Console report helper for final scoring output."""

from model.scoreresult import FinalScore, Scored


def print_score_report(final_score: FinalScore):
    # Imprime um relatório formatado do score.
    print("\n" + "=" * 80)
    print("📊 RELATÓRIO DE AVALIAÇÃO DO KANSAI-BEN")
    print("=" * 80)
    print(f"\n🗣️  Texto padrão: {final_score.standard_text}")
    print(f"🗣️  Texto Kansai: {final_score.kansai_text}")

    print(f"\n{'=' * 80}")
    print("📝 SCORE DE TEXTO (LLM)")
    print(f"{'=' * 80}")
    text = final_score.text_score
    print(f"  • Nível de Kansai:     {text.kansai_level}/100")
    print(f"  • Análise:             {text.analysis}")

    print(f"\n{'=' * 80}")
    print("🎵 SCORE DE ENTONAÇÃO")
    print(f"{'=' * 80}")
    intonation = final_score.intonation
    if isinstance(intonation, Scored):
        score = intonation.score
        print(f"  • Fim de frase:        {score.phrase_final:.1f}")
        print(f"  • Faixa de pitch:      {score.pitch_range:.1f}")
        print(f"  • Padrão de acento:    {score.accent_pattern:.1f}")
    else:
        print(f"  • Sem score ({intonation.reason})")
    print(f"  ➜ TOTAL ENTONAÇÃO:     {final_score.intonation_score}/100")

    print(f"\n{'=' * 80}")
    print("🏆 SCORE FINAL")
    print(f"{'=' * 80}")
    print(f"  Score: {final_score.final_score}/100")
    print(f"  Classificação: {final_score.classification}")

    print(f"\n{'=' * 80}")
    print("✅ PONTOS FORTES")
    print(f"{'=' * 80}")
    for i, strength in enumerate(final_score.strengths, 1):
        print(f"  {i}. {strength}")

    print(f"\n{'=' * 80}")
    print("🎯 ÁREAS DE MELHORIA")
    print(f"{'=' * 80}")
    for i, improvement in enumerate(final_score.improvements, 1):
        print(f"  {i}. {improvement}")

    print(f"\n{'=' * 80}\n")


def print_intonation_only(score: int, intonation) -> None:
    print("\n" + "=" * 80)
    print("🎵 SCORE DE ENTONAÇÃO")
    print("=" * 80)
    if isinstance(intonation, Scored):
        detail = intonation.score
        print(f"  • Fim de frase:        {detail.phrase_final:.1f}")
        print(f"  • Faixa de pitch:      {detail.pitch_range:.1f}")
        print(f"  • Padrão de acento:    {detail.accent_pattern:.1f}")
    else:
        print(f"  • Sem score ({intonation.reason})")
    print(f"  ➜ TOTAL:               {score}/100\n")


__all__ = ["print_score_report", "print_intonation_only"]
