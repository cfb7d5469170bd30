"""Text critique of the Kansai rendition using an LLM (Gemini)."""

import logging
import re
from typing import Optional
import google.generativeai as genai  # type: ignore

from model.scoreresult import TextScore

from .config import settings

logger = logging.getLogger(__name__)

LEVEL_PATTERN = re.compile(r"関西弁レベル\s*[:：]\s*(\d+)", re.IGNORECASE)
ANALYSIS_PATTERN = re.compile(r"分析\s*[:：]\s*([\s\S]+?)(?=---|$)", re.IGNORECASE)
ANALYSIS_FALLBACK = "分析結果を取得できませんでした。"

SYSTEM_INSTRUCTION = """関西弁の分析を短く簡潔に行ってください。

回答は以下の形式で、2-3行程度でまとめてください：

関西弁レベル: [0-100の数字]
分析: [関西弁の特徴や自然さについて、2-3行で簡潔に説明]"""


class TextCritiqueError(RuntimeError):
    """LLM indisponível ou resposta vazia."""


def configure_llm():
    """
    Configura a API do Gemini.
    Retorna None (com aviso) quando a chave não está configurada.
    """
    api_key = getattr(settings, "gemini_api_key", None)
    if not api_key:
        logger.warning("⚠️ GEMINI_API_KEY não configurada. Crítica de texto desabilitada.")
        return None

    genai.configure(api_key=api_key)
    model = genai.GenerativeModel(settings.gemini_model, system_instruction=SYSTEM_INSTRUCTION)
    logger.info(f"✅ {settings.gemini_model} configurado")
    return model


def build_critique_prompt(standard_text: str, kansai_text: str) -> str:
    return f"""標準語: "{standard_text}"
関西弁: "{kansai_text}"

上記のテキストを比較して、関西弁の特徴を簡潔に分析してください。"""


def parse_critique_response(response_text: str) -> TextScore:
    # Extrai nível (0-100) e análise do texto livre devolvido pelo modelo.
    level = 0
    match = LEVEL_PATTERN.search(response_text)
    if match:
        level = max(0, min(100, int(match.group(1))))
    else:
        logger.warning("Resposta do LLM sem '関西弁レベル'; usando 0")

    analysis_match = ANALYSIS_PATTERN.search(response_text)
    analysis = analysis_match.group(1).strip() if analysis_match else ANALYSIS_FALLBACK

    return TextScore(kansai_level=level, analysis=analysis, raw_response=response_text)


def critique_kansai_text(standard_text: str, kansai_text: str, model=None) -> TextScore:
    """
    Pede ao LLM para comparar a frase padrão com a versão em Kansai.
    Levanta TextCritiqueError quando não há modelo ou a resposta vem vazia.
    """
    if model is None:
        model = configure_llm()
    if model is None:
        raise TextCritiqueError("LLM não configurado")

    response = model.generate_content(
        build_critique_prompt(standard_text, kansai_text),
        generation_config=genai.types.GenerationConfig(
            temperature=settings.llm_temperature,
            max_output_tokens=settings.llm_max_output_tokens,
        ),
    )
    result_text: Optional[str] = getattr(response, "text", None)
    if not result_text or not result_text.strip():
        raise TextCritiqueError("Resposta vazia do LLM")

    score = parse_critique_response(result_text.strip())
    logger.info(f"🤖 LLM: kansai_level={score.kansai_level}")
    return score


__all__ = [
    "TextCritiqueError",
    "configure_llm",
    "build_critique_prompt",
    "parse_critique_response",
    "critique_kansai_text",
]
