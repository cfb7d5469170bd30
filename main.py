"""CLI para pontuar a entonação Kansai de um arquivo de áudio."""

import os

# Reduz contendas em bibliotecas nativas (numba/BLAS usados pelo librosa)
os.environ.setdefault("OMP_NUM_THREADS", "1")
os.environ.setdefault("MKL_NUM_THREADS", "1")

import argparse
import logging
import tempfile
from pathlib import Path

from config import TEMP_DIR, settings
from stages.scoring import (
    evaluate_intonation,
    graduate_text_and_intonation,
    print_intonation_only,
    print_score_report,
)
from stages.transcoding import transcode_to_pcm

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _parse_args():
    parser = argparse.ArgumentParser(description="Avaliação da entonação Kansai")
    parser.add_argument("audio", type=str, help="Arquivo de áudio (qualquer formato que o ffmpeg leia)")
    parser.add_argument(
        "--pcm",
        action="store_true",
        help="Trata o arquivo como PCM s16le mono cru a 44.1 kHz (sem passar pelo ffmpeg)",
    )
    parser.add_argument(
        "--standard-text",
        type=str,
        default=None,
        help="Frase em japonês padrão (ativa a crítica de texto via LLM)",
    )
    parser.add_argument(
        "--kansai-text",
        type=str,
        default=None,
        help="A mesma frase em Kansai-ben (necessário com --standard-text)",
    )
    return parser.parse_args()


def _load_pcm(audio_path: Path, raw_pcm: bool) -> bytes:
    if raw_pcm:
        return audio_path.read_bytes()
    TEMP_DIR.mkdir(parents=True, exist_ok=True)
    with tempfile.TemporaryDirectory(dir=TEMP_DIR) as tmp:
        output_path = Path(tmp) / f"{audio_path.stem}.raw"
        transcode_to_pcm(audio_path, output_path, sample_rate=settings.intonation_sample_rate)
        return output_path.read_bytes()


def main() -> None:
    args = _parse_args()
    audio_path = Path(args.audio)
    if not audio_path.exists():
        raise SystemExit(f"Arquivo não encontrado: {audio_path}")
    if bool(args.standard_text) != bool(args.kansai_text):
        raise SystemExit("--standard-text e --kansai-text devem ser usados juntos")

    intonation = evaluate_intonation(_load_pcm(audio_path, args.pcm))

    if not args.standard_text:
        print_intonation_only(intonation.as_score(), intonation)
        return

    from stages.scoring.text import critique_kansai_text

    text_score = critique_kansai_text(args.standard_text, args.kansai_text)
    final = graduate_text_and_intonation(text_score, intonation, args.standard_text, args.kansai_text)
    print_score_report(final)


if __name__ == "__main__":
    main()
