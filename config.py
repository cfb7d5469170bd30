from dataclasses import dataclass, field
from typing import List
import os
import shutil
from pathlib import Path
from dotenv import load_dotenv  # type: ignore

load_dotenv()

# Diretório de arquivos temporários (webm recebido, pcm/mp3 convertidos)
TEMP_DIR = Path(os.getenv("TEMP_DIR", "/tmp/kansai_temp"))

# Criar diretório se não existir
TEMP_DIR.mkdir(parents=True, exist_ok=True)


def _split_env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:

    # Parametros de audio (caminho de entonação)
    intonation_sample_rate: int = 44100
    intonation_window_size: int = 2048
    container_skip_bytes: int = 4000  # pula o "cabeçalho" quando chega webm sem converter
    pitch_fmin: float = 65.41    # C2
    pitch_fmax: float = 2093.0   # C7

    # Parametros de audio (caminho de transcrição)
    transcription_sample_rate: int = 16000
    transcription_bitrate: str = "64k"
    transcription_quality: int = 5  # 0-9, 0 é a melhor qualidade
    transcription_filters: List[str] = field(default_factory=lambda: [
        "silenceremove=1:0:-50dB",  # remove silêncio inicial
        "volume=1.5",
        "highpass=200",             # ruído de baixa frequência
        "lowpass=3000",             # ruído de alta frequência
        "dynaudnorm",
    ])

    # FFmpeg
    ffmpeg_binary: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")
    ffmpeg_timeout_seconds: int = 60

    # ASR
    whisper_model: str = os.getenv("WHISPER_MODEL", "small")
    whisper_language: str = "ja"
    whisper_beam_size: int = 1
    whisper_temperature: float = 0.2  # mais baixo = transcrição mais literal
    whisper_compute_type: str = "int8"
    prefer_gpu: bool = False

    # LLM (Gemini) para a crítica do texto
    gemini_api_key: str = os.getenv("GEMINI_API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    llm_temperature: float = 0.7
    llm_max_output_tokens: int = 200

    # HTTP
    cors_origins: List[str] = field(default_factory=lambda: _split_env_list("CORS_ORIGINS", "http://localhost:3000"))
    port: int = int(os.getenv("PORT", "3001"))


settings = Settings()
