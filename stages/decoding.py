# Adaptador de fronteira: bytes recebidos -> amostras PCM normalizadas.
import logging
import numpy as np  # type: ignore

from config import settings

logger = logging.getLogger(__name__)

# Magic EBML (WebM/Matroska). Indica container que não passou pelo ffmpeg.
CONTAINER_MAGIC = b"\x1a\x45\xdf\xa3"
PCM_SCALE = 32768.0


def strip_container_header(audio_bytes: bytes, skip_bytes: int = None) -> bytes:
    """
    Descarta um bloco fixo do início quando o buffer começa com o magic do WebM.

    Heurística, não é um parser de container: só faz sentido quando o restante
    do buffer já é PCM. Se o buffer for menor que o offset, sobra um buffer vazio.
    """
    if skip_bytes is None:
        skip_bytes = settings.container_skip_bytes
    if audio_bytes[:4] == CONTAINER_MAGIC:
        logger.info("Cabeçalho WebM detectado, pulando %d bytes", skip_bytes)
        return audio_bytes[skip_bytes:]
    return audio_bytes


def pcm16le_to_samples(pcm_bytes: bytes) -> np.ndarray:
    # Converte s16le em float no intervalo [-1.0, 1.0). Byte ímpar no final é ignorado.
    sample_count = len(pcm_bytes) // 2
    if sample_count == 0:
        return np.zeros(0, dtype=np.float32)
    raw = np.frombuffer(pcm_bytes[: sample_count * 2], dtype="<i2")
    return raw.astype(np.float32) / PCM_SCALE


def decode_audio_buffer(audio_bytes: bytes, skip_bytes: int = None) -> np.ndarray:
    payload = strip_container_header(bytes(audio_bytes), skip_bytes)
    samples = pcm16le_to_samples(payload)
    logger.debug(
        "Buffer decodificado: %d bytes -> %d amostras (sinal presente: %s)",
        len(audio_bytes),
        samples.size,
        bool(np.any(samples)),
    )
    return samples


__all__ = ["CONTAINER_MAGIC", "strip_container_header", "pcm16le_to_samples", "decode_audio_buffer"]
