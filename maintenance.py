"""Limpeza dos arquivos temporários que cada requisição de áudio deixa em TEMP_DIR."""

from __future__ import annotations

import argparse
import json
import logging
import re
import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

# input-<uuid>.webm / output-<uuid>.raw / output-<uuid>.mp3
REQUEST_FILE_PATTERN = re.compile(
    r"^(?P<role>input|output)-(?P<request_id>[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})\.\w+$"
)


def request_file_name(filename: str, request_id: uuid.UUID) -> str:
    """'input.webm' + id -> 'input-<id>.webm'."""
    name = Path(filename)
    return f"{name.stem}-{request_id}{name.suffix}"


def _group_request_files(root: Path) -> Dict[str, List[Path]]:
    groups: Dict[str, List[Path]] = defaultdict(list)
    for item in sorted(root.iterdir()):
        match = REQUEST_FILE_PATTERN.match(item.name)
        if match and item.is_file():
            groups[match.group("request_id")].append(item)
    return groups


def purge_temp_dir(
    *,
    temp_root: Optional[Path | str] = None,
    max_age_days: float = 1,
    dry_run: bool = True,
) -> Dict[str, object]:
    """
    Remove os arquivos de requisições abandonadas (input-*/output-* com o id da
    requisição) cujo arquivo mais recente é anterior a `max_age_days`.
    Outros arquivos em TEMP_DIR não são tocados.

    O resumo agrupa por id de requisição e é serializável em JSON:
    {"removed": {id: [arquivos]}, "kept": [ids], "errors": [...]}.
    """
    from config import TEMP_DIR
    root = Path(TEMP_DIR if temp_root is None else temp_root)
    threshold = datetime.now(timezone.utc) - timedelta(days=max(0, max_age_days))

    removed: Dict[str, List[str]] = {}
    kept: List[str] = []
    errors: List[Dict[str, str]] = []
    summary: Dict[str, object] = {
        "dry_run": dry_run,
        "temp_root": str(root),
        "max_age_days": max_age_days,
        "threshold_utc": threshold.isoformat(),
        "removed": removed,
        "kept": kept,
        "errors": errors,
    }

    if not root.exists():
        summary["message"] = "temp_root não encontrado"
        return summary

    for request_id, files in _group_request_files(root).items():
        try:
            newest = max(f.stat().st_mtime for f in files)
        except OSError as exc:
            errors.append({"request_id": request_id, "error": str(exc)})
            continue

        if datetime.fromtimestamp(newest, tz=timezone.utc) >= threshold:
            kept.append(request_id)
            continue

        names = [f.name for f in files]
        if not dry_run:
            for f in files:
                try:
                    f.unlink(missing_ok=True)
                except OSError as exc:
                    errors.append({"request_id": request_id, "path": f.name, "error": str(exc)})
                    names.remove(f.name)
        if names:
            removed[request_id] = names

    logger.info(
        "🧹 Limpeza de %s (%s): %d requisições removidas, %d mantidas, %d erros",
        root,
        "dry-run" if dry_run else "aplicada",
        len(removed),
        len(kept),
        len(errors),
    )
    return summary


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Remove arquivos de requisições antigas em TEMP_DIR")
    parser.add_argument(
        "--temp-root",
        default=None,
        help="Diretório temporário (default: TEMP_DIR do config).",
    )
    parser.add_argument(
        "--max-age-days",
        type=float,
        default=1,
        help="Idade mínima, em dias, de uma requisição para ser removida (default: 1).",
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Remove de fato. Sem essa flag, apenas lista (dry-run).",
    )
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    summary = purge_temp_dir(
        temp_root=args.temp_root,
        max_age_days=args.max_age_days,
        dry_run=not args.apply,
    )
    print(json.dumps(summary, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
