from __future__ import annotations

import json
from pathlib import Path


def load_odontogram_path(path: Path | str) -> list[dict]:
    """Load odontogram JSON from a single file or a directory of exports."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Odontogram path not found: {path}")

    if path.is_file():
        with path.open("r", encoding="utf-8") as handle:
            return [{"file_path": str(path), "payload": json.load(handle), "input_kind": "file"}]

    if not path.is_dir():
        raise FileNotFoundError(f"Odontogram directory not found: {path}")

    documents: list[dict] = []
    for file_path in sorted(path.glob("*.json")):
        with file_path.open("r", encoding="utf-8") as handle:
            documents.append(
                {"file_path": str(file_path), "payload": json.load(handle), "input_kind": "dir"}
            )
    return documents


__all__ = ["load_odontogram_path"]
