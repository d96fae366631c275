"""JSON persistence for registry units and the index."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

UNIT_SUFFIX = ".json"


def dumps(data: Any) -> str:
    """Serialize registry data the way it is written to disk."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json(file_path: Path | str, data: Any) -> None:
    """Write JSON atomically using tempfile + rename.

    Readers never see a half-written document: the data goes to a
    temporary file in the same directory, which then replaces the target.

    Args:
        file_path: Target file path (parent directories are created).
        data: JSON-serializable data.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    file_path = Path(file_path)
    parent = file_path.parent
    parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=str(parent), suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(dumps(data))
        os.replace(tmp_path, str(file_path))
    except Exception:
        # Clean up temp file on failure
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def load_json(file_path: Path | str) -> Optional[Any]:
    """Load a JSON document.

    Returns:
        Parsed data, or None if the file is missing or not valid JSON.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        return None

    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError):
        return None


def unit_path(components_dir: Path | str, name: str) -> Path:
    """Return the persisted unit path for a component name."""
    return Path(components_dir) / f"{name}{UNIT_SUFFIX}"


def list_units(components_dir: Path | str) -> list[str]:
    """List component names that have a persisted unit, sorted.

    Returns:
        Names of ``*.json`` files in the directory; empty if it is missing.
    """
    components_dir = Path(components_dir)
    if not components_dir.is_dir():
        return []

    return sorted(
        p.name[: -len(UNIT_SUFFIX)]
        for p in components_dir.iterdir()
        if p.is_file() and p.name.endswith(UNIT_SUFFIX)
    )
