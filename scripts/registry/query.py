"""Query interface for a built registry."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from scripts.registry.config import RegistryConfig
from scripts.registry.store import list_units, load_json, unit_path


def load_index(index_path: Path | str) -> Optional[dict[str, Any]]:
    """Load the registry index.

    Returns:
        Index data or None if it is missing or corrupted.
    """
    data = load_json(index_path)
    return data if isinstance(data, dict) else None


def load_entry(components_dir: Path | str, name: str) -> Optional[dict[str, Any]]:
    """Load one persisted registry unit.

    Units without a ``files`` array are treated as invalid, since the
    installer rejects them.
    """
    data = load_json(unit_path(components_dir, name))
    if not isinstance(data, dict) or not isinstance(data.get("files"), list):
        return None
    return data


def query_by_type(index: dict[str, Any], category: Optional[str] = None) -> list[dict[str, Any]]:
    """List component summaries, optionally filtered by category.

    Args:
        index: Registry index data.
        category: 'ui', 'custom', or None for all.

    Returns:
        Matching component summaries in index order.
    """
    components = index.get("components", [])
    if category is None:
        return list(components)
    wanted = f"components:{category}"
    return [c for c in components if c.get("type") == wanted]


def describe_entry(entry: dict[str, Any]) -> dict[str, Any]:
    """Condense a registry unit into a printable summary (without content)."""
    meta = entry.get("meta", {})
    return {
        "name": entry.get("name"),
        "type": entry.get("type"),
        "description": entry.get("description"),
        "version": entry.get("version"),
        "dependencies": entry.get("dependencies", []),
        "registryDependencies": entry.get("registryDependencies", []),
        "targetPaths": [f.get("targetPath") for f in entry.get("files", [])],
        "exportedSymbols": meta.get("exportedSymbols", []),
        "hasVariants": meta.get("hasVariants", False),
        "hasSizes": meta.get("hasSizes", False),
        "generatedAt": meta.get("generatedAt"),
    }


def get_status(config: RegistryConfig, root: Path | str) -> dict[str, Any]:
    """Summarize the on-disk registry.

    Returns:
        Dictionary with index location, generation time, stats, persisted
        unit names and units that the index does not list.
    """
    root = Path(root)
    index_path = config.index_path(root)
    components_dir = config.components_dir(root)

    index = load_index(index_path)
    units = list_units(components_dir)
    indexed = {c.get("name") for c in index.get("components", [])} if index else set()

    return {
        "index_path": str(index_path),
        "index_found": index is not None,
        "generated": index.get("generatedAt", "unknown") if index else None,
        "stats": index.get("stats", {}) if index else {},
        "units": units,
        "unindexed_units": [name for name in units if name not in indexed] if index else [],
    }
