"""Removal of registry units whose components no longer exist."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from scripts.registry.store import list_units, unit_path

logger = logging.getLogger(__name__)


@dataclass
class CleanupResult:
    """Outcome of removing one stale unit."""

    name: str
    path: str
    removed: bool
    error: Optional[str] = None


def find_stale_units(components_dir: Path | str, current_names: Iterable[str]) -> list[str]:
    """Return persisted unit names that are not in ``current_names``, sorted."""
    current = set(current_names)
    return [name for name in list_units(components_dir) if name not in current]


def remove_unit(components_dir: Path | str, name: str) -> CleanupResult:
    """Delete one persisted unit, reporting failure instead of raising."""
    path = unit_path(components_dir, name)
    try:
        path.unlink()
    except FileNotFoundError:
        # Already gone; the goal state is reached
        return CleanupResult(name=name, path=str(path), removed=True)
    except OSError as e:
        logger.warning(f"Could not remove obsolete unit {path}: {e}")
        return CleanupResult(name=name, path=str(path), removed=False, error=str(e))

    logger.info(f"Removed obsolete component: {name}")
    return CleanupResult(name=name, path=str(path), removed=True)


def reconcile(components_dir: Path | str, current_names: Iterable[str]) -> list[CleanupResult]:
    """Remove units for components that were not discovered this run.

    Every stale unit is attempted; one failure does not stop the others.

    Args:
        components_dir: Directory holding ``<name>.json`` units.
        current_names: Names of the components discovered this run.

    Returns:
        One CleanupResult per stale unit.
    """
    results = [remove_unit(components_dir, name) for name in find_stale_units(components_dir, current_names)]

    removed = sum(1 for r in results if r.removed)
    if removed:
        logger.info(f"Cleaned up {removed} obsolete components")
    return results
