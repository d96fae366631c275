"""Registry index aggregation."""

from __future__ import annotations

from typing import Any

from scripts.registry.config import RegistryConfig
from scripts.registry.entries import RegistryEntry


def compute_stats(summaries: list[dict[str, Any]]) -> dict[str, int]:
    """Count components by category and capability flag."""
    return {
        "totalComponents": len(summaries),
        "uiComponents": sum(1 for s in summaries if s["type"] == "components:ui"),
        "customComponents": sum(1 for s in summaries if s["type"] == "components:custom"),
        "componentsWithVariants": sum(1 for s in summaries if s["hasVariants"]),
        "componentsWithSizes": sum(1 for s in summaries if s["hasSizes"]),
    }


def build_index(
    entries: list[RegistryEntry],
    config: RegistryConfig,
    generated_at: str,
) -> dict[str, Any]:
    """Fold registry entries into the index document.

    Entries are summarized in the given order. An entry whose name was
    already seen replaces the earlier summary.

    Args:
        entries: Successfully synthesized entries.
        config: Registry configuration.
        generated_at: ISO timestamp shared by the whole run.

    Returns:
        The index document.
    """
    by_name: dict[str, dict[str, Any]] = {}
    for entry in entries:
        by_name[entry.name] = entry.summary()

    summaries = list(by_name.values())

    return {
        "name": config.registry_name,
        "version": config.version,
        "description": config.registry_description,
        "components": summaries,
        "stats": compute_stats(summaries),
        "generatedAt": generated_at,
        "distributionEndpoint": config.distribution_endpoint,
    }
