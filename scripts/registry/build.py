"""Registry build pipeline.

Runs discovery, extraction and synthesis per component, persists units,
removes units of deleted components and finally writes the index:

    discover -> synthesize -> write units -> reconcile -> write index

Every step is a function of the current disk state, so re-running after an
interrupted build converges to the same registry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from scripts.registry.config import (
    CATEGORIES,
    DEFAULT_CONFIG_PATH,
    ConfigError,
    RegistryConfig,
    load_config,
    validate_config,
)
from scripts.registry.discovery import ComponentSource, DiscoveryResult, discover_components
from scripts.registry.entries import EntryResult, synthesize_all, write_entries
from scripts.registry.index import build_index
from scripts.registry.reconcile import CleanupResult, reconcile
from scripts.registry.store import write_json

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Outcome of one registry build."""

    attempted: int = 0
    succeeded: int = 0
    by_category: dict[str, int] = field(default_factory=dict)
    failures: list[tuple[str, str]] = field(default_factory=list)  # (name, reason)
    cleanup: list[CleanupResult] = field(default_factory=list)
    index_path: Optional[str] = None
    index: Optional[dict] = None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when nothing failed (an empty run is not a failure)."""
        cleanup_failed = any(not c.removed for c in self.cleanup)
        return not self.failures and not self.errors and not cleanup_failed

    @property
    def removed(self) -> list[str]:
        return [c.name for c in self.cleanup if c.removed]

    def summary_lines(self) -> list[str]:
        """Human-readable run summary."""
        lines = []
        if self.errors:
            for error in self.errors:
                lines.append(f"Error: {error}")
        for warning in self.warnings:
            lines.append(f"Warning: {warning}")

        if self.attempted:
            lines.append(f"Generated {self.succeeded}/{self.attempted} components")
            breakdown = ", ".join(f"{self.by_category.get(c, 0)} {c}" for c in CATEGORIES)
            lines.append(f"  By category: {breakdown}")
            if self.index is not None:
                stats = self.index["stats"]
                lines.append(
                    f"  With variants: {stats['componentsWithVariants']}, "
                    f"with sizes: {stats['componentsWithSizes']}"
                )
            for name, reason in self.failures:
                lines.append(f"  Failed: {name} ({reason})")
            if self.removed:
                lines.append(f"  Removed obsolete: {', '.join(self.removed)}")
            for c in self.cleanup:
                if not c.removed:
                    lines.append(f"  Could not remove: {c.name} ({c.error})")
        if self.index_path:
            lines.append(f"Output: {self.index_path}")
        return lines


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _resolve_config(root: Path, config_path: Optional[Path | str]) -> RegistryConfig:
    if config_path:
        return load_config(config_path)
    return load_config(root / DEFAULT_CONFIG_PATH)


def _discovery_from_sources(sources: list[ComponentSource]) -> DiscoveryResult:
    """Wrap a caller-supplied source list, keeping the first of any duplicate name."""
    result = DiscoveryResult()
    seen: set[str] = set()
    for source in sources:
        if source.name in seen:
            result.collisions.append(source)
        else:
            seen.add(source.name)
            result.sources.append(source)
    return result


def _record_results(report: BuildReport, results: list[EntryResult]) -> None:
    for result in results:
        if result.success:
            report.succeeded += 1
        else:
            report.failures.append((result.name, result.error or "unknown error"))


def _build(
    report: BuildReport,
    root: Path,
    config: RegistryConfig,
    sources: Optional[list[ComponentSource]],
) -> None:
    generated_at = _now()

    if sources is None:
        logger.info("Discovering components...")
        discovery = discover_components(config, root)
    else:
        discovery = _discovery_from_sources(sources)

    report.attempted = discovery.attempted
    report.by_category = discovery.by_category()
    for duplicate in discovery.collisions:
        report.failures.append((duplicate.name, f"name collision ({duplicate.relative_path})"))

    if report.attempted == 0:
        # Leave any previous index in place rather than overwrite it with an empty one
        message = "No components found to generate registry for"
        logger.warning(message)
        report.warnings.append(message)
        return

    logger.info(f"Generating registry for {len(discovery.sources)} components...")
    components_dir = config.components_dir(root)
    results = synthesize_all(discovery.sources, config, generated_at)
    write_entries(results, components_dir)
    _record_results(report, results)

    current_names = [s.name for s in discovery.sources]
    report.cleanup = reconcile(components_dir, current_names)

    entries = [r.entry for r in results if r.success]
    index = build_index(entries, config, generated_at)
    index_path = config.index_path(root)
    try:
        write_json(index_path, index)
    except OSError as e:
        logger.error(f"Could not write registry index {index_path}: {e}")
        report.errors.append(f"index write failed: {e}")
        return

    report.index = index
    report.index_path = str(index_path)
    logger.info(f"Generated registry index with {index['stats']['totalComponents']} components")


def run_build(
    config: Optional[RegistryConfig] = None,
    root: Optional[Path | str] = None,
    sources: Optional[list[ComponentSource]] = None,
    config_path: Optional[Path | str] = None,
) -> BuildReport:
    """Build the registry. Never raises.

    Args:
        config: Configuration to use. Loaded from ``config_path`` or
            ``<root>/registry.yaml`` when omitted.
        root: Project root directory. Defaults to the current directory.
        sources: Pre-discovered sources. Discovery runs when omitted.
        config_path: Explicit configuration file.

    Returns:
        BuildReport describing successes, failures and cleanup.
    """
    report = BuildReport()
    root = Path(root) if root is not None else Path.cwd()

    try:
        if config is None:
            config = _resolve_config(root, config_path)
        else:
            validate_config(config)
        _build(report, root, config, sources)
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        report.errors.append(str(e))
    except Exception as e:
        logger.exception("Registry build failed")
        report.errors.append(f"unexpected error: {e}")

    return report
