"""Component source discovery."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from scripts.registry.config import CATEGORIES, RegistryConfig
from scripts.registry.patterns import match_filename_pattern

logger = logging.getLogger(__name__)


@dataclass
class ComponentSource:
    """A discovered component source file."""

    name: str  # file stem
    relative_path: str  # posix path under the component-source root
    category: str  # "ui" or "custom"
    path: Path  # absolute path, used for reading

    @property
    def registry_type(self) -> str:
        """Registry type tag, e.g. 'components:ui'."""
        return f"components:{self.category}"

    @property
    def extension(self) -> str:
        return self.path.suffix


@dataclass
class DiscoveryResult:
    """Result of discovery across all categories."""

    sources: list[ComponentSource] = field(default_factory=list)
    collisions: list[ComponentSource] = field(default_factory=list)
    missing_dirs: list[str] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.sources) + len(self.collisions)

    def by_category(self) -> dict[str, int]:
        counts = {category: 0 for category in CATEGORIES}
        for source in self.sources:
            counts[source.category] = counts.get(source.category, 0) + 1
        return counts


def is_component_file(file_path: Path, config: RegistryConfig) -> bool:
    """Check whether a file is an eligible component source.

    Hidden files, files with other extensions and files matching any
    exclude pattern (tests, stories, demos, index barrels) are rejected.
    """
    if file_path.name.startswith("."):
        return False
    if file_path.suffix not in config.extensions:
        return False
    return not any(match_filename_pattern(file_path, p) for p in config.exclude_patterns)


def discover_category(
    source_root: Path | str,
    category: str,
    config: RegistryConfig,
) -> list[ComponentSource]:
    """Discover component files in one category's subdirectory.

    Args:
        source_root: Component-source root (contains ui/ and custom/).
        category: Category name.
        config: Registry configuration.

    Returns:
        Sources sorted by filename. Empty if the subdirectory is missing.
    """
    source_root = Path(source_root)
    subdir = config.categories.get(category, category)
    category_dir = source_root / subdir

    if not category_dir.is_dir():
        logger.debug(f"No {category} components directory at {category_dir}")
        return []

    sources = []
    for file_path in sorted(category_dir.iterdir(), key=lambda p: p.name):
        if not file_path.is_file() or not is_component_file(file_path, config):
            continue
        sources.append(
            ComponentSource(
                name=file_path.stem,
                relative_path=file_path.relative_to(source_root).as_posix(),
                category=category,
                path=file_path,
            )
        )

    return sources


def discover_components(config: RegistryConfig, root: Path | str) -> DiscoveryResult:
    """Discover components for every configured category.

    Categories are scanned in fixed order (ui, then custom). A name already
    taken by an earlier source is recorded as a collision instead of being
    returned as a second source.

    Args:
        config: Registry configuration.
        root: Project root directory.

    Returns:
        DiscoveryResult with unique sources, collisions and missing dirs.
    """
    source_root = config.source_root(Path(root))
    result = DiscoveryResult()
    seen: dict[str, ComponentSource] = {}

    for category in CATEGORIES:
        if category not in config.categories:
            continue
        if not (source_root / config.categories[category]).is_dir():
            result.missing_dirs.append(category)

        found = discover_category(source_root, category, config)
        if found:
            logger.info(f"Discovered {len(found)} {category} components")
        for source in found:
            logger.debug(f"  {source.name} ({source.relative_path})")
            if source.name in seen:
                logger.warning(
                    f"Component name collision: {source.relative_path} "
                    f"duplicates {seen[source.name].relative_path}"
                )
                result.collisions.append(source)
                continue
            seen[source.name] = source
            result.sources.append(source)

    return result
