"""Dependency classification for component sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from scripts.registry.config import RegistryConfig
from scripts.registry.patterns import find_import_sources, iter_unique

EXTERNAL = "external"
INTERNAL = "internal"
IGNORED = "ignored"


@dataclass
class ComponentDependencies:
    """Dependency information for a single component."""

    external: list[str] = field(default_factory=list)  # npm packages
    internal: list[str] = field(default_factory=list)  # other registry components


def extract_import_sources(content: str) -> list[str]:
    """Extract the module specifier of every import-like statement.

    Args:
        content: Component source text.

    Returns:
        List of module specifiers (e.g., ['react', '@/lib/utils']).
    """
    return find_import_sources(content)


def package_name(specifier: str) -> str:
    """Reduce an import specifier to its package name.

    Scoped packages keep two segments ('@radix-ui/react-dialog/dist' ->
    '@radix-ui/react-dialog'); everything else keeps the first segment
    ('lucide-react/icons' -> 'lucide-react').
    """
    parts = specifier.split("/")
    if specifier.startswith("@"):
        return "/".join(parts[:2])
    return parts[0]


def classify_import(specifier: str, config: RegistryConfig) -> tuple[str, Optional[str]]:
    """Classify a single module specifier.

    Args:
        specifier: The module string from an import statement.
        config: Registry configuration.

    Returns:
        (kind, name) where kind is 'external', 'internal' or 'ignored'. The
        name is None for ignored specifiers.
    """
    if specifier.startswith(config.internal_alias):
        # Internal alias: last path segment names the component
        component = specifier.rstrip("/").rsplit("/", 1)[-1]
        if not component or component in config.infrastructure_modules:
            return IGNORED, None
        return INTERNAL, component

    if specifier.startswith(".") or specifier.startswith("/"):
        return IGNORED, None

    name = package_name(specifier)
    if not name or name in config.peer_dependencies:
        return IGNORED, None
    return EXTERNAL, name


def classify_dependencies(content: str, config: RegistryConfig) -> ComponentDependencies:
    """Sort every referenced module into external and internal dependencies.

    Args:
        content: Component source text.
        config: Registry configuration.

    Returns:
        ComponentDependencies with ordered, deduplicated lists.
    """
    external: list[str] = []
    internal: list[str] = []

    for specifier in extract_import_sources(content):
        kind, name = classify_import(specifier, config)
        if kind == EXTERNAL:
            external.append(name)
        elif kind == INTERNAL:
            internal.append(name)

    return ComponentDependencies(
        external=iter_unique(external),
        internal=iter_unique(internal),
    )
