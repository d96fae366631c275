"""Static metadata extraction from component source text."""

from __future__ import annotations

from dataclasses import dataclass, field

from scripts.registry.config import RegistryConfig
from scripts.registry.dependencies import ComponentDependencies, classify_dependencies
from scripts.registry.patterns import (
    CAPABILITY_RULES,
    DESCRIPTION_HEURISTICS,
    FALLBACK_DESCRIPTION,
    find_exported_symbols,
    find_style_tokens,
    first_doc_comment_line,
    match_capability,
    match_heuristic,
)


@dataclass
class ComponentMetadata:
    """Facts derived from one component's source text."""

    description: str
    exported_symbols: list[str] = field(default_factory=list)
    dependencies: ComponentDependencies = field(default_factory=ComponentDependencies)
    has_variants: bool = False
    has_sizes: bool = False
    style_tokens: list[str] = field(default_factory=list)


def capitalize(name: str) -> str:
    """Uppercase the first character only ('date-picker' -> 'Date-picker')."""
    return name[:1].upper() + name[1:]


def describe_from_content(name: str, content: str, config: RegistryConfig) -> str:
    """Synthesize a description from the lookup table or content heuristics."""
    if name in config.descriptions:
        return config.descriptions[name]

    library = config.headless_library
    for heuristic in DESCRIPTION_HEURISTICS:
        if match_heuristic(content, heuristic, library.marker):
            return heuristic.template.format(name=name, library=library.display_name)

    return FALLBACK_DESCRIPTION.format(capitalized=capitalize(name))


def extract_description(content: str, name: str, config: RegistryConfig) -> str:
    """Resolve a component description.

    A doc comment wins over the lookup table, which wins over heuristics.
    """
    documented = first_doc_comment_line(content)
    if documented:
        return documented
    return describe_from_content(name, content, config)


def detect_capabilities(content: str) -> dict[str, bool]:
    """Evaluate every capability rule against the text."""
    return {rule.flag: match_capability(content, rule) for rule in CAPABILITY_RULES}


def style_extensions(tokens: list[str], config: RegistryConfig) -> dict[str, str]:
    """Map each style token to its wrapper expression."""
    return {token: config.style_wrapper.format(token=token) for token in tokens}


def extract_metadata(content: str, name: str, config: RegistryConfig) -> ComponentMetadata:
    """Derive a ComponentMetadata record from raw source text.

    Absent signals map to empty values; this never raises for text input.

    Args:
        content: Component source text.
        name: Component name (file stem).
        config: Registry configuration.

    Returns:
        ComponentMetadata for the component.
    """
    flags = detect_capabilities(content)
    return ComponentMetadata(
        description=extract_description(content, name, config),
        exported_symbols=find_exported_symbols(content),
        dependencies=classify_dependencies(content, config),
        has_variants=flags.get("has_variants", False),
        has_sizes=flags.get("has_sizes", False),
        style_tokens=find_style_tokens(content),
    )
