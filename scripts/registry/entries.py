"""Registry entry synthesis and persistence."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from scripts.registry.config import RegistryConfig
from scripts.registry.discovery import ComponentSource
from scripts.registry.metadata import ComponentMetadata, extract_metadata, style_extensions
from scripts.registry.store import unit_path, write_json

logger = logging.getLogger(__name__)


@dataclass
class RegistryFile:
    """A file materialized into the consuming project."""

    name: str
    content: str
    target_path: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "content": self.content,
            "targetPath": self.target_path,
        }


@dataclass
class RegistryEntry:
    """The persisted manifest unit for one component."""

    name: str
    type: str
    description: str
    version: str
    source_path: str
    generated_at: str
    dependencies: list[str] = field(default_factory=list)
    dev_dependencies: list[str] = field(default_factory=list)
    registry_dependencies: list[str] = field(default_factory=list)
    files: list[RegistryFile] = field(default_factory=list)
    style_extensions: dict[str, str] = field(default_factory=dict)
    exported_symbols: list[str] = field(default_factory=list)
    has_variants: bool = False
    has_sizes: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the document shape the installer fetches."""
        return {
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "version": self.version,
            "dependencies": list(self.dependencies),
            "devDependencies": list(self.dev_dependencies),
            "registryDependencies": list(self.registry_dependencies),
            "files": [f.to_dict() for f in self.files],
            "styleExtensions": {
                "config": {"theme": {"extend": dict(self.style_extensions)}},
            },
            "meta": {
                "sourcePath": self.source_path,
                "generatedAt": self.generated_at,
                "exportedSymbols": list(self.exported_symbols),
                "hasVariants": self.has_variants,
                "hasSizes": self.has_sizes,
            },
        }

    def summary(self) -> dict[str, Any]:
        """Index summary for this entry."""
        return {
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "version": self.version,
            "hasVariants": self.has_variants,
            "hasSizes": self.has_sizes,
        }


@dataclass
class EntryResult:
    """Outcome of synthesizing (and optionally writing) one component."""

    source: ComponentSource
    entry: Optional[RegistryEntry] = None
    error: Optional[str] = None

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def success(self) -> bool:
        return self.entry is not None and self.error is None


def read_source(source: ComponentSource) -> str:
    """Read a component's source text exactly as stored.

    Bytes are decoded as UTF-8 without newline translation so the embedded
    content matches the file byte for byte.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not UTF-8.
    """
    return source.path.read_bytes().decode("utf-8")


def target_path(source: ComponentSource, config: RegistryConfig) -> str:
    """Materialization path in the consuming project, e.g. 'src/components/ui/alert.tsx'."""
    return f"{config.target_dir.rstrip('/')}/{source.category}/{source.name}{source.extension}"


def synthesize_entry(
    source: ComponentSource,
    content: str,
    metadata: ComponentMetadata,
    config: RegistryConfig,
    generated_at: str,
) -> RegistryEntry:
    """Combine a source and its metadata into a registry entry.

    Args:
        source: The discovered component.
        content: Verbatim source text.
        metadata: Metadata extracted from ``content``.
        config: Registry configuration.
        generated_at: ISO timestamp shared by the whole run.

    Returns:
        RegistryEntry for the component.
    """
    return RegistryEntry(
        name=source.name,
        type=source.registry_type,
        description=metadata.description,
        version=config.version,
        source_path=source.relative_path,
        generated_at=generated_at,
        dependencies=list(metadata.dependencies.external),
        registry_dependencies=list(metadata.dependencies.internal),
        files=[
            RegistryFile(
                name=source.path.name,
                content=content,
                target_path=target_path(source, config),
            )
        ],
        style_extensions=style_extensions(metadata.style_tokens, config),
        exported_symbols=list(metadata.exported_symbols),
        has_variants=metadata.has_variants,
        has_sizes=metadata.has_sizes,
    )


def synthesize_component(
    source: ComponentSource,
    config: RegistryConfig,
    generated_at: str,
) -> EntryResult:
    """Read, analyze and synthesize a single component.

    Read failures are returned as a failed EntryResult rather than raised.
    """
    try:
        content = read_source(source)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read {source.relative_path}: {e}")
        return EntryResult(source=source, error=f"read failed: {e}")

    metadata = extract_metadata(content, source.name, config)
    entry = synthesize_entry(source, content, metadata, config, generated_at)
    return EntryResult(source=source, entry=entry)


def synthesize_all(
    sources: list[ComponentSource],
    config: RegistryConfig,
    generated_at: str,
) -> list[EntryResult]:
    """Synthesize entries for every source, isolating per-component failures.

    Returns:
        One EntryResult per source, in input order.
    """
    return [synthesize_component(source, config, generated_at) for source in sources]


def write_entry(entry: RegistryEntry, components_dir: Path | str) -> Path:
    """Persist one entry as ``<components_dir>/<name>.json``.

    Raises:
        OSError: If the unit cannot be written.
    """
    path = unit_path(components_dir, entry.name)
    write_json(path, entry.to_dict())
    return path


def write_entries(results: list[EntryResult], components_dir: Path | str) -> list[EntryResult]:
    """Write every successfully synthesized entry.

    A failed write marks that result as failed; siblings are still written.

    Returns:
        The same results, updated in place with write errors.
    """
    for result in results:
        if not result.success:
            continue
        try:
            write_entry(result.entry, components_dir)
            logger.info(f"Generated registry unit for {result.name}")
        except OSError as e:
            logger.error(f"Could not write registry unit for {result.name}: {e}")
            result.error = f"write failed: {e}"
    return results
