"""Configuration loading and validation for the component registry."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from fnmatch import translate as glob_translate
from pathlib import Path
from typing import Any, Optional

import yaml


class ConfigError(Exception):
    """Error in registry configuration."""

    def __init__(
        self,
        message: str,
        file: Optional[str] = None,
        line: Optional[int] = None,
        error_type: str = "config_invalid",
    ):
        super().__init__(message)
        self.message = message
        self.file = file
        self.line = line
        self.error_type = error_type

    def to_json(self) -> dict[str, Any]:
        """Serialize error to JSON format for machine parsing."""
        result: dict[str, Any] = {
            "error": self.error_type,
            "message": self.message,
        }
        if self.file:
            result["file"] = self.file
        if self.line:
            result["line"] = self.line
        return result

    def __str__(self) -> str:
        parts = [self.message]
        if self.file:
            parts.append(f"file: {self.file}")
        if self.line:
            parts.append(f"line: {self.line}")
        return " | ".join(parts)


# Component categories, in discovery order
CATEGORIES = ("ui", "custom")

DEFAULT_CONFIG_PATH = "registry.yaml"
DEFAULT_SOURCE_DIR = "src/components"
DEFAULT_REGISTRY_DIR = "registry"
DEFAULT_TARGET_DIR = "src/components"
COMPONENTS_SUBDIR = "components"
INDEX_FILENAME = "index.json"

# Seed descriptions for well-known component names
DEFAULT_DESCRIPTIONS: dict[str, str] = {
    "button": "A customizable button component with multiple variants and sizes",
    "input": "A form input component with validation states and custom styling",
    "card": "A flexible card component for content organization and layout",
    "dialog": "A modal dialog component built on Radix UI primitives",
    "select": "A select dropdown component with search and multi-select capabilities",
    "textarea": "A multi-line text input component with auto-resize functionality",
    "checkbox": "A checkbox input component with indeterminate state support",
    "radio": "A radio button input component for single-selection forms",
    "switch": "A toggle switch component for boolean settings",
    "slider": "A range slider component for numeric value selection",
    "progress": "A progress bar component for showing completion status",
    "avatar": "An avatar component for displaying user profile images",
    "badge": "A small badge component for labels and status indicators",
    "alert": "An alert component for displaying important messages",
    "tooltip": "A tooltip component for providing contextual information",
}


@dataclass
class HeadlessLibrary:
    """Headless primitives library recognized by the description heuristics."""

    marker: str = "Radix"
    display_name: str = "Radix UI"


@dataclass
class RegistryConfig:
    """Complete registry configuration."""

    version: str = "0.1.0"
    source_dir: str = DEFAULT_SOURCE_DIR
    registry_dir: str = DEFAULT_REGISTRY_DIR
    target_dir: str = DEFAULT_TARGET_DIR
    categories: dict[str, str] = field(
        default_factory=lambda: {"ui": "ui", "custom": "custom"}
    )
    extensions: list[str] = field(default_factory=lambda: [".tsx", ".ts"])
    exclude_patterns: list[str] = field(
        default_factory=lambda: [
            "*.test.*",
            "*.spec.*",
            "*.stories.*",
            "*.demo.*",
            "index.*",
        ]
    )
    internal_alias: str = "@/"
    infrastructure_modules: list[str] = field(default_factory=lambda: ["utils", "types"])
    peer_dependencies: list[str] = field(default_factory=lambda: ["react", "react-dom"])
    registry_name: str = "@effectual/ui"
    registry_description: str = "Effectual component library registry"
    distribution_endpoint: str = "https://jack-effectual.github.io/effectual-ui"
    style_wrapper: str = "hsl(var({token}))"
    descriptions: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_DESCRIPTIONS))
    headless_library: HeadlessLibrary = field(default_factory=HeadlessLibrary)

    def source_root(self, root: Path) -> Path:
        """Return the absolute component-source root for a project root."""
        return Path(root) / self.source_dir

    def components_dir(self, root: Path) -> Path:
        """Return the directory holding per-component registry units."""
        return Path(root) / self.registry_dir / COMPONENTS_SUBDIR

    def index_path(self, root: Path) -> Path:
        """Return the path of the registry index document."""
        return Path(root) / self.registry_dir / INDEX_FILENAME


def get_default_config() -> RegistryConfig:
    """Return the default registry configuration."""
    return RegistryConfig()


def _parse_headless_library(data: Any, config_file: Optional[str] = None) -> HeadlessLibrary:
    """Parse the headless_library section."""
    defaults = HeadlessLibrary()
    if data is None:
        return defaults
    if not isinstance(data, dict):
        raise ConfigError(
            "headless_library must be a mapping with 'marker' and 'display_name'",
            file=config_file,
            error_type="config_invalid",
        )
    return HeadlessLibrary(
        marker=data.get("marker", defaults.marker),
        display_name=data.get("display_name", defaults.display_name),
    )


def _parse_descriptions(data: Any, config_file: Optional[str] = None) -> dict[str, str]:
    """Parse the descriptions lookup table, merged over the seed table."""
    descriptions = dict(DEFAULT_DESCRIPTIONS)
    if data is None:
        return descriptions
    if not isinstance(data, dict):
        raise ConfigError(
            "descriptions must be a mapping of component name to description",
            file=config_file,
            error_type="config_invalid",
        )
    for name, text in data.items():
        descriptions[str(name)] = str(text)
    return descriptions


def _require_str_list(value: Any, key: str, config_file: Optional[str] = None) -> None:
    """Reject values that are not a list of strings."""
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(
            f"'{key}' must be a list of strings",
            file=config_file,
            error_type="config_invalid",
        )


def _validate_glob(pattern: str, config_file: Optional[str] = None) -> None:
    """Validate a glob pattern."""
    try:
        glob_translate(pattern)
    except Exception as e:
        raise ConfigError(
            f"Invalid glob pattern '{pattern}': {e}",
            file=config_file,
            error_type="config_invalid",
        )
    if pattern.count("[") != pattern.count("]"):
        raise ConfigError(
            f"Invalid glob pattern '{pattern}': unclosed bracket",
            file=config_file,
            error_type="config_invalid",
        )


def validate_config(config: RegistryConfig, config_file: Optional[str] = None) -> None:
    """Validate configuration values.

    Raises:
        ConfigError: If configuration is invalid.
    """
    if not isinstance(config.categories, dict) or not config.categories:
        raise ConfigError(
            "'categories' must map category names to subdirectories",
            file=config_file,
            error_type="config_invalid",
        )
    for category, subdir in config.categories.items():
        if category not in CATEGORIES:
            raise ConfigError(
                f"Unknown category '{category}'. Must be one of: {', '.join(CATEGORIES)}",
                file=config_file,
                error_type="config_invalid",
            )
        if not isinstance(subdir, str) or not subdir:
            raise ConfigError(
                f"Category '{category}' needs a subdirectory name",
                file=config_file,
                error_type="config_invalid",
            )

    _require_str_list(config.extensions, "extensions", config_file)
    for ext in config.extensions:
        if not ext.startswith("."):
            raise ConfigError(
                f"Invalid extension '{ext}': must start with '.'",
                file=config_file,
                error_type="config_invalid",
            )

    _require_str_list(config.exclude_patterns, "exclude_patterns", config_file)
    for pattern in config.exclude_patterns:
        _validate_glob(pattern, config_file)

    _require_str_list(config.infrastructure_modules, "infrastructure_modules", config_file)
    _require_str_list(config.peer_dependencies, "peer_dependencies", config_file)

    if not config.internal_alias:
        raise ConfigError(
            "'internal_alias' must not be empty",
            file=config_file,
            error_type="config_invalid",
        )
    if not config.version:
        raise ConfigError(
            "'version' must not be empty",
            file=config_file,
            error_type="config_invalid",
        )
    _validate_style_wrapper(config.style_wrapper, config_file)


def _validate_style_wrapper(wrapper: Any, config_file: Optional[str]) -> None:
    """Check that a style wrapper formats with a single ``{token}`` field."""
    if not isinstance(wrapper, str):
        raise ConfigError(
            "'style_wrapper' must be a string",
            file=config_file,
            error_type="config_invalid",
        )
    try:
        fields = [name for _, name, _, _ in string.Formatter().parse(wrapper) if name is not None]
    except ValueError as e:
        raise ConfigError(
            f"Invalid style_wrapper '{wrapper}': {e}",
            file=config_file,
            error_type="config_invalid",
        ) from e

    if "token" not in fields:
        raise ConfigError(
            f"Invalid style_wrapper '{wrapper}': must contain '{{token}}'",
            file=config_file,
            error_type="config_invalid",
        )
    unknown = sorted({name for name in fields if name != "token"})
    if unknown:
        raise ConfigError(
            f"Invalid style_wrapper '{wrapper}': unknown field(s) "
            f"{', '.join(repr(name) for name in unknown)}; only '{{token}}' is allowed",
            file=config_file,
            error_type="config_invalid",
        )

    # Format specs may still reference other fields or be invalid for a string
    try:
        wrapper.format(token="--token")
    except (KeyError, IndexError, ValueError) as e:
        raise ConfigError(
            f"Invalid style_wrapper '{wrapper}': {e!r}",
            file=config_file,
            error_type="config_invalid",
        ) from e


def load_config(config_path: Path | str) -> RegistryConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the registry.yaml file.

    Returns:
        RegistryConfig with loaded values merged with defaults.

    Raises:
        ConfigError: If the file exists but contains invalid configuration.
    """
    config_path = Path(config_path)
    config_file = str(config_path)

    defaults = get_default_config()

    if not config_path.exists():
        return defaults

    try:
        content = config_path.read_text(encoding="utf-8")
        if not content.strip():
            return defaults

        data = yaml.safe_load(content)
        if not data:
            return defaults
        if not isinstance(data, dict):
            raise ConfigError(
                "Top-level registry config must be a mapping",
                file=config_file,
                error_type="config_invalid",
            )

    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1
        raise ConfigError(
            f"Invalid YAML: {e}",
            file=config_file,
            line=line,
            error_type="config_invalid",
        )

    config = RegistryConfig(
        version=str(data.get("version", defaults.version)),
        source_dir=data.get("source_dir", defaults.source_dir),
        registry_dir=data.get("registry_dir", defaults.registry_dir),
        target_dir=data.get("target_dir", defaults.target_dir),
        categories=data.get("categories", defaults.categories),
        extensions=data.get("extensions", defaults.extensions),
        exclude_patterns=data.get("exclude_patterns", defaults.exclude_patterns),
        internal_alias=data.get("internal_alias", defaults.internal_alias),
        infrastructure_modules=data.get("infrastructure_modules", defaults.infrastructure_modules),
        peer_dependencies=data.get("peer_dependencies", defaults.peer_dependencies),
        registry_name=data.get("registry_name", defaults.registry_name),
        registry_description=data.get("registry_description", defaults.registry_description),
        distribution_endpoint=data.get("distribution_endpoint", defaults.distribution_endpoint),
        style_wrapper=data.get("style_wrapper", defaults.style_wrapper),
        descriptions=_parse_descriptions(data.get("descriptions"), config_file),
        headless_library=_parse_headless_library(data.get("headless_library"), config_file),
    )

    validate_config(config, config_file)

    return config


def config_to_dict(config: RegistryConfig) -> dict[str, Any]:
    """Render a configuration as a plain mapping suitable for YAML output."""
    return {
        "version": config.version,
        "source_dir": config.source_dir,
        "registry_dir": config.registry_dir,
        "target_dir": config.target_dir,
        "categories": dict(config.categories),
        "extensions": list(config.extensions),
        "exclude_patterns": list(config.exclude_patterns),
        "internal_alias": config.internal_alias,
        "infrastructure_modules": list(config.infrastructure_modules),
        "peer_dependencies": list(config.peer_dependencies),
        "registry_name": config.registry_name,
        "registry_description": config.registry_description,
        "distribution_endpoint": config.distribution_endpoint,
        "style_wrapper": config.style_wrapper,
        "headless_library": {
            "marker": config.headless_library.marker,
            "display_name": config.headless_library.display_name,
        },
    }
