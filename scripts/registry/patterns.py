"""Text pattern tables and matchers for component source extraction.

Component sources are scanned as plain text. Every rule used by the
extractor lives here as a named, compiled pattern or a table entry so the
rules can be listed and tested one at a time.
"""

from __future__ import annotations

import fnmatch
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

# /** ... */ documentation block
DOC_COMMENT_RE = re.compile(r"/\*\*(.*?)\*/", re.DOTALL)

# export const|function|class|interface|type <Identifier>
EXPORT_DECLARATION_RE = re.compile(
    r"\bexport\s+(?:const|function|class|interface|type)\s+([A-Za-z_$][\w$]*)"
)

# --custom-property references
STYLE_TOKEN_RE = re.compile(r"--[\w-]+")

# Specifier list between the keyword and `from`. It may span lines and hold
# `//` or `/* */` comments, but outside comments never crosses a quote or `;`.
_SPECIFIER_LIST = r"""(?:[^'";/]|/(?![/*])|//[^\n]*\n|/\*(?:[^*]|\*(?!/))*\*/)*?"""

# Module specifiers of import-like statements
IMPORT_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "import_from",
        re.compile(
            r"""^[ \t]*import\s+(?:type\s+)?""" + _SPECIFIER_LIST + r"""\s*from\s*['"]([^'"]+)['"]""",
            re.MULTILINE,
        ),
    ),
    (
        "side_effect_import",
        re.compile(r"""^[ \t]*import\s*['"]([^'"]+)['"]""", re.MULTILINE),
    ),
    (
        "export_from",
        re.compile(
            r"""^[ \t]*export\s+(?:type\s+)?(?:\*|\{""" + _SPECIFIER_LIST + r"""\}|\*\s+as\s+\w+)\s*from\s*['"]([^'"]+)['"]""",
            re.MULTILINE,
        ),
    ),
    (
        "require",
        re.compile(r"""\brequire\(\s*['"]([^'"]+)['"]\s*\)"""),
    ),
)


@dataclass(frozen=True)
class CapabilityRule:
    """A capability flag set only when both of its tokens appear."""

    flag: str
    declaration_token: str  # the option table declares the capability
    selection_token: str  # the component accepts a prop selecting it


CAPABILITY_RULES: tuple[CapabilityRule, ...] = (
    CapabilityRule(flag="has_variants", declaration_token="variants:", selection_token="variant:"),
    CapabilityRule(flag="has_sizes", declaration_token="sizes", selection_token="size:"),
)


@dataclass(frozen=True)
class DescriptionHeuristic:
    """A content-based fallback description.

    ``markers`` must all occur in the source text. ``template`` is formatted
    with ``name`` (the component name) and ``library`` (the headless
    library display name).
    """

    name: str
    markers: tuple[str, ...]
    template: str


# Evaluated in order; the first matching heuristic wins.
# The "{headless}" marker is replaced by the configured library marker.
DESCRIPTION_HEURISTICS: tuple[DescriptionHeuristic, ...] = (
    DescriptionHeuristic(
        name="forwarded_input",
        markers=("forwardRef", "input"),
        template="A form {name} input component with custom styling",
    ),
    DescriptionHeuristic(
        name="variants_and_sizes",
        markers=("variant", "size"),
        template="A customizable {name} component with multiple variants and sizes",
    ),
    DescriptionHeuristic(
        name="headless_primitives",
        markers=("{headless}",),
        template="A {name} component built on {library} primitives",
    ),
)

FALLBACK_DESCRIPTION = "{capitalized} component"


def iter_unique(values: Iterator[str] | list[str]) -> list[str]:
    """Deduplicate values while keeping first-seen order."""
    return list(dict.fromkeys(values))


def first_doc_comment_line(content: str) -> str | None:
    """Return the first text line of the first ``/** ... */`` block.

    Leading ``*`` gutters are stripped and JSDoc tag lines (``@param`` etc.)
    are skipped. Returns None if there is no block or it has no text.
    """
    match = DOC_COMMENT_RE.search(content)
    if not match:
        return None

    for raw_line in match.group(1).splitlines():
        line = raw_line.strip().lstrip("*").strip()
        if not line or line.startswith("@"):
            continue
        return line

    return None


def find_exported_symbols(content: str) -> list[str]:
    """Return exported declaration names in first-seen order."""
    return iter_unique(m.group(1) for m in EXPORT_DECLARATION_RE.finditer(content))


def find_style_tokens(content: str) -> list[str]:
    """Return custom-property tokens in first-seen order."""
    return iter_unique(m.group(0) for m in STYLE_TOKEN_RE.finditer(content))


def find_import_sources(content: str) -> list[str]:
    """Return module specifiers of all import-like statements, in source order.

    Duplicates are kept; callers deduplicate after classification.
    """
    found: list[tuple[int, str]] = []
    for _, pattern in IMPORT_PATTERNS:
        for match in pattern.finditer(content):
            found.append((match.start(1), match.group(1)))
    # Sort by position so results follow the source regardless of pattern order
    found.sort(key=lambda item: item[0])
    return [source for _, source in found]


def match_capability(content: str, rule: CapabilityRule) -> bool:
    """Check a capability rule. Both tokens are required."""
    return rule.declaration_token in content and rule.selection_token in content


def match_heuristic(content: str, heuristic: DescriptionHeuristic, headless_marker: str) -> bool:
    """Check whether every marker of a description heuristic occurs in the text."""
    for marker in heuristic.markers:
        if marker == "{headless}":
            marker = headless_marker
        if not marker or marker not in content:
            return False
    return True


def match_filename_pattern(file_path: str | Path, pattern: str) -> bool:
    """Match a filename against a filename pattern.

    Args:
        file_path: The file path (uses only the filename part).
        pattern: A filename pattern like "*.test.*" or "index.*".

    Returns:
        True if the filename matches the pattern.
    """
    filename = Path(file_path).name
    return fnmatch.fnmatch(filename, pattern)
