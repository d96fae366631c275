"""Component registry - catalog UI component sources for distribution.

This package provides tools for:
- Discovering component source files under src/components/{ui,custom}
- Extracting descriptions, exports, dependencies and capability flags
- Writing one registry unit per component plus an index
- Removing units of components that no longer exist

Usage:
    python -m scripts.registry            # Build the registry
    python -m scripts.registry status     # Show status
    python -m scripts.registry show NAME  # Inspect one unit
"""

__version__ = "0.1.0"
