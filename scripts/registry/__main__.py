"""Module entry point for running scripts.registry as a package.

Allows: python -m scripts.registry [command]
"""

import sys

from scripts.registry.cli import main

if __name__ == '__main__':
    sys.exit(main())
