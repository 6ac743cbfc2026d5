"""
Entry point for module execution (``python -m transload``).

This module delegates execution to the CLI handler in ``transload.cli.__main__``.
"""

import sys
from transload.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
