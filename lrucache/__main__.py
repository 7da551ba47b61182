"""
Entry point for python -m lrucache
Copyright 2025 Jurden Bruce
"""

import sys

from .interactive_cache import main

if __name__ == "__main__":
    sys.exit(main())
