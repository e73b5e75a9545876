#!/usr/bin/env python3
"""
BSP Level Generator - Command-line Entry Point

Runs the generator without installing the package:

    python main.py 100 100 --seed 12345 --format ascii
"""

import sys
from pathlib import Path

# Ensure package imports work when executed as a script
src_root = Path(__file__).resolve().parent / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from bsp_levelgen.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
