#!/usr/bin/env python3
"""
Run kcentroids from a source checkout.

Usage:
    python scripts/kcentroids.py -p 1000 -c 3
    python scripts/kcentroids.py -p 1000 -c 3 -t 8 --seed 7
"""

import sys
from pathlib import Path

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kcentroids.cli import main


if __name__ == "__main__":
    sys.exit(main())
