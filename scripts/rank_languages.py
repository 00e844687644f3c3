#!/usr/bin/env python3
"""Script to rank a GitHub owner's languages and render the SVG chart."""

import sys
import os

# Add repository root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from lang_rank.cli import main


if __name__ == "__main__":
    sys.exit(main())
