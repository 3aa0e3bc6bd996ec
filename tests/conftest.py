"""Pytest configuration for the exile test suite."""

import sys
from pathlib import Path

# Make the exile package importable without installing it
sys.path.insert(0, str(Path(__file__).parent.parent))
