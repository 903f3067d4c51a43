"""Pytest configuration for all tests."""

import sys
from pathlib import Path

# Make the repository root importable without installing the package
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))
