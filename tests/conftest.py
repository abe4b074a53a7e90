"""Shared pytest configuration."""

import os
import sys
from pathlib import Path

# Qt widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
