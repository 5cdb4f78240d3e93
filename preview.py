#!/usr/bin/env python3
"""
Styled Text - preview highlight rules and image markers

Simple usage:
    python preview.py notes.md                      # Styled output in the terminal
    python preview.py notes.md --images ./assets    # Resolve image markers from a folder
    python preview.py notes.md -f html -o notes.html
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from styled_text.cli import app

if __name__ == "__main__":
    app()
