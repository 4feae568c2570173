#!/usr/bin/env python3
"""
HarTap - HAR to OpenAPI converter

This is a convenience wrapper that calls the modular implementation.
The actual implementation is in src/hartap/cli/hartap_main.py

Usage:
    python hartap-convert.py convert session.har --output ./docs
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))

from hartap.cli.hartap_main import main

if __name__ == '__main__':
    sys.exit(main())
