#!/usr/bin/env python3
"""
Mouse Guard - Main entry point.

Launches the Qt application.
"""

import sys

from mouseguard.main import main


if __name__ == "__main__":
    sys.exit(main())
