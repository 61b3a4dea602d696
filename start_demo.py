#!/usr/bin/env python3
"""Launch the storekit demonstration programs.

Usage:
    ./start_demo.py              # Run every demo with a session log
    ./start_demo.py health       # Run one demo
    ./start_demo.py --no-log     # Skip the session log
"""

import sys
from pathlib import Path

# Allow running from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent))

from storekit.cli import main


if __name__ == "__main__":
    sys.exit(main())
