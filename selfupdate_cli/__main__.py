"""
Module execution entry point.

Allows running with: python -m selfupdate_cli
"""

import sys
from selfupdate_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
