"""Allow running as `python -m nutrition_scanner`."""

import sys

from .interfaces.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
