"""Package entry point for ``python -m opticaldup``."""

import sys
from opticaldup.cli import main

if __name__ == "__main__":
    sys.exit(main())
