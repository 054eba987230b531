"""Entry point for running the canvas as a module: python -m taskcanvas"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
