"""Entry point for the replica demo.

Usage:
    python -m lwwgraph
"""

import sys

from lwwgraph.demo import main

if __name__ == "__main__":
    sys.exit(main())
