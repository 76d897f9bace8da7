"""
Entry point for the HelpJuice to HelpScout migration tool.
"""

import sys

from juicescout.cli import main

if __name__ == "__main__":
    sys.exit(main())
