"""Allow running as: python -m proposal_desk"""

import sys

from proposal_desk.main import cli

if __name__ == "__main__":
    cli(sys.argv[1:])
