"""Allow `python -m envschema ...`."""

import sys

from envschema.cli import main

if __name__ == "__main__":
    sys.exit(main())
