"""Allow ``python -m winrestore``."""

import sys

from winrestore.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
