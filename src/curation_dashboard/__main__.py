"""Allow ``python -m curation_dashboard``."""

import sys

from curation_dashboard.app import main

if __name__ == "__main__":
    sys.exit(main())
