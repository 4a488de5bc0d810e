"""Allow running confd as ``python -m confd``."""

import sys

from confd.cli import main

sys.exit(main())
