"""Allow running the CLI with ``python -m netlib``."""

import sys

from netlib.cli import main

sys.exit(main())
