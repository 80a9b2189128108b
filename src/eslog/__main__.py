"""Allow ``python -m eslog``."""

import sys

from eslog.cli import main

sys.exit(main())
