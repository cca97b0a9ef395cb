"""Allow running as python -m machineflags."""

import sys

from machineflags.cli import main

sys.exit(main())
