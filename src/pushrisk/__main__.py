"""Run the process harness: ``python -m pushrisk``."""

import sys

from pushrisk.harness import main

sys.exit(main())
