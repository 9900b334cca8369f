"""Allow running as ``python -m nestedtags``."""

import sys

from nestedtags.cli import main

sys.exit(main())
