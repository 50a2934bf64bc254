"""Allow running the SDK command line with ``python -m usage_reports``."""

import sys

from usage_reports.main import main

sys.exit(main())
