"""Allow ``python -m ex_sync``."""

import sys

from ex_sync.main import main

sys.exit(main())
