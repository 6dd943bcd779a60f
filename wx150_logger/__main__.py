"""Allow ``python -m wx150_logger <serial_port> <output_dir>``."""

from __future__ import annotations

import sys

from wx150_logger.modules.WX150.main_wx150 import main

if __name__ == "__main__":
    sys.exit(main())
