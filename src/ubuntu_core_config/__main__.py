"""Allow ``python -m ubuntu_core_config get|set|info`` as an alias for the ``ubuntu-core-config`` script."""

from __future__ import annotations

import sys

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
