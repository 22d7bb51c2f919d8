#!/usr/bin/env python3
"""Extract inline OpenAPI body schemas into named components. See openapi_components.cli."""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
# Running from a checkout without installing the package.
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from openapi_components.cli import main  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
