"""Console-script entrypoints.

The tool script remains runnable as `python tools/cas_lookup.py`; the installed `casprop-lookup` console script
calls the same `main()`.
"""

from __future__ import annotations

import sys


def lookup() -> None:
    from tools.cas_lookup import main

    sys.exit(main())
