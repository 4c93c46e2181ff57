#!/usr/bin/env python3
"""Generate the NGAP Cause -> diagnostic string module.

Thin wrapper over ``src.codegen.cli`` so the generator can be run from a
checkout without installation:

    python scripts/gen_cause_strings.py --config config/causegen.yml
"""
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.codegen.cli import main  # noqa: E402

if __name__ == '__main__':
    sys.exit(main())
