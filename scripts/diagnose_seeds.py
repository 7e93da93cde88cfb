#!/usr/bin/env python3
"""Level structural diagnostics for specific seeds.

Usage:
  python scripts/diagnose_seeds.py [--strict] debug 292372 my-seed

Seeds may be 64 hex chars, integers, arbitrary text, or 'debug' for the fixed
debug seed. If no seeds are provided as CLI args, a default list is used.
Exits with non-zero status if structural issues are detected; with --strict,
floor pockets cut off by border sealing count as issues too.
"""

from __future__ import annotations

import json
import os
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from cavern.level import DEBUG_SEED, LevelConfig, coerce_seed  # noqa: E402 import after path fix
from cavern.level.checks import DEFAULT_SEEDS, diagnose_seed  # noqa: E402 import after path fix


def run_for_seed(text: str, config: LevelConfig, strict: bool = False) -> dict:
    seed = DEBUG_SEED if text == "debug" else coerce_seed(text)
    res = diagnose_seed(seed, config, strict=strict)
    res["input"] = text
    return res


def main(argv: List[str]) -> int:
    strict = "--strict" in argv
    seeds = [a for a in argv if a != "--strict"]
    config = LevelConfig.from_env()
    results = [run_for_seed(s, config, strict) for s in (seeds or DEFAULT_SEEDS)]
    print(json.dumps({"results": results}, indent=2))
    # Non-zero exit if any failure
    if not all(r["ok"] for r in results):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
