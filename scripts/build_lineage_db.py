#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
build_lineage_db.py
Maintainer-only: rebuild codes/biomehue/data/lineage_db.tsv from NCBI new_taxdump.
Downloads ~500MB; the result is a few MB.

用法示例：
    python scripts/build_lineage_db.py --workdir /tmp/taxdump
"""

import sys
from pathlib import Path

from biomehue.cli import main

DEFAULT_OUT = Path(__file__).resolve().parents[1] / "codes" / "biomehue" / "data" / "lineage_db.tsv"

if __name__ == "__main__":
    argv = sys.argv[1:]
    if "--out" not in argv:
        argv += ["--out", str(DEFAULT_OUT)]
    sys.exit(main(["build-db", *argv]))
