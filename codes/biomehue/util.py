#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
util.py
General utility function set:
- Unified log output (stderr, so stdout stays free for tables)
- Directory creation
- Simple timer 4 monitoring the offline build steps
"""

import sys, time, pathlib
from datetime import datetime
from typing import Callable, Optional

Logger = Callable[[str], None]

def now():
    """Return the current time as strings."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

def log(msg):
    """Output log."""
    print(f"[{now()}] {msg}", file=sys.stderr, flush=True)

def silent(msg):
    """Logger that drops everything."""
    return None

def ensure_dir(p: pathlib.Path):
    """Ensure path exists."""
    p.mkdir(parents=True, exist_ok=True); return p

class Timer:
    def __init__(self, name: str, logger: Optional[Logger] = None):
        self.name = name
        self.logger = logger
        self.elapsed: float = 0.0

    def __enter__(self):
        self.start = time.time()
        if self.logger:
            self.logger(f"[START] {self.name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.time() - self.start
        if self.logger:
            self.logger(f"[END] {self.name} elapsed {self.elapsed:.1f} s")
        return False
