# -*- coding: utf-8 -*-
"""
cache.py
Session-scoped memo of resolved lineages (normalized name -> LineageRecord).
Process lifetime only; nothing is written to disk.
"""

import threading
from typing import Dict, Optional
from .model import LineageRecord

class SessionCache:
    def __init__(self):
        self._lock = threading.Lock()
        self._data: Dict[str, LineageRecord] = {}

    def get(self, key: str) -> Optional[LineageRecord]:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, record: LineageRecord) -> LineageRecord:
        """Write-once: if the key is already cached, the cached record is kept and returned."""
        with self._lock:
            return self._data.setdefault(key, record)

    def clear(self) -> int:
        with self._lock:
            n = len(self._data)
            self._data = {}
            return n

    def __len__(self):
        with self._lock:
            return len(self._data)

    def __contains__(self, key):
        with self._lock:
            return key in self._data
