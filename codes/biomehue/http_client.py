#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
http_client.py
Session encapsulation 4 requests:
- Connection pool + automatic retries
- Simple rate limiting (NCBI: 3 req/s, 8 with an API key)
- Unified get interface with NCBI_API_KEY
Shared transport 4 the taxonomy lookups (entrez.py) and the taxdump download (taxdump.py).
"""

import os, time, threading, requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

API_KEY = (os.getenv("NCBI_API_KEY") or "").strip()
TIMEOUT = float(os.getenv("BIOMEHUE_NCBI_TIMEOUT") or 30)

SESSION = requests.Session()
SESSION.headers.update({
    "User-Agent": "biomehue/1.0 (taxon colour lookup)",
    "Accept-Encoding": "gzip, deflate"
})

# Lookups sit on the caller's critical path, keep retries short.
_retry = Retry(
    total=2, backoff_factor=0.5,
    status_forcelist=[429, 500, 502, 503, 504],
    allowed_methods=["GET"]
)
_adapter = HTTPAdapter(max_retries=_retry, pool_connections=4, pool_maxsize=4)
SESSION.mount("https://", _adapter)
SESSION.mount("http://", _adapter)

_rate_lock = threading.Lock()
RPS = 8 if API_KEY else 3
_last_ts = 0.0
def _throttle():
    global _last_ts
    with _rate_lock:
        now = time.time()
        min_dt = 1.0 / RPS
        if now - _last_ts < min_dt:
            time.sleep(min_dt - (now - _last_ts))
        _last_ts = time.time()

def http_get(url: str, params: dict, timeout: float = TIMEOUT):
    if API_KEY: params = {**params, "api_key": API_KEY}
    _throttle()
    r = SESSION.get(url, params=params, timeout=timeout)
    r.raise_for_status()
    return r
