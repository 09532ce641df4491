# -*- coding: utf-8 -*-
"""
remote.py
NCBI fallback 4 taxa missing from the reference table.
Two sequential requests (esearch -> efetch) with a fixed pause in between.
Never raises: every failure is reported as "no match" (None).
"""

import os, time
from typing import Callable, Optional

from .entrez import TaxonomyRecord, esearch_taxonomy, efetch_taxonomy
from .model import LineageRecord, Resolution
from .util import Logger, log

REQUEST_DELAY = float(os.getenv("BIOMEHUE_NCBI_DELAY") or 0.34)

class RemoteLineageResolver:
    def __init__(self,
                 delay: float = REQUEST_DELAY,
                 search: Callable[[str], Optional[str]] = esearch_taxonomy,
                 fetch: Callable[[str], TaxonomyRecord] = efetch_taxonomy,
                 sleep: Callable[[float], None] = time.sleep,
                 logger: Optional[Logger] = log):
        self.delay = delay
        self._search = search
        self._fetch = fetch
        self._sleep = sleep
        self.logger = logger

    def resolve(self, name: str) -> Optional[LineageRecord]:
        try:
            taxid = self._search(name)
            if not taxid:
                return None
            self._sleep(self.delay)
            return lineage_from_taxonomy(self._fetch(taxid))
        except Exception as e:
            if self.logger:
                self.logger(f"[NCBI] lookup of '{name}' failed: {e}")
            return None

def lineage_from_taxonomy(rec: TaxonomyRecord) -> Optional[LineageRecord]:
    """Phylum, own rank and superkingdom (Fungi stands in for fungal kingdoms)."""
    phylum = rec.ancestor("phylum")
    if not phylum:
        return None
    superkingdom = rec.ancestor("superkingdom")
    if not superkingdom and rec.ancestor("kingdom") == "Fungi":
        superkingdom = "Fungi"
    if not superkingdom:
        # newer NCBI dumps label the top rank "domain"
        superkingdom = rec.ancestor("domain")
    return LineageRecord(
        phylum=phylum,
        rank=rec.rank or None,
        superkingdom=superkingdom or None,
        resolution=Resolution.REMOTE,
    )
