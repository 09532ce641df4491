# -*- coding: utf-8 -*-
"""
lineage.py
Taxon name -> LineageRecord, first hit wins:
  1) sentinel names ("Other", "unclassified", "uncultured ...") -> Unclassified
  2) session cache (normalized, case-insensitive key)
  3) reference table, exact name
  4) reference table, genus of a binomial (rank "species_inferred")
  5) NCBI taxonomy (optional)
Whatever comes out of 3-5, including "nothing", is cached for the session.
"""

import warnings
from typing import Dict, Iterable, Optional

from tqdm import tqdm

from .cache import SessionCache
from .lineage_db import ReferenceDatabase, default_database
from .model import LineageRecord
from .normalize import extract_genus, is_unclassified, normalize_taxon_name
from .remote import RemoteLineageResolver
from .util import Logger, log

class LineageWarning(UserWarning):
    """A taxon could not be resolved; it will be coloured grey."""
    pass

class LineageOrchestrator:
    def __init__(self,
                 database: Optional[ReferenceDatabase] = None,
                 cache: Optional[SessionCache] = None,
                 remote: Optional[RemoteLineageResolver] = None,
                 logger: Optional[Logger] = log):
        self._database = database
        self.cache = cache if cache is not None else SessionCache()
        self.remote = remote if remote is not None else RemoteLineageResolver(logger=logger)
        self.logger = logger

    @property
    def database(self) -> ReferenceDatabase:
        if self._database is None:
            self._database = default_database()
        return self._database

    def lookup_local(self, name: str) -> Optional[LineageRecord]:
        """Exact match, then genus of a multi-word name."""
        hit = self.database.lookup(name)
        if hit is not None:
            return hit
        genus = extract_genus(name)
        if genus != name:
            hit = self.database.lookup(genus)
            if hit is not None:
                return hit.inferred()
        return None

    def resolve(self, taxon: Optional[str], use_ncbi: bool = True) -> LineageRecord:
        if taxon is not None and not isinstance(taxon, str):
            taxon = str(taxon)
        if is_unclassified(taxon):
            return LineageRecord.unclassified()

        clean = normalize_taxon_name(taxon)
        key = clean.lower()
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        failed = False
        info = self.lookup_local(clean) if clean else None
        if info is None:
            info = LineageRecord.unresolved()
            if use_ncbi and clean:
                if self.logger:
                    self.logger(f"  Looking up '{clean}' via NCBI...")
                remote = self.remote.resolve(clean)
                if remote is not None:
                    info = remote
                else:
                    failed = True

        # cache before warning: an escalated warning must not lose the record
        info = self.cache.put(key, info)
        if failed:
            warnings.warn(f"Could not resolve lineage for '{taxon}'", LineageWarning, stacklevel=2)
        return info

    def resolve_many(self, taxa: Iterable[str], use_ncbi: bool = True,
                     progress: bool = False) -> Dict[str, LineageRecord]:
        """Distinct names in first-seen order -> record."""
        uniq = list(dict.fromkeys(taxa))
        it = tqdm(uniq, desc="Resolving taxa", unit="taxon") if progress else uniq
        return {t: self.resolve(t, use_ncbi=use_ncbi) for t in it}

    def clear_cache(self) -> int:
        return self.cache.clear()
