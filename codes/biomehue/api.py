# -*- coding: utf-8 -*-
"""
api.py
Public entry points:
- biome_hue(taxa)            -> {taxon: "#RRGGBB"} or a lineage table
- biome_hue_palette(phylum)  -> preview table sampled from the reference table
- clear_biome_hue_cache()    -> number of cached lineages dropped
"""

import threading
from collections import abc
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from .colors import generate_color_palette
from .lineage import LineageOrchestrator
from .lineage_db import ReferenceDatabase
from .util import log

TABLE_COLUMNS = ["Taxon", "Colour", "Phylum", "Rank", "Superkingdom"]

_default = None
_default_lock = threading.Lock()

def default_orchestrator() -> LineageOrchestrator:
    """Process-wide orchestrator, so the session cache outlives single calls."""
    global _default
    with _default_lock:
        if _default is None:
            _default = LineageOrchestrator()
        return _default

def _empty_table() -> pd.DataFrame:
    return pd.DataFrame({c: pd.Series([], dtype=object) for c in TABLE_COLUMNS})

def _as_name_list(taxa) -> List[str]:
    if isinstance(taxa, str):
        return [taxa]
    if isinstance(taxa, bytes) or not isinstance(taxa, abc.Iterable):
        raise TypeError("taxa must be a string or a sequence of strings")
    names = list(taxa)
    if any(not isinstance(t, str) for t in names):
        raise TypeError("taxa must be a string or a sequence of strings")
    return names

def biome_hue(taxa: Union[str, Iterable[str]],
              use_ncbi: bool = True,
              return_lineage: bool = False,
              orchestrator: Optional[LineageOrchestrator] = None,
              progress: bool = False) -> Union[Dict[str, str], pd.DataFrame]:
    """
    Colour taxa by lineage.
    :params taxa: names (genus, species, family, ...); g__ prefixes and underscores are fine.
    :params use_ncbi: query NCBI taxonomy for names missing from the reference table.
    :params return_lineage: return a DataFrame (Taxon, Colour, Phylum, Rank, Superkingdom)
                            instead of a {taxon: colour} dict.
    """
    names = _as_name_list(taxa)
    if not names:
        return _empty_table() if return_lineage else {}

    orch = orchestrator or default_orchestrator()
    lineages = orch.resolve_many(names, use_ncbi=use_ncbi, progress=progress)
    colours = generate_color_palette(lineages.keys(), lineages)

    if not return_lineage:
        return colours
    rows = [{"Taxon": t, "Colour": colours[t], **rec.as_row()} for t, rec in lineages.items()]
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)

def biome_hue_palette(phylum: Union[None, str, Iterable[str]] = None,
                      n: int = 5,
                      database: Optional[ReferenceDatabase] = None,
                      orchestrator: Optional[LineageOrchestrator] = None) -> pd.DataFrame:
    """Preview up to n genera per phylum with their colours (offline)."""
    orch = orchestrator or default_orchestrator()
    if database is not None:
        # separate cache: records from another table must not leak into the session
        orch = LineageOrchestrator(database=database, remote=orch.remote, logger=orch.logger)
    phyla = [phylum] if isinstance(phylum, str) else phylum
    names = orch.database.sample_genera(phyla=phyla, n=n)
    if not names:
        return _empty_table()
    return biome_hue(names, use_ncbi=False, return_lineage=True, orchestrator=orch)

def clear_biome_hue_cache(orchestrator: Optional[LineageOrchestrator] = None) -> int:
    orch = orchestrator or default_orchestrator()
    n = orch.clear_cache()
    if n > 0:
        log(f"Cleared {n} cached entries")
    return n
