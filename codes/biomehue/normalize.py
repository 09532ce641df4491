# -*- coding: utf-8 -*-
"""
normalize.py
Taxon name canonicalization:
- QIIME/GTDB style rank prefixes (g__Bacteroides)
- underscores vs spaces, surrounding whitespace
- sentinel spellings of "unclassified"
"""

import re
from typing import Optional

_RANK_PREFIX = re.compile(r"^[kpcofgs]__")
_WS = re.compile(r"\s+")

UNCLASSIFIED_NAMES = frozenset({"other", "unclassified", "unknown", "unassigned", "na", ""})
UNCLASSIFIED_PREFIXES = ("unclassified", "unknown", "uncultured")

def is_unclassified(taxon: Optional[str]) -> bool:
    """True for catch-all bins like 'Other', 'NA', 'uncultured_bacterium'."""
    if taxon is None:
        return True
    lc = taxon.lower()
    return lc in UNCLASSIFIED_NAMES or lc.startswith(UNCLASSIFIED_PREFIXES)

def normalize_taxon_name(taxon: str) -> str:
    name = _RANK_PREFIX.sub("", taxon, count=1)
    return name.replace("_", " ").strip()

def taxon_key(taxon: Optional[str]) -> str:
    """Identity of a taxon: normalized and lower-cased."""
    if taxon is None:
        return ""
    if is_unclassified(taxon):
        return taxon.strip().lower()
    return normalize_taxon_name(taxon).lower()

def extract_genus(taxon: str) -> str:
    """First word of a binomial; the name itself if there is none."""
    parts = _WS.split(taxon.strip())
    return parts[0] if parts and parts[0] else taxon
