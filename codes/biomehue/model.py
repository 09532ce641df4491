# -*- coding: utf-8 -*-
"""
model.py
Lineage record shared by the resolver tiers and the colour stage.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

UNCLASSIFIED = "Unclassified"
SPECIES_INFERRED = "species_inferred"

class Resolution(str, Enum):
    EXACT = "exact"                # reference table hit
    INFERRED = "inferred"          # genus of a binomial hit the table
    REMOTE = "remote"              # NCBI taxonomy
    UNCLASSIFIED = "unclassified"  # sentinel names ("Other", "NA", ...)
    UNRESOLVED = "unresolved"      # nothing found

@dataclass(frozen=True)
class LineageRecord:
    phylum: Optional[str] = None
    rank: Optional[str] = None
    superkingdom: Optional[str] = None
    resolution: Resolution = Resolution.UNRESOLVED

    @classmethod
    def unclassified(cls) -> "LineageRecord":
        return cls(UNCLASSIFIED, "unclassified", None, Resolution.UNCLASSIFIED)

    @classmethod
    def unresolved(cls) -> "LineageRecord":
        return cls()

    @property
    def is_resolved(self) -> bool:
        return self.resolution in (Resolution.EXACT, Resolution.INFERRED, Resolution.REMOTE)

    def inferred(self) -> "LineageRecord":
        """Same phylum/superkingdom, rank downgraded to 'species_inferred'."""
        return LineageRecord(self.phylum, SPECIES_INFERRED, self.superkingdom, Resolution.INFERRED)

    def as_row(self) -> Dict[str, str]:
        return {
            "Phylum": self.phylum or "Unknown",
            "Rank": self.rank or "unknown",
            "Superkingdom": self.superkingdom or "Unknown",
        }
