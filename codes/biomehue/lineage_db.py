# -*- coding: utf-8 -*-
"""
lineage_db.py
Read-only reference table (NCBI-derived, genus rank and above):
    Name  Rank  Genus  Family  Order  Class  Phylum  Superkingdom
Loaded once per process and indexed by lower-cased Name.
"""

import os, pathlib
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from .model import LineageRecord, Resolution

COLUMNS = ["Name", "Rank", "Genus", "Family", "Order", "Class", "Phylum", "Superkingdom"]
DEFAULT_DB_PATH = pathlib.Path(__file__).resolve().parent / "data" / "lineage_db.tsv"
DB_PATH = (os.getenv("BIOMEHUE_LINEAGE_DB") or "").strip() or str(DEFAULT_DB_PATH)

class ReferenceDatabase:
    def __init__(self, table: pd.DataFrame):
        missing = [c for c in ("Name", "Rank", "Phylum", "Superkingdom") if c not in table.columns]
        if missing:
            raise ValueError(f"lineage table is missing columns: {', '.join(missing)}")
        df = table.fillna("").astype(str)
        for c in ("Name", "Rank", "Phylum", "Superkingdom"):
            df[c] = df[c].str.strip()
        df = df[(df["Name"] != "") & (df["Phylum"] != "")]
        df = df.drop_duplicates(subset="Name", keep="first").reset_index(drop=True)
        self.table = df

        index: Dict[str, LineageRecord] = {}
        for name, rank, phylum, sk in zip(df["Name"], df["Rank"], df["Phylum"], df["Superkingdom"]):
            index.setdefault(name.lower(), LineageRecord(
                phylum=phylum, rank=rank or None, superkingdom=sk or None,
                resolution=Resolution.EXACT))
        self._index = MappingProxyType(index)

    @classmethod
    def from_tsv(cls, path: Union[str, pathlib.Path]) -> "ReferenceDatabase":
        df = pd.read_csv(path, sep="\t", dtype=str, keep_default_na=False)
        return cls(df)

    @classmethod
    def from_records(cls, rows: Iterable[Dict[str, str]]) -> "ReferenceDatabase":
        return cls(pd.DataFrame(list(rows), columns=COLUMNS))

    def lookup(self, name: str) -> Optional[LineageRecord]:
        """Case-insensitive exact match on Name."""
        return self._index.get(name.lower())

    def sample_genera(self, phyla: Optional[Iterable[str]] = None, n: int = 5) -> List[str]:
        """Up to n genus-rank names per phylum, in table order."""
        df = self.table
        if phyla is not None:
            df = df[df["Phylum"].isin(list(phyla))]
        if df.empty:
            return []
        genera = df[df["Rank"] == "genus"]
        if genera.empty:
            genera = df
        names: List[str] = []
        for p in pd.unique(df["Phylum"]):
            rows = genera[genera["Phylum"] == p]
            names.extend(rows["Name"].head(max(0, int(n))).tolist())
        return names

    def __len__(self):
        return len(self._index)

    def __contains__(self, name):
        return isinstance(name, str) and name.lower() in self._index

@lru_cache(maxsize=None)
def load_database(path: str = DB_PATH) -> ReferenceDatabase:
    return ReferenceDatabase.from_tsv(path)

def default_database() -> ReferenceDatabase:
    """Process-wide table, loaded on first use."""
    return load_database(DB_PATH)
