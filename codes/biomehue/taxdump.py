#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
taxdump.py
Offline (maintainer-only) builder of data/lineage_db.tsv from NCBI new_taxdump:
  1) download new_taxdump.tar.gz
  2) extract rankedlineage.dmp (+ nodes.dmp 4 the real rank of each node)
  3) keep Bacteria / Archaea / Fungi, genus rank and above, non-empty phylum
  4) dedup by Name and write the TSV read by lineage_db.py
Not used at runtime.
"""

import csv, tarfile, pathlib
from typing import Optional

import pandas as pd
from tqdm import tqdm

from .http_client import SESSION
from .lineage_db import COLUMNS
from .util import ensure_dir, log

TAXDUMP_URL = "https://ftp.ncbi.nlm.nih.gov/pub/taxonomy/new_taxdump/new_taxdump.tar.gz"

LINEAGE_FIELDS = ["tax_id", "tax_name", "species", "genus", "family", "order",
                  "class", "phylum", "kingdom", "superkingdom"]
# node rank -> column holding that rank in the output table
KEEP_RANKS = {"genus": "genus", "family": "family", "order": "order",
              "class": "class", "phylum": "phylum"}
# most specific filled ancestor column -> rank of the node itself
_CHILD_RANK = [("species", "strain"), ("genus", "species"), ("family", "genus"),
               ("order", "family"), ("class", "order"), ("phylum", "class")]

def download_taxdump(dest: pathlib.Path, url: str = TAXDUMP_URL) -> pathlib.Path:
    ensure_dir(dest.parent)
    tmp = dest.with_name(dest.name + ".part")
    with SESSION.get(url, stream=True, timeout=600) as r:
        r.raise_for_status()
        total = int(r.headers.get("Content-Length") or 0)
        with open(tmp, "wb") as fout, tqdm(total=total or None, unit="B", unit_scale=True,
                                           desc=dest.name) as bar:
            for chunk in r.iter_content(chunk_size=1 << 20):
                if chunk:
                    fout.write(chunk)
                    bar.update(len(chunk))
    tmp.replace(dest)
    return dest

def extract_member(archive: pathlib.Path, member: str, outdir: pathlib.Path) -> pathlib.Path:
    ensure_dir(outdir)
    with tarfile.open(archive, "r:gz") as tar:
        tar.extract(member, path=outdir)
    return outdir / member

def _read_dmp(path) -> pd.DataFrame:
    """NCBI .dmp layout is 'a\\t|\\tb\\t|\\t...\\t|' : keep every other column."""
    raw = pd.read_csv(path, sep="\t", header=None, dtype=str, keep_default_na=False,
                      quoting=csv.QUOTE_NONE)
    df = raw.iloc[:, ::2].copy()
    df.columns = range(df.shape[1])
    return df.apply(lambda s: s.str.strip())

def read_ranked_lineage(path) -> pd.DataFrame:
    df = _read_dmp(path)
    if df.shape[1] < len(LINEAGE_FIELDS):
        raise ValueError(f"{path}: expected {len(LINEAGE_FIELDS)} columns, got {df.shape[1]}")
    out = df.iloc[:, :len(LINEAGE_FIELDS) - 1].copy()
    out.columns = LINEAGE_FIELDS[:-1]
    # newer dumps append realm/domain; the top rank is always last
    out["superkingdom"] = df.iloc[:, -1]
    return out.reset_index(drop=True)

def read_node_ranks(path) -> pd.Series:
    df = _read_dmp(path)
    return pd.Series(df[2].values, index=df[0].values, name="rank")

def infer_rank(row) -> str:
    for col, rank in _CHILD_RANK:
        if row[col]:
            return rank
    return "phylum" if (row["kingdom"] or row["superkingdom"]) else "other"

def build_lineage_table(raw: pd.DataFrame, node_ranks: Optional[pd.Series] = None) -> pd.DataFrame:
    keep = raw["superkingdom"].isin(["Bacteria", "Archaea"]) | (raw["kingdom"] == "Fungi")
    df = raw[keep].copy()
    log(f"  {len(df)} entries after kingdom filter")

    if node_ranks is not None:
        df["rank"] = df["tax_id"].map(node_ranks).fillna("other")
    else:
        df["rank"] = [infer_rank(r) for _, r in df.iterrows()]
    df = df[df["rank"].isin(list(KEEP_RANKS))].copy()
    log(f"  {len(df)} entries at genus rank or above")

    # rankedlineage lists ancestors only: put each node in its own column
    for rank, col in KEEP_RANKS.items():
        own = df["rank"] == rank
        df.loc[own, col] = df.loc[own, "tax_name"]

    table = pd.DataFrame({
        "Name": df["tax_name"],
        "Rank": df["rank"],
        "Genus": df["genus"],
        "Family": df["family"],
        "Order": df["order"],
        "Class": df["class"],
        "Phylum": df["phylum"],
        "Superkingdom": df["superkingdom"].where(df["kingdom"] != "Fungi", "Fungi"),
    }, columns=COLUMNS)
    table = table[table["Phylum"].str.len() > 0]
    table = table.drop_duplicates(subset="Name", keep="first").reset_index(drop=True)
    log(f"Final database: {len(table)} entries, {table['Phylum'].nunique()} phyla")
    return table

def write_lineage_table(table: pd.DataFrame, path) -> pathlib.Path:
    p = pathlib.Path(path)
    ensure_dir(p.parent)
    table.to_csv(p, sep="\t", index=False, columns=COLUMNS)
    return p
