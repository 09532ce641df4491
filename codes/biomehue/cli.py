#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
cli.py
Command-line entry:
  biomehue resolve Bacteroides g__Prevotella Escherichia_coli --lineage
  biomehue resolve --csv taxa.csv --name-col taxon --no-ncbi --out colours.tsv
  biomehue palette --phylum Bacillota Bacteroidota -n 3
  biomehue build-db --out codes/biomehue/data/lineage_db.tsv --workdir /tmp/taxdump
"""

import sys, pathlib, argparse
from typing import List, Optional

import pandas as pd

from .api import biome_hue, biome_hue_palette
from .util import Timer, log

def _read_names(args) -> List[str]:
    names = list(args.taxa or [])
    if args.csv:
        sep = "\t" if args.csv.endswith((".tsv", ".txt")) else ","
        df = pd.read_csv(args.csv, sep=sep, dtype=str, keep_default_na=False)
        if args.name_col not in df.columns:
            raise SystemExit(f"column '{args.name_col}' not found in {args.csv}")
        names += df[args.name_col].tolist()
    return names

def _emit(df: pd.DataFrame, out: Optional[str]):
    if out:
        df.to_csv(out, sep="\t", index=False)
        log(f"Wrote {len(df)} rows: {out}")
    else:
        df.to_csv(sys.stdout, sep="\t", index=False)

def cmd_resolve(args) -> int:
    names = _read_names(args)
    if args.lineage:
        df = biome_hue(names, use_ncbi=not args.no_ncbi, return_lineage=True, progress=args.progress)
    else:
        colours = biome_hue(names, use_ncbi=not args.no_ncbi, progress=args.progress)
        df = pd.DataFrame({"Taxon": list(colours.keys()), "Colour": list(colours.values())})
    _emit(df, args.out)
    return 0

def cmd_palette(args) -> int:
    _emit(biome_hue_palette(phylum=args.phylum, n=args.n), args.out)
    return 0

def cmd_build_db(args) -> int:
    from .taxdump import (download_taxdump, extract_member, read_ranked_lineage,
                          read_node_ranks, build_lineage_table, write_lineage_table)
    work = pathlib.Path(args.workdir).resolve()
    archive = pathlib.Path(args.dump).resolve() if args.dump else work / "new_taxdump.tar.gz"
    with Timer("build lineage table", log):
        if not archive.exists():
            log(f"Downloading NCBI new_taxdump -> {archive}")
            download_taxdump(archive)
        lineage_file = extract_member(archive, "rankedlineage.dmp", work)
        nodes_file = extract_member(archive, "nodes.dmp", work)
        log("Parsing rankedlineage.dmp (this may take a minute)...")
        raw = read_ranked_lineage(lineage_file)
        table = build_lineage_table(raw, read_node_ranks(nodes_file))
        out = write_lineage_table(table, args.out)
    log(f"Lineage database written: {out}")
    return 0

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="biomehue",
                                 description="Lineage-aware, deterministic colours 4 microbiome taxa.")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("resolve", help="colour a list of taxa")
    p.add_argument("taxa", nargs="*", help="taxon names (g__ prefixes / underscores are fine)")
    p.add_argument("--csv", default=None, help="CSV/TSV with a column of taxon names")
    p.add_argument("--name-col", default="taxon", help="column of --csv holding the names")
    p.add_argument("--no-ncbi", action="store_true", help="offline: never query NCBI taxonomy")
    p.add_argument("--lineage", action="store_true", help="output Phylum/Rank/Superkingdom too")
    p.add_argument("--progress", action="store_true", help="show a progress bar")
    p.add_argument("--out", default=None, help="write TSV here instead of stdout")
    p.set_defaults(func=cmd_resolve)

    p = sub.add_parser("palette", help="preview colours of reference genera")
    p.add_argument("--phylum", nargs="*", default=None, help="restrict to these phyla")
    p.add_argument("-n", type=int, default=5, help="genera per phylum (default 5)")
    p.add_argument("--out", default=None)
    p.set_defaults(func=cmd_palette)

    p = sub.add_parser("build-db", help="rebuild the reference table from NCBI taxdump")
    p.add_argument("--out", required=True, help="output TSV")
    p.add_argument("--dump", default=None, help="existing new_taxdump.tar.gz (skip download)")
    p.add_argument("--workdir", default="taxdump_work", help="download/extract directory")
    p.set_defaults(func=cmd_build_db)
    return ap

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)

if __name__ == "__main__":
    sys.exit(main())
