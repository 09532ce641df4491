from unittest.mock import patch

import pandas as pd
import pytest

from biomehue import api
from biomehue.api import TABLE_COLUMNS, biome_hue, biome_hue_palette, clear_biome_hue_cache
from biomehue.lineage import LineageOrchestrator
from biomehue.util import silent


def test_colour_mapping(orchestrator):
    out = biome_hue(["Bacteroides", "Faecalibacterium", "Bacteroides"], use_ncbi=False,
                    orchestrator=orchestrator)
    assert list(out) == ["Bacteroides", "Faecalibacterium"]
    assert all(v.startswith("#") and len(v) == 7 for v in out.values())
    assert out["Bacteroides"] != out["Faecalibacterium"]


def test_single_string_is_accepted(orchestrator):
    assert list(biome_hue("Prevotella", use_ncbi=False, orchestrator=orchestrator)) == ["Prevotella"]


def test_lineage_table(orchestrator):
    df = biome_hue(["g__Bacteroides", "Bacteroides_fragilis", "Other", "Zzzyxia"], use_ncbi=False,
                   return_lineage=True, orchestrator=orchestrator)
    assert list(df.columns) == TABLE_COLUMNS
    rows = df.set_index("Taxon")
    assert rows.loc["g__Bacteroides", "Rank"] == "genus"
    assert rows.loc["Bacteroides_fragilis", "Rank"] == "species_inferred"
    assert rows.loc["Other", "Phylum"] == "Unclassified"
    assert rows.loc["Other", "Superkingdom"] == "Unknown"
    assert tuple(rows.loc["Zzzyxia", ["Phylum", "Rank", "Superkingdom"]]) == ("Unknown", "unknown", "Unknown")


def test_progress_bar_wraps_distinct_names(orchestrator):
    """progress=True only adds a tqdm bar; the colours are unchanged."""
    names = ["Bacteroides", "Prevotella", "Bacteroides"]
    with patch("biomehue.lineage.tqdm", side_effect=lambda it, **kw: it) as bar:
        shown = biome_hue(names, use_ncbi=False, orchestrator=orchestrator, progress=True)
    assert bar.call_count == 1
    assert list(bar.call_args[0][0]) == ["Bacteroides", "Prevotella"]
    assert shown == biome_hue(names, use_ncbi=False, orchestrator=orchestrator)


def test_formatting_variants_share_colour(orchestrator):
    out = biome_hue(["g__Bacteroides", "Bacteroides", "bacteroides", " Bacteroides "], use_ncbi=False,
                    orchestrator=orchestrator)
    assert len(set(out.values())) == 1


def test_order_independence(database, remote):
    def fresh():
        return LineageOrchestrator(database=database, remote=remote, logger=silent)

    ab = biome_hue(["Bacteroides", "Roseburia"], use_ncbi=False, orchestrator=fresh())
    ba = biome_hue(["Roseburia", "Bacteroides"], use_ncbi=False, orchestrator=fresh())
    a = biome_hue(["Bacteroides"], use_ncbi=False, orchestrator=fresh())
    assert ab == ba
    assert a["Bacteroides"] == ab["Bacteroides"]


@pytest.mark.parametrize("return_lineage", [False, True])
def test_empty_input(orchestrator, return_lineage):
    out = biome_hue([], return_lineage=return_lineage, orchestrator=orchestrator)
    if return_lineage:
        assert isinstance(out, pd.DataFrame)
        assert out.empty
        assert list(out.columns) == TABLE_COLUMNS
    else:
        assert out == {}


@pytest.mark.parametrize("bad", [None, 42, [1, 2], ["Bacteroides", None], b"Bacteroides"])
def test_non_string_input_rejected(orchestrator, bad):
    with pytest.raises(TypeError, match="taxa must be"):
        biome_hue(bad, orchestrator=orchestrator)


def test_cache_idempotence_through_entry_point(orchestrator, remote):
    with pytest.warns(UserWarning):
        biome_hue(["Zzzyxia"], orchestrator=orchestrator)
    biome_hue(["zzzyxia", "g__Zzzyxia"], orchestrator=orchestrator)
    assert remote.calls == ["Zzzyxia"]


def test_clear_cache(orchestrator):
    biome_hue(["Bacteroides", "Roseburia", "Other"], use_ncbi=False, orchestrator=orchestrator)
    assert clear_biome_hue_cache(orchestrator) == 2
    assert clear_biome_hue_cache(orchestrator) == 0


def test_palette(orchestrator):
    df = biome_hue_palette(phylum="Bacillota", n=2, orchestrator=orchestrator)
    assert list(df["Taxon"]) == ["Faecalibacterium", "Roseburia"]
    assert set(df["Phylum"]) == {"Bacillota"}
    assert set(df["Rank"]) == {"genus"}


def test_palette_multiple_phyla(orchestrator):
    df = biome_hue_palette(phylum=["Ascomycota", "Methanobacteriota"], n=5, orchestrator=orchestrator)
    assert list(df["Taxon"]) == ["Methanobrevibacter", "Candida"]


def test_palette_no_match(orchestrator):
    df = biome_hue_palette(phylum="Nonexistota", orchestrator=orchestrator)
    assert df.empty
    assert list(df.columns) == TABLE_COLUMNS


def test_palette_with_injected_database(orchestrator, database):
    df = biome_hue_palette(n=1, database=database, orchestrator=orchestrator)
    assert len(df) == 5
    assert len(orchestrator.cache) == 0


def test_default_orchestrator_is_shared(monkeypatch):
    monkeypatch.setattr(api, "_default", None)
    assert api.default_orchestrator() is api.default_orchestrator()


def test_end_to_end_with_shipped_table():
    orch = LineageOrchestrator(logger=silent)
    df = biome_hue(["Bacteroides", "Faecalibacterium"], use_ncbi=False, return_lineage=True,
                   orchestrator=orch)
    rows = df.set_index("Taxon")
    assert rows.loc["Bacteroides", "Phylum"] == "Bacteroidota"
    assert rows.loc["Bacteroides", "Rank"] == "genus"
    assert rows.loc["Faecalibacterium", "Phylum"] == "Bacillota"
    assert rows.loc["Bacteroides", "Colour"] != rows.loc["Faecalibacterium", "Colour"]

    again = biome_hue(["Bacteroides"], use_ncbi=False, orchestrator=LineageOrchestrator(logger=silent))
    assert again["Bacteroides"] == rows.loc["Bacteroides", "Colour"]
