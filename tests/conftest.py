import pytest

from biomehue.cache import SessionCache
from biomehue.lineage import LineageOrchestrator
from biomehue.lineage_db import ReferenceDatabase
from biomehue.util import silent

ROWS = [
    ("Bacteroides", "genus", "Bacteroidota", "Bacteria"),
    ("Prevotella", "genus", "Bacteroidota", "Bacteria"),
    ("Faecalibacterium", "genus", "Bacillota", "Bacteria"),
    ("Roseburia", "genus", "Bacillota", "Bacteria"),
    ("Blautia", "genus", "Bacillota", "Bacteria"),
    ("Lachnospiraceae", "family", "Bacillota", "Bacteria"),
    ("Candidatus Saccharimonas", "genus", "Candidatus Saccharibacteria", "Bacteria"),
    ("Methanobrevibacter", "genus", "Methanobacteriota", "Archaea"),
    ("Candida", "genus", "Ascomycota", "Fungi"),
]

@pytest.fixture
def database():
    """A small reference table."""
    return ReferenceDatabase.from_records(
        {"Name": n, "Rank": r, "Phylum": p, "Superkingdom": sk} for n, r, p, sk in ROWS
    )

class FakeRemote:
    """Stands in for RemoteLineageResolver, counting lookups."""

    def __init__(self, answers=None):
        self.answers = answers or {}
        self.calls = []

    def resolve(self, name):
        self.calls.append(name)
        return self.answers.get(name)

@pytest.fixture
def remote():
    return FakeRemote()

@pytest.fixture
def orchestrator(database, remote):
    return LineageOrchestrator(database=database, cache=SessionCache(), remote=remote, logger=silent)
