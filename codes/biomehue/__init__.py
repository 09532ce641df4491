# -*- coding: utf-8 -*-
"""
biomehue: stable, lineage-aware colours 4 microbiome taxa.
"""

from .api import biome_hue, biome_hue_palette, clear_biome_hue_cache, default_orchestrator
from .cache import SessionCache
from .colors import PHYLUM_HUES, generate_hcl_color, hash_taxon_name
from .lineage import LineageOrchestrator, LineageWarning
from .lineage_db import ReferenceDatabase
from .model import LineageRecord, Resolution
from .remote import RemoteLineageResolver

__version__ = "1.0.0"

__all__ = [
    "biome_hue", "biome_hue_palette", "clear_biome_hue_cache", "default_orchestrator",
    "SessionCache", "PHYLUM_HUES", "generate_hcl_color", "hash_taxon_name",
    "LineageOrchestrator", "LineageWarning", "ReferenceDatabase",
    "LineageRecord", "Resolution", "RemoteLineageResolver",
]
