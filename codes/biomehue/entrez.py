#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
entrez.py
Thin packaging 4 the two taxonomy E-utilities we need:
- esearch: scientific name -> first TaxID
- efetch:  TaxID -> XML record with the LineageEx ancestor chain
All assumptions about the XML layout live in parse_taxonomy_xml().
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .http_client import http_get

EUTILS = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"

class EntrezPayloadError(RuntimeError):
    """E-utilities returned something that is not the expected XML."""
    pass

@dataclass(frozen=True)
class TaxonomyRecord:
    taxid: str
    scientific_name: str
    rank: str
    lineage: Tuple[Tuple[str, str], ...] = ()   # (name, rank), root first

    def ancestor(self, rank: str) -> Optional[str]:
        """Name of the ancestor at `rank`, or the entry itself if it has that rank."""
        for name, r in self.lineage:
            if r == rank:
                return name
        if self.rank == rank:
            return self.scientific_name
        return None

def _parse_xml(payload: Union[str, bytes], what: str) -> ET.Element:
    try:
        return ET.fromstring(payload)
    except ET.ParseError as e:
        raise EntrezPayloadError(f"{what} returned broken XML: {e}")

def parse_esearch_xml(payload: Union[str, bytes]) -> Optional[str]:
    """First <Id> of an esearch result, None when the search found nothing."""
    root = _parse_xml(payload, "esearch")
    if root.tag == "ERROR":
        raise EntrezPayloadError(f"esearch error: {(root.text or '').strip()}")
    if root.find("IdList") is None and root.find("ERROR") is not None:
        raise EntrezPayloadError(f"esearch error: {root.findtext('ERROR')}")
    tid = (root.findtext("IdList/Id") or "").strip()
    return tid or None

def parse_taxonomy_xml(payload: Union[str, bytes]) -> TaxonomyRecord:
    root = _parse_xml(payload, "efetch")
    taxon = root if root.tag == "Taxon" else root.find("Taxon")
    if taxon is None:
        raise EntrezPayloadError("efetch returned no <Taxon> element")
    lineage = tuple(
        ((t.findtext("ScientificName") or "").strip(), (t.findtext("Rank") or "").strip())
        for t in taxon.findall("LineageEx/Taxon")
    )
    return TaxonomyRecord(
        taxid=(taxon.findtext("TaxId") or "").strip(),
        scientific_name=(taxon.findtext("ScientificName") or "").strip(),
        rank=(taxon.findtext("Rank") or "").strip(),
        lineage=lineage,
    )

def esearch_taxonomy(name: str, timeout: Optional[float] = None) -> Optional[str]:
    params = {"db": "taxonomy", "term": name, "retmode": "xml"}
    kw = {"timeout": timeout} if timeout else {}
    r = http_get(f"{EUTILS}/esearch.fcgi", params, **kw)
    return parse_esearch_xml(r.content)

def efetch_taxonomy(taxid: str, timeout: Optional[float] = None) -> TaxonomyRecord:
    params = {"db": "taxonomy", "id": taxid, "retmode": "xml"}
    kw = {"timeout": timeout} if timeout else {}
    r = http_get(f"{EUTILS}/efetch.fcgi", params, **kw)
    return parse_taxonomy_xml(r.content)
