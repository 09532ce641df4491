# -*- coding: utf-8 -*-
"""
colors.py
Deterministic HCL colours:
- each phylum owns a base hue (legacy names share it)
- taxa spread +/-25 deg around it, luminance/chroma from independent hashes
- unclassified / unresolved taxa are greys
The hash constants and the hue table are part of the output contract:
changing any of them changes every colour ever produced.
"""

import math
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from .model import UNCLASSIFIED, LineageRecord
from .normalize import taxon_key

HASH_BASE = 5381
HASH_SEED_STEP = 16777259
HASH_MOD = 2147483647
HASH_NORM = 999983

HUE_SEED, LUM_SEED, CHROMA_SEED = 0, 7, 13

PHYLUM_HUES: Mapping[str, float] = MappingProxyType({
    # Bacteria
    "Bacillota": 120, "Firmicutes": 120,
    "Bacteroidota": 30, "Bacteroidetes": 30,
    "Actinomycetota": 300, "Actinobacteriota": 300, "Actinobacteria": 300,
    "Pseudomonadota": 80, "Proteobacteria": 80,
    "Verrucomicrobiota": 0, "Verrucomicrobia": 0,
    "Fusobacteriota": 210, "Fusobacteria": 210,
    "Mycoplasmatota": 160, "Tenericutes": 160,
    "Desulfobacterota": 180,
    "Spirochaetota": 240, "Spirochaetes": 240,
    "Synergistota": 270, "Synergistetes": 270,
    "Cyanobacteria": 170,
    "Campylobacterota": 50,
    # Archaea
    "Euryarchaeota": 45,
    "Thermoproteota": 200, "Crenarchaeota": 200,
    "Halobacteriota": 340,
    "Asgardarchaeota": 190,
    "Methanobacteriota": 55,
    # Fungi
    "Ascomycota": 320,
    "Basidiomycota": 350,
    "Mucoromycota": 15,
    "Chytridiomycota": 260,
})

def hash_taxon_name(taxon: str, seed: int = 0) -> float:
    """djb2-style fold over code points, mapped into [0, 1)."""
    h = HASH_BASE + seed * HASH_SEED_STEP
    for ch in taxon:
        h = (h * 33 + ord(ch)) % HASH_MOD
    return (h % HASH_NORM) / HASH_NORM

def base_hue(phylum: str) -> float:
    """Fixed hue for known phyla; unknown phyla hash onto the wheel."""
    hue = PHYLUM_HUES.get(phylum)
    if hue is None:
        hue = hash_taxon_name(phylum) * 360
    return float(hue)

# ---- polar CIE-Luv -> sRGB (D65), same model as R's grDevices::hcl ----
WHITE_Y = 100.000
WHITE_u = 0.1978398
WHITE_v = 0.4683363
GAMMA = 2.4

def _gtrans(u: float) -> float:
    if u > 0.00304:
        return 1.055 * math.pow(u, 1 / GAMMA) - 0.055
    return 12.92 * u

def _clip(x: float) -> float:
    return min(1.0, max(0.0, x))

def hcl_to_rgb(h: float, c: float, l: float):
    if l <= 0:
        return 0.0, 0.0, 0.0
    hr = math.radians(h)
    U, V = c * math.cos(hr), c * math.sin(hr)
    Y = WHITE_Y * (math.pow((l + 16) / 116, 3) if l > 7.999592 else l / 903.3)
    u = U / (13 * l) + WHITE_u
    v = V / (13 * l) + WHITE_v
    X = 9.0 * Y * u / (4 * v)
    Z = -X / 3 - 5 * Y + 3 * Y / v
    r = _gtrans((3.240479 * X - 1.537150 * Y - 0.498535 * Z) / WHITE_Y)
    g = _gtrans((-0.969256 * X + 1.875992 * Y + 0.041556 * Z) / WHITE_Y)
    b = _gtrans((0.055648 * X - 0.204043 * Y + 1.057311 * Z) / WHITE_Y)
    return _clip(r), _clip(g), _clip(b)

def hcl_to_hex(h: float, c: float, l: float) -> str:
    r, g, b = hcl_to_rgb(h, c, l)
    return "#{:02X}{:02X}{:02X}".format(*(int(255 * x + 0.5) for x in (r, g, b)))

def generate_hcl_color(taxon: str, phylum: Optional[str]) -> str:
    key = taxon_key(taxon)
    if not phylum or phylum == UNCLASSIFIED:
        lum = 45 + hash_taxon_name(key) * 35
        return hcl_to_hex(0, 0, lum)

    base = base_hue(phylum)
    h1 = hash_taxon_name(key, seed=HUE_SEED)
    h2 = hash_taxon_name(key, seed=LUM_SEED)
    h3 = hash_taxon_name(key, seed=CHROMA_SEED)

    hue = (base + (h1 - 0.5) * 50) % 360
    lum = 40 + h2 * 40
    chroma = 35 + h3 * 50
    return hcl_to_hex(hue, chroma, lum)

def generate_color_palette(taxa: Iterable[str],
                           lineages: Mapping[str, LineageRecord]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for t in taxa:
        rec = lineages.get(t)
        out[t] = generate_hcl_color(t, rec.phylum if rec is not None else None)
    return out
