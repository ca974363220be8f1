"""
Sequence analysis module for SEQEDIT.

Provides pure, stateless analyses that callers re-run whenever a
block's sequence changes:
- Sliding-window GC content, composition, weight and Tm
- Six-frame ORF detection
- IUPAC motif search

Example usage:
    from seqedit.analysis import find_orfs, find_motif, gc_window

    orfs = find_orfs(raw, min_amino_acids=30)
    sites = find_motif(raw, "GAATTC")
    profile = gc_window(raw)
"""

from .gc import (
    at_content,
    choose_window,
    gc_content,
    gc_window,
    melting_temperature,
    molecular_weight,
    nucleotide_composition,
    protein_molecular_weight,
)
from .motif import (
    IUPAC_CODES,
    count_motif,
    expand_pattern,
    find_motif,
    pattern_to_regex,
)
from .orf import (
    DEFAULT_MIN_AMINO_ACIDS,
    DEFAULT_START_CODONS,
    find_longest_orf,
    find_orfs,
)
from .types import GCPoint, MotifMatch, ORF

__all__ = [
    # Types
    "GCPoint",
    "ORF",
    "MotifMatch",
    # GC
    "gc_content",
    "gc_window",
    "choose_window",
    "nucleotide_composition",
    "at_content",
    "molecular_weight",
    "protein_molecular_weight",
    "melting_temperature",
    # ORFs
    "find_orfs",
    "find_longest_orf",
    "DEFAULT_MIN_AMINO_ACIDS",
    "DEFAULT_START_CODONS",
    # Motifs
    "IUPAC_CODES",
    "expand_pattern",
    "pattern_to_regex",
    "find_motif",
    "count_motif",
]
