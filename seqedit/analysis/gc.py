"""
GC content and nucleotide composition.

The sliding-window profile is computed from numpy prefix sums so each
window costs O(1) regardless of window size.
"""

from typing import Dict, List, Optional, Tuple

import numpy as np

from ..core.models import SequenceType
from .types import GCPoint


def nucleotide_composition(seq: str) -> Dict[str, int]:
    """
    Count bases in a DNA/RNA sequence.

    U is counted as T. Returns counts for A, T, G, C, N and 'other'.
    """
    comp = {'A': 0, 'T': 0, 'G': 0, 'C': 0, 'N': 0, 'other': 0}
    for base in seq.upper():
        if base == 'U':
            base = 'T'
        if base in comp:
            comp[base] += 1
        else:
            comp['other'] += 1
    return comp


def gc_content(seq: str) -> float:
    """Calculate GC content of a sequence (0.0 to 1.0).

    Only unambiguous bases (A, C, G, T/U) count towards the total.
    """
    comp = nucleotide_composition(seq)
    total = comp['A'] + comp['T'] + comp['G'] + comp['C']
    return (comp['G'] + comp['C']) / total if total > 0 else 0.0


def at_content(seq: str) -> float:
    """Calculate AT (or AU) content of a sequence (0.0 to 1.0)."""
    comp = nucleotide_composition(seq)
    total = comp['A'] + comp['T'] + comp['G'] + comp['C']
    return (comp['A'] + comp['T']) / total if total > 0 else 0.0


# Average monophosphate residue masses (Da)
DNA_MW = {'A': 313.21, 'T': 304.19, 'G': 329.21, 'C': 289.18, 'N': 308.95}

# Amino acid residue masses (Da)
AA_MW = {
    'G': 57.02, 'A': 71.04, 'V': 99.07, 'L': 113.08, 'I': 113.08,
    'P': 97.05, 'F': 147.07, 'W': 186.08, 'M': 131.04, 'S': 87.03,
    'T': 101.05, 'C': 103.01, 'Y': 163.06, 'H': 137.06, 'D': 115.03,
    'E': 129.04, 'N': 114.04, 'Q': 128.06, 'K': 128.09, 'R': 156.10,
}
AVG_AA_MW = 111.1

WATER_MW = 18.02


def molecular_weight(seq: str) -> float:
    """
    Approximate molecular weight of a single-stranded nucleotide sequence.

    U is weighed as T and any other non-ACGT code as N. One water is
    removed per phosphodiester bond and a 5' phosphate is added.

    Returns:
        Weight in Daltons, rounded to 2 decimals (0.0 for an empty sequence)
    """
    seq = seq.upper().replace('U', 'T')
    if not seq:
        return 0.0
    mw = sum(DNA_MW.get(base, DNA_MW['N']) for base in seq)
    mw -= (len(seq) - 1) * WATER_MW
    mw += 17.01 + 79.0
    return round(mw, 2)


def protein_molecular_weight(seq: str) -> float:
    """Approximate molecular weight of a protein sequence, ignoring stops."""
    seq = seq.upper().replace('*', '')
    if not seq:
        return 0.0
    mw = WATER_MW + sum(AA_MW.get(aa, AVG_AA_MW) for aa in seq)
    return round(mw, 2)


def melting_temperature(seq: str) -> Optional[float]:
    """
    Estimate the melting temperature (Celsius) of a nucleotide sequence.

    Uses the Wallace rule (2 x AT + 4 x GC) up to 13 unambiguous bases
    and the GC-based formula 64.9 + 41 x (GC - 16.4) / N above that.

    Returns:
        Tm, or None when the sequence has no unambiguous bases
    """
    comp = nucleotide_composition(seq)
    at = comp['A'] + comp['T']
    gc = comp['G'] + comp['C']
    total = at + gc
    if total == 0:
        return None
    if total <= 13:
        return float(2 * at + 4 * gc)
    return 64.9 + 41 * (gc - 16.4) / total


def choose_window(length: int) -> Tuple[int, int]:
    """
    Pick (window_size, step) for a sequence length.

    Short sequences get fine windows, long ones coarse windows, which
    keeps the number of plotted points bounded.
    """
    if length <= 500:
        return 20, 5
    if length <= 5000:
        return 50, 10
    return 100, 20


def gc_window(
    seq: str,
    window_size: Optional[int] = None,
    step: Optional[int] = None,
    sequence_type: SequenceType = SequenceType.DNA,
    max_length: Optional[int] = None,
) -> List[GCPoint]:
    """
    Sliding-window GC profile.

    Args:
        seq: DNA or RNA sequence
        window_size: Residues per window (chosen from the length if None)
        step: Advance between windows (chosen from the length if None)
        sequence_type: Protein sequences yield no profile
        max_length: Sequences longer than this yield no profile

    Returns:
        One GCPoint per window. A sequence shorter than the window gives a
        single point covering the whole sequence.

    Raises:
        ValueError: If window_size or step is < 1
    """
    if not SequenceType(sequence_type).is_nucleotide or not seq:
        return []
    if max_length is not None and len(seq) > max_length:
        return []

    auto_window, auto_step = choose_window(len(seq))
    window_size = auto_window if window_size is None else window_size
    step = auto_step if step is None else step
    if window_size < 1 or step < 1:
        raise ValueError(f"window_size and step must be >= 1, got {window_size}, {step}")

    if len(seq) < window_size:
        return [GCPoint(position=0, gc=gc_content(seq))]

    codes = np.frombuffer(seq.upper().encode('ascii', 'replace'), dtype=np.uint8)
    is_gc = (codes == ord('G')) | (codes == ord('C'))
    is_acgt = is_gc | (codes == ord('A')) | (codes == ord('T')) | (codes == ord('U'))

    gc_cum = np.concatenate(([0], np.cumsum(is_gc, dtype=np.int64)))
    total_cum = np.concatenate(([0], np.cumsum(is_acgt, dtype=np.int64)))

    starts = np.arange(0, len(seq) - window_size + 1, step)
    gc_counts = gc_cum[starts + window_size] - gc_cum[starts]
    totals = total_cum[starts + window_size] - total_cum[starts]
    fractions = np.divide(
        gc_counts, totals,
        out=np.zeros(len(starts), dtype=float),
        where=totals > 0,
    )

    return [GCPoint(position=int(p), gc=float(f)) for p, f in zip(starts, fractions)]
