"""
Six-frame open reading frame detection.

Both the forward sequence and its reverse complement are scanned in all
three frame offsets. Every in-frame start codon opens an ORF that runs to
the next in-frame stop codon, or to the end of the sequence when no stop
follows (a truncated ORF).
"""

from typing import Iterable, List, Optional

from ..utils.sequence import STOP_CODONS, reverse_complement, to_dna
from .types import ORF

DEFAULT_START_CODONS = ('ATG',)
DEFAULT_MIN_AMINO_ACIDS = 30


def _scan_strand(
    seq: str,
    strand: int,
    min_amino_acids: int,
    start_codons: frozenset,
    stop_codons: frozenset,
) -> List[ORF]:
    """Find ORFs in one strand, in that strand's own coordinates."""
    orfs = []
    n = len(seq)

    for offset in range(3):
        codon_starts = range(offset, n - 2, 3)
        # Walk backwards so each start codon knows the next stop downstream
        next_stop: Optional[int] = None
        found = []
        for i in reversed(codon_starts):
            codon = seq[i:i + 3]
            if codon in stop_codons:
                next_stop = i
            if codon in start_codons:
                if next_stop is not None and next_stop > i:
                    end = next_stop + 3
                    amino_acids = (next_stop - i) // 3
                    stop_codon = seq[next_stop:next_stop + 3]
                else:
                    end = n
                    amino_acids = (n - i) // 3
                    stop_codon = None
                if amino_acids >= min_amino_acids:
                    found.append(ORF(
                        start=i,
                        end=end,
                        strand=strand,
                        frame=offset + 1,
                        start_codon=codon,
                        stop_codon=stop_codon,
                        amino_acids=amino_acids,
                    ))
        orfs.extend(reversed(found))

    return orfs


def find_orfs(
    seq: str,
    min_amino_acids: int = DEFAULT_MIN_AMINO_ACIDS,
    start_codons: Iterable[str] = DEFAULT_START_CODONS,
    stop_codons: Iterable[str] = STOP_CODONS,
    max_length: Optional[int] = None,
) -> List[ORF]:
    """
    Find ORFs in all six reading frames.

    Args:
        seq: DNA or RNA sequence (U is read as T)
        min_amino_acids: Minimum translated length (stop codon excluded)
        start_codons: Codons that open an ORF
        stop_codons: Codons that close an ORF
        max_length: Sequences longer than this are not scanned

    Returns:
        ORFs in forward-strand coordinates, longest first. Ties keep
        forward-strand ORFs before reverse-strand ones, then frame order.

    Raises:
        ValueError: If min_amino_acids is negative
    """
    if min_amino_acids < 0:
        raise ValueError(f"min_amino_acids must be >= 0, got {min_amino_acids}")
    if not seq or (max_length is not None and len(seq) > max_length):
        return []

    forward = to_dna(seq)
    starts = frozenset(to_dna(c) for c in start_codons)
    stops = frozenset(to_dna(c) for c in stop_codons)
    n = len(forward)

    orfs = _scan_strand(forward, 1, min_amino_acids, starts, stops)

    for orf in _scan_strand(reverse_complement(forward), -1, min_amino_acids, starts, stops):
        # Map reverse-complement coordinates back onto the forward strand
        orfs.append(ORF(
            start=n - orf.end,
            end=n - orf.start,
            strand=-1,
            frame=orf.frame,
            start_codon=orf.start_codon,
            stop_codon=orf.stop_codon,
            amino_acids=orf.amino_acids,
        ))

    orfs.sort(key=lambda o: o.length, reverse=True)
    return orfs


def find_longest_orf(
    seq: str,
    start_codons: Iterable[str] = DEFAULT_START_CODONS,
) -> Optional[ORF]:
    """Return the longest ORF of at least one amino acid, or None."""
    orfs = find_orfs(seq, min_amino_acids=1, start_codons=start_codons)
    return orfs[0] if orfs else None
