"""
Sequence manipulation utilities.

Provides common functions for DNA/RNA sequence operations.
"""

from typing import Dict


DNA_COMPLEMENT: Dict[str, str] = {
    'A': 'T', 'T': 'A', 'G': 'C', 'C': 'G',
    'R': 'Y', 'Y': 'R', 'S': 'S', 'W': 'W',
    'K': 'M', 'M': 'K', 'B': 'V', 'V': 'B',
    'D': 'H', 'H': 'D', 'N': 'N',
}

RNA_COMPLEMENT: Dict[str, str] = {**DNA_COMPLEMENT, 'A': 'U', 'U': 'A'}
del RNA_COMPLEMENT['T']

# Standard genetic code (NCBI table 1)
CODON_TABLE: Dict[str, str] = {
    'TTT': 'F', 'TTC': 'F', 'TTA': 'L', 'TTG': 'L',
    'TCT': 'S', 'TCC': 'S', 'TCA': 'S', 'TCG': 'S',
    'TAT': 'Y', 'TAC': 'Y', 'TAA': '*', 'TAG': '*',
    'TGT': 'C', 'TGC': 'C', 'TGA': '*', 'TGG': 'W',
    'CTT': 'L', 'CTC': 'L', 'CTA': 'L', 'CTG': 'L',
    'CCT': 'P', 'CCC': 'P', 'CCA': 'P', 'CCG': 'P',
    'CAT': 'H', 'CAC': 'H', 'CAA': 'Q', 'CAG': 'Q',
    'CGT': 'R', 'CGC': 'R', 'CGA': 'R', 'CGG': 'R',
    'ATT': 'I', 'ATC': 'I', 'ATA': 'I', 'ATG': 'M',
    'ACT': 'T', 'ACC': 'T', 'ACA': 'T', 'ACG': 'T',
    'AAT': 'N', 'AAC': 'N', 'AAA': 'K', 'AAG': 'K',
    'AGT': 'S', 'AGC': 'S', 'AGA': 'R', 'AGG': 'R',
    'GTT': 'V', 'GTC': 'V', 'GTA': 'V', 'GTG': 'V',
    'GCT': 'A', 'GCC': 'A', 'GCA': 'A', 'GCG': 'A',
    'GAT': 'D', 'GAC': 'D', 'GAA': 'E', 'GAG': 'E',
    'GGT': 'G', 'GGC': 'G', 'GGA': 'G', 'GGG': 'G',
}

STOP_CODONS = ('TAA', 'TAG', 'TGA')


def complement(seq: str, is_rna: bool = False) -> str:
    """Return the complement of a sequence without reversing it.

    IUPAC ambiguity codes are complemented; case is preserved and
    unknown characters pass through unchanged.
    """
    table = RNA_COMPLEMENT if is_rna else DNA_COMPLEMENT
    result = []
    for base in seq:
        comp = table.get(base.upper(), base)
        result.append(comp.lower() if base.islower() else comp)
    return ''.join(result)


def reverse_complement(seq: str, is_rna: bool = False) -> str:
    """Return reverse complement of a DNA (or RNA) sequence."""
    return complement(seq, is_rna=is_rna)[::-1]


def to_dna(seq: str) -> str:
    """Uppercase a nucleotide sequence and convert U to T."""
    return seq.upper().replace('U', 'T')


def translate_codon(codon: str) -> str:
    """Translate a DNA codon to amino acid (single letter).

    Returns '*' for stop codons, 'X' for invalid codons.
    """
    return CODON_TABLE.get(to_dna(codon), 'X')


def translate(seq: str, frame: int = 0, to_stop: bool = False) -> str:
    """Translate a nucleotide sequence starting at a 0-based frame offset.

    Incomplete trailing codons are ignored.
    """
    if frame not in (0, 1, 2):
        raise ValueError(f"Frame must be 0, 1 or 2, got {frame}")
    dna = to_dna(seq)
    protein = []
    for i in range(frame, len(dna) - 2, 3):
        aa = translate_codon(dna[i:i + 3])
        if to_stop and aa == '*':
            break
        protein.append(aa)
    return ''.join(protein)
