"""
Residue alphabets and sequence validation.

Each sequence type accepts a fixed set of single-letter residue codes:
IUPAC nucleotide codes for DNA and RNA, amino-acid codes for protein.
"""

import re
from dataclasses import dataclass, field
from typing import FrozenSet, List

from .models import SequenceType

IUPAC_AMBIGUITY = 'NRYSWKMBDHV'

DNA_ALPHABET: FrozenSet[str] = frozenset('ACGT' + IUPAC_AMBIGUITY)
RNA_ALPHABET: FrozenSet[str] = frozenset('ACGU' + IUPAC_AMBIGUITY)
PROTEIN_ALPHABET: FrozenSet[str] = frozenset('ACDEFGHIKLMNPQRSTVWYX*')

ALPHABETS = {
    SequenceType.DNA: DNA_ALPHABET,
    SequenceType.RNA: RNA_ALPHABET,
    SequenceType.PROTEIN: PROTEIN_ALPHABET,
}

# Letters that only occur in amino-acid sequences
_AA_ONLY = PROTEIN_ALPHABET - DNA_ALPHABET - RNA_ALPHABET - {'X', '*'}

_STRIP_PATTERN = re.compile(r'[\s\d]')


def alphabet_for(sequence_type: SequenceType) -> FrozenSet[str]:
    """Return the residue alphabet for a sequence type."""
    return ALPHABETS[SequenceType(sequence_type)]


def is_valid_residue(residue: str, sequence_type: SequenceType) -> bool:
    """Check that a single character is a residue of the given type."""
    return len(residue) == 1 and residue.upper() in alphabet_for(sequence_type)


def invalid_residues(seq: str, sequence_type: SequenceType) -> List[str]:
    """Return the distinct characters of seq not valid for the type, in order seen."""
    alphabet = alphabet_for(sequence_type)
    seen = []
    for ch in seq:
        if ch.upper() not in alphabet and ch not in seen:
            seen.append(ch)
    return seen


def is_valid_sequence(seq: str, sequence_type: SequenceType) -> bool:
    """Check that every character of seq is valid for the type."""
    return not invalid_residues(seq, sequence_type)


def filter_residues(text: str, sequence_type: SequenceType) -> str:
    """Keep only valid residues from text, uppercased (used for paste)."""
    alphabet = alphabet_for(sequence_type)
    return ''.join(ch for ch in text.upper() if ch in alphabet)


@dataclass
class ValidationResult:
    """Outcome of cleaning a pasted sequence."""
    cleaned: str
    invalid_count: int = 0
    invalid_chars: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return self.invalid_count == 0


def clean_sequence(raw: str, sequence_type: SequenceType) -> ValidationResult:
    """
    Strip whitespace and digits from raw and drop invalid residues.

    Args:
        raw: Pasted text (may contain line breaks and position numbers)
        sequence_type: Type whose alphabet the result must satisfy

    Returns:
        ValidationResult with the uppercased cleaned sequence and a report
        of the characters that were removed
    """
    stripped = _STRIP_PATTERN.sub('', raw)
    alphabet = alphabet_for(sequence_type)

    cleaned = []
    invalid_chars = []
    invalid_count = 0
    for ch in stripped:
        upper = ch.upper()
        if upper in alphabet:
            cleaned.append(upper)
        else:
            invalid_count += 1
            if ch not in invalid_chars:
                invalid_chars.append(ch)

    return ValidationResult(
        cleaned=''.join(cleaned),
        invalid_count=invalid_count,
        invalid_chars=invalid_chars,
    )


def detect_sequence_type(raw: str) -> str:
    """
    Guess the type of a pasted sequence.

    Returns one of 'dna', 'rna', 'protein', 'mixed' or 'unknown'.
    Sequences made only of A/C/G/N (ambiguous between DNA and RNA)
    default to 'dna'.
    """
    cleaned = _STRIP_PATTERN.sub('', raw).upper()
    if not cleaned:
        return 'unknown'

    known = DNA_ALPHABET | RNA_ALPHABET | PROTEIN_ALPHABET
    unknown_count = sum(1 for ch in cleaned if ch not in known)
    if unknown_count / len(cleaned) > 0.1:
        return 'unknown'

    has_t = 'T' in cleaned
    has_u = 'U' in cleaned
    has_aa_only = any(ch in _AA_ONLY for ch in cleaned)

    if has_aa_only:
        return 'mixed' if has_u else SequenceType.PROTEIN.value
    if has_t and has_u:
        return 'mixed'
    if has_u:
        return SequenceType.RNA.value
    return SequenceType.DNA.value
