"""
IUPAC-aware motif search.

Each pattern position expands to the set of residues it accepts
(e.g. N -> any base, R -> A/G); a match needs every position to hit its
set. Characters that are not IUPAC nucleotide codes match themselves.
Protein patterns are matched literally, since most amino-acid letters
are also nucleotide ambiguity codes.
"""

import re
from typing import Dict, FrozenSet, List, Optional

from ..core.models import SequenceType
from .types import MotifMatch

IUPAC_CODES: Dict[str, FrozenSet[str]] = {
    'A': frozenset('A'),
    'C': frozenset('C'),
    'G': frozenset('G'),
    'T': frozenset('T'),
    'U': frozenset('U'),
    'R': frozenset('AG'),
    'Y': frozenset('CT'),
    'S': frozenset('GC'),
    'W': frozenset('AT'),
    'K': frozenset('GT'),
    'M': frozenset('AC'),
    'B': frozenset('CGT'),
    'D': frozenset('AGT'),
    'H': frozenset('ACT'),
    'V': frozenset('ACG'),
    'N': frozenset('ACGTU'),
}


def expand_pattern(
    pattern: str,
    sequence_type: SequenceType = SequenceType.DNA,
) -> List[FrozenSet[str]]:
    """Expand a pattern into one set of accepted residues per position."""
    if not SequenceType(sequence_type).is_nucleotide:
        return [frozenset(ch) for ch in pattern.upper()]
    return [IUPAC_CODES.get(ch, frozenset(ch)) for ch in pattern.upper()]


def _position_regex(accepted: FrozenSet[str]) -> str:
    if len(accepted) == 1:
        return re.escape(next(iter(accepted)))
    return '[' + ''.join(sorted(accepted)) + ']'


def pattern_to_regex(
    pattern: str,
    sequence_type: SequenceType = SequenceType.DNA,
) -> Optional[re.Pattern]:
    """
    Compile a pattern into a regex that reports overlapping matches.

    The motif is wrapped in a zero-width lookahead so finditer() yields
    a match at every start position. Returns None for an empty pattern.
    """
    if not pattern:
        return None
    body = ''.join(
        _position_regex(accepted) for accepted in expand_pattern(pattern, sequence_type)
    )
    return re.compile(f'(?=({body}))')


def find_motif(
    seq: str,
    pattern: str,
    sequence_type: SequenceType = SequenceType.DNA,
) -> List[MotifMatch]:
    """
    Find all (overlapping) occurrences of a pattern.

    Matching is case-insensitive and does not wrap around the end of
    circular sequences.

    Args:
        seq: Sequence to search
        pattern: Motif; IUPAC ambiguity codes apply to DNA/RNA only
        sequence_type: PROTEIN matches every pattern character literally

    Returns:
        MotifMatch per hit, ordered by start position
    """
    if not seq or not pattern or len(pattern) > len(seq):
        return []
    regex = pattern_to_regex(pattern, sequence_type)
    upper = seq.upper()
    return [
        MotifMatch(start=m.start(), end=m.start() + len(m.group(1)), matched=m.group(1))
        for m in regex.finditer(upper)
    ]


def count_motif(seq: str, pattern: str, sequence_type: SequenceType = SequenceType.DNA) -> int:
    return len(find_motif(seq, pattern, sequence_type))
