"""
Utility modules for SEQEDIT.
"""

from .sequence import (
    CODON_TABLE,
    STOP_CODONS,
    complement,
    reverse_complement,
    to_dna,
    translate,
    translate_codon,
)

__all__ = [
    'CODON_TABLE',
    'STOP_CODONS',
    'complement',
    'reverse_complement',
    'to_dna',
    'translate',
    'translate_codon',
]
