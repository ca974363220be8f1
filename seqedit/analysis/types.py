"""
Type definitions for SEQEDIT analysis module.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GCPoint:
    """GC fraction of the window starting at position."""
    position: int
    gc: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ORF:
    """
    Open reading frame in forward-strand coordinates.

    Attributes:
        start: 0-based start on the forward strand (inclusive)
        end: 0-based end on the forward strand (exclusive)
        strand: +1 or -1
        frame: Reading frame 1-3, counted in the strand's own direction
        start_codon: Codon that opens the ORF
        stop_codon: Terminating codon, or None when the ORF runs off the
            end of the sequence
        amino_acids: Translated length, excluding the stop codon
    """
    start: int
    end: int
    strand: int
    frame: int
    start_codon: str
    stop_codon: Optional[str]
    amino_acids: int

    @property
    def length(self) -> int:
        """Length in bp, including the stop codon when present."""
        return self.end - self.start

    @property
    def is_truncated(self) -> bool:
        return self.stop_codon is None

    @property
    def frame_label(self) -> str:
        """Frame label as shown on an ORF track, e.g. '+1' or '-3'."""
        return f"{'+' if self.strand == 1 else '-'}{self.frame}"

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['length'] = self.length
        return d


@dataclass(frozen=True)
class MotifMatch:
    """A motif hit over [start, end)."""
    start: int
    end: int
    matched: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
