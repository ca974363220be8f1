"""
Data models for SEQEDIT sequence editing.

The value types here (MutationScar, Feature) define clone() as a true
value copy so that snapshots and checkpoints never share mutable state
with the live session.
"""

import copy
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional


def new_id() -> str:
    """Generate a unique identifier for scars, features and checkpoints."""
    return str(uuid.uuid4())


class SequenceType(Enum):
    """Editable sequence types."""
    DNA = 'dna'
    RNA = 'rna'
    PROTEIN = 'protein'

    @property
    def is_nucleotide(self) -> bool:
        return self is not SequenceType.PROTEIN


class Topology(Enum):
    """Molecule topology."""
    LINEAR = 'linear'
    CIRCULAR = 'circular'


class ScarType(Enum):
    """Kinds of atomic edit recorded in the scar ledger."""
    SUBSTITUTION = 'substitution'
    INSERTION = 'insertion'
    DELETION = 'deletion'


class FeatureType(Enum):
    """Feature annotation categories."""
    ORF = 'orf'
    GENE = 'gene'
    CDS = 'cds'
    PROMOTER = 'promoter'
    TERMINATOR = 'terminator'
    RBS = 'rbs'
    ORIGIN = 'origin'
    RESISTANCE = 'resistance'
    RESTRICTION_SITE = 'restriction_site'
    PRIMER_BIND = 'primer_bind'
    MISC_FEATURE = 'misc_feature'
    CUSTOM = 'custom'


@dataclass
class SequenceBuffer:
    """
    Canonical residue sequence of one block.

    Attributes:
        id: Block identifier
        raw: Residue characters (uppercase)
        sequence_type: DNA, RNA or protein
        topology: Linear or circular
        name: Display name
    """
    id: str
    raw: str = ''
    sequence_type: SequenceType = SequenceType.DNA
    topology: Topology = Topology.LINEAR
    name: str = ''

    def __post_init__(self):
        self.sequence_type = SequenceType(self.sequence_type)
        self.topology = Topology(self.topology)
        self.raw = self.raw.upper()

    def __len__(self) -> int:
        return len(self.raw)

    @property
    def length(self) -> int:
        return len(self.raw)

    @property
    def is_circular(self) -> bool:
        return self.topology is Topology.CIRCULAR

    def clone(self) -> 'SequenceBuffer':
        return replace(self)


@dataclass(frozen=True)
class MutationScar:
    """
    Immutable record of one atomic edit.

    Attributes:
        position: Offset into the sequence at the time of the edit
        type: Substitution, insertion or deletion
        original: Residue(s) removed or replaced (None for insertions)
        inserted: Residue(s) added (None for deletions)
        created_at: Epoch seconds, stamped by the scar ledger
        id: Unique scar identifier
    """
    position: int
    type: ScarType
    original: Optional[str] = None
    inserted: Optional[str] = None
    created_at: float = 0.0
    id: str = field(default_factory=new_id)

    @property
    def size(self) -> int:
        """Length change caused by the edit (positive for insertions)."""
        return len(self.inserted or '') - len(self.original or '')

    def clone(self) -> 'MutationScar':
        return replace(self)

    def describe(self) -> str:
        """One-line changelog description (1-based position)."""
        pos = self.position + 1
        if self.type is ScarType.SUBSTITUTION:
            return f"Position {pos}: {self.original} → {self.inserted}"
        elif self.type is ScarType.INSERTION:
            return f"Position {pos}: insert {self.inserted} ({len(self.inserted)} bp)"
        else:
            return f"Position {pos}: delete {self.original} ({len(self.original)} bp)"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'position': self.position,
            'type': self.type.value,
            'original': self.original,
            'inserted': self.inserted,
            'created_at': self.created_at,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'MutationScar':
        return cls(
            position=int(d['position']),
            type=ScarType(d['type']),
            original=d.get('original'),
            inserted=d.get('inserted'),
            created_at=float(d.get('created_at', 0.0)),
            id=d.get('id') or new_id(),
        )


@dataclass
class Feature:
    """
    Coordinate-anchored annotation over a half-open range [start, end).

    Attributes:
        name: Display name
        type: Feature category
        start: 0-based start (inclusive)
        end: 0-based end (exclusive)
        strand: +1 or -1
        color: Display color (hex)
        metadata: Free-form annotation data
        id: Unique feature identifier
    """
    name: str
    type: FeatureType
    start: int
    end: int
    strand: int = 1
    color: str = '#94a3b8'
    metadata: Dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        self.type = FeatureType(self.type)
        if self.strand not in (1, -1):
            raise ValueError(f"Strand must be +1 or -1, got {self.strand}")

    @property
    def length(self) -> int:
        return self.end - self.start

    def is_valid_for(self, seq_length: int) -> bool:
        """Check 0 <= start < end <= seq_length."""
        return 0 <= self.start < self.end <= seq_length

    def clone(self) -> 'Feature':
        return replace(self, metadata=copy.deepcopy(self.metadata))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type.value,
            'start': self.start,
            'end': self.end,
            'strand': self.strand,
            'color': self.color,
            'metadata': copy.deepcopy(self.metadata),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Feature':
        return cls(
            name=d['name'],
            type=FeatureType(d.get('type', 'misc_feature')),
            start=int(d['start']),
            end=int(d['end']),
            strand=int(d.get('strand', 1)),
            color=d.get('color', '#94a3b8'),
            metadata=copy.deepcopy(d.get('metadata') or {}),
            id=d.get('id') or new_id(),
        )
