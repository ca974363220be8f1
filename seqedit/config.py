"""
Configuration classes and sequence input parsing for SEQEDIT.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import re
import yaml

from .analysis.orf import DEFAULT_MIN_AMINO_ACIDS, DEFAULT_START_CODONS
from .core.session import DEFAULT_MAX_HISTORY


# Regex to detect if string is a literal sequence (IUPAC nucleotides or amino acids)
SEQUENCE_PATTERN = re.compile(r'^[A-Za-z*\s]+$')


def is_sequence_literal(s: str) -> bool:
    """Check if string is a literal sequence (not a file path)."""
    # A bare word naming an existing file is read as a file
    return bool(s) and bool(SEQUENCE_PATTERN.match(s)) and not Path(s).exists()


def parse_sequence_input(value: str) -> str:
    """
    Parse sequence input - can be either a sequence string or a FASTA file path.

    Args:
        value: Either a sequence string or path to a FASTA file

    Returns:
        The sequence (uppercase, whitespace removed)

    Raises:
        ValueError: If value is neither a sequence nor an existing file

    Examples:
        >>> parse_sequence_input("ATCGATCG")
        'ATCGATCG'
    """
    value = value.strip()

    if is_sequence_literal(value):
        return re.sub(r'\s', '', value).upper()

    path = Path(value)
    if not path.exists():
        raise ValueError(f"File not found: {value}")

    return load_fasta(path)


@dataclass
class AnalysisConfig:
    """Thresholds for the analysis tracks."""
    # Above these lengths the tracks are not computed
    gc_max_length: int = 100_000
    orf_max_length: int = 50_000

    orf_min_amino_acids: int = DEFAULT_MIN_AMINO_ACIDS
    start_codons: Tuple[str, ...] = DEFAULT_START_CODONS

    # None lets gc_window choose from the sequence length
    gc_window_size: Optional[int] = None
    gc_step: Optional[int] = None

    def __post_init__(self):
        self.start_codons = tuple(c.upper() for c in self.start_codons)
        if self.orf_min_amino_acids < 0:
            raise ValueError(f"orf_min_amino_acids must be >= 0, got {self.orf_min_amino_acids}")
        bad = [c for c in self.start_codons if len(c) != 3]
        if bad:
            raise ValueError(f"Start codons must be 3 bases: {bad}")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'AnalysisConfig':
        """Create from dictionary, ignoring unknown keys."""
        known = {k: v for k, v in d.items() if k in cls.__dataclass_fields__}
        if 'start_codons' in known:
            known['start_codons'] = tuple(known['start_codons'])
        return cls(**known)


@dataclass
class EditorConfig:
    """Full editor configuration."""
    max_history: int = DEFAULT_MAX_HISTORY
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    log_level: str = 'INFO'

    def __post_init__(self):
        if self.max_history < 1:
            raise ValueError(f"max_history must be >= 1, got {self.max_history}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EditorConfig':
        return cls(
            max_history=data.get('max_history', DEFAULT_MAX_HISTORY),
            analysis=AnalysisConfig.from_dict(data.get('analysis') or {}),
            log_level=str(data.get('log_level', 'INFO')).upper(),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> 'EditorConfig':
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__}")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'max_history': self.max_history,
            'log_level': self.log_level,
            'analysis': {
                'gc_max_length': self.analysis.gc_max_length,
                'orf_max_length': self.analysis.orf_max_length,
                'orf_min_amino_acids': self.analysis.orf_min_amino_acids,
                'start_codons': list(self.analysis.start_codons),
                'gc_window_size': self.analysis.gc_window_size,
                'gc_step': self.analysis.gc_step,
            },
        }


def read_fasta_records(path: str) -> List[Tuple[str, str]]:
    """Read all (header, sequence) records from a FASTA file."""
    records = []
    current_id = None
    current_seq: List[str] = []

    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            if line.startswith('>'):
                if current_id is not None:
                    records.append((current_id, ''.join(current_seq).upper()))
                current_id = line[1:].strip()
                current_seq = []
            else:
                current_seq.append(line)

    if current_id is not None:
        records.append((current_id, ''.join(current_seq).upper()))
    return records


def _read_fasta_sequence(path: str) -> str:
    """Read first sequence from a FASTA file."""
    sequence = []
    with open(path) as f:
        for line in f:
            line = line.strip()
            if line.startswith('>'):
                if sequence:
                    break  # Only read first sequence
                continue
            sequence.append(line.upper())
    return ''.join(sequence)


def load_fasta(path: Path) -> str:
    """Load sequence from FASTA file."""
    return _read_fasta_sequence(str(path))
