"""
SEQEDIT - sequence editing and analysis engine.

Turns keystrokes into scar-tracked sequence mutations with undo/redo,
feature coordinate adjustment and checkpoints, and provides GC, ORF and
IUPAC motif analyses over the edited sequence.
"""

__version__ = "0.1.0"

from .analysis import find_motif, find_orfs, gc_window
from .config import AnalysisConfig, EditorConfig
from .core import (
    CheckpointManager,
    EditSession,
    EditStatus,
    EditView,
    Feature,
    FeatureType,
    MutationScar,
    ScarType,
    SequenceType,
    SessionRegistry,
    Topology,
    adjust_features,
)

__all__ = [
    "AnalysisConfig",
    "EditorConfig",
    "SequenceType",
    "Topology",
    "ScarType",
    "FeatureType",
    "MutationScar",
    "Feature",
    "EditSession",
    "EditStatus",
    "EditView",
    "SessionRegistry",
    "CheckpointManager",
    "adjust_features",
    "gc_window",
    "find_orfs",
    "find_motif",
    "__version__",
]
