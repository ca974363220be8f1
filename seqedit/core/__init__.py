"""
Core editing modules for SEQEDIT.
"""

from .alphabet import (
    DNA_ALPHABET,
    PROTEIN_ALPHABET,
    RNA_ALPHABET,
    ValidationResult,
    alphabet_for,
    clean_sequence,
    detect_sequence_type,
    is_valid_residue,
    is_valid_sequence,
)
from .checkpoints import (
    BlockCheckpoint,
    CheckpointManager,
)
from .features import (
    FEATURE_TEMPLATES,
    FeatureTemplate,
    adjust_features,
    feature_from_template,
)
from .models import (
    Feature,
    FeatureType,
    MutationScar,
    ScarType,
    SequenceBuffer,
    SequenceType,
    Topology,
)
from .registry import (
    SessionRegistry,
    UnknownBlockError,
)
from .scars import ScarLedger
from .session import (
    EditSession,
    EditStatus,
    EditView,
    SessionState,
    Snapshot,
)

__all__ = [
    # Models
    'SequenceType',
    'Topology',
    'ScarType',
    'FeatureType',
    'SequenceBuffer',
    'MutationScar',
    'Feature',
    # Alphabets
    'DNA_ALPHABET',
    'RNA_ALPHABET',
    'PROTEIN_ALPHABET',
    'ValidationResult',
    'alphabet_for',
    'clean_sequence',
    'detect_sequence_type',
    'is_valid_residue',
    'is_valid_sequence',
    # Scars
    'ScarLedger',
    # Features
    'adjust_features',
    'FeatureTemplate',
    'FEATURE_TEMPLATES',
    'feature_from_template',
    # Editing
    'EditSession',
    'EditStatus',
    'EditView',
    'SessionState',
    'Snapshot',
    'SessionRegistry',
    'UnknownBlockError',
    # Checkpoints
    'BlockCheckpoint',
    'CheckpointManager',
]
