"""
Named, restorable snapshots of a block's editable state.

Checkpoints are independent of the undo/redo stacks: restoring one is a
hard reset of raw, scars and features that leaves history untouched.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from .models import Feature, MutationScar, SequenceType, Topology, new_id
from .registry import SessionRegistry
from .session import EditView

logger = logging.getLogger(__name__)

LABEL_FORMAT = '%Y-%m-%d %H:%M:%S'


@dataclass(frozen=True)
class BlockCheckpoint:
    """Immutable deep copy of one block's state."""
    id: str
    block_id: str
    label: str
    timestamp: float
    raw: str
    sequence_type: SequenceType
    topology: Topology
    features: Tuple[Feature, ...]
    scars: Tuple[MutationScar, ...]

    @property
    def length(self) -> int:
        return len(self.raw)

    def copy_features(self) -> List[Feature]:
        return [f.clone() for f in self.features]

    def copy_scars(self) -> List[MutationScar]:
        return [s.clone() for s in self.scars]


class CheckpointManager:
    """Creates, lists, restores and deletes checkpoints for registry blocks."""

    def __init__(
        self,
        registry: SessionRegistry,
        clock: Callable[[], float] = time.time,
    ):
        self.registry = registry
        self._clock = clock
        # Insertion-ordered; ties on timestamp resolve to creation order
        self._checkpoints: Dict[str, BlockCheckpoint] = {}

    def __len__(self) -> int:
        return len(self._checkpoints)

    def create_checkpoint(self, block_id: str, label: Optional[str] = None) -> str:
        """
        Snapshot the current state of a block.

        Args:
            block_id: Block to snapshot
            label: Display label; defaults to the creation time

        Returns:
            The new checkpoint id, or '' if the block is not open
        """
        session = self.registry.get(block_id)
        if session is None:
            logger.warning(f"Cannot checkpoint unknown block {block_id}")
            return ''

        timestamp = self._clock()
        checkpoint = BlockCheckpoint(
            id=new_id(),
            block_id=block_id,
            label=label or datetime.fromtimestamp(timestamp).strftime(LABEL_FORMAT),
            timestamp=timestamp,
            raw=session.buffer.raw,
            sequence_type=session.buffer.sequence_type,
            topology=session.buffer.topology,
            features=tuple(f.clone() for f in session.features),
            scars=session.ledger.snapshot(),
        )
        self._checkpoints[checkpoint.id] = checkpoint
        logger.info(f"Created checkpoint '{checkpoint.label}' for block {block_id}")
        return checkpoint.id

    def get_checkpoint(self, checkpoint_id: str) -> Optional[BlockCheckpoint]:
        return self._checkpoints.get(checkpoint_id)

    def restore_checkpoint(self, checkpoint_id: str) -> Optional[EditView]:
        """
        Reset a block to a checkpoint without touching undo/redo.

        Returns:
            The block's view after the restore, or None if the checkpoint
            or its block no longer exists
        """
        checkpoint = self._checkpoints.get(checkpoint_id)
        if checkpoint is None:
            return None
        session = self.registry.get(checkpoint.block_id)
        if session is None:
            logger.warning(
                f"Checkpoint {checkpoint_id} refers to closed block {checkpoint.block_id}"
            )
            return None

        view = session.apply_mutation_snapshot(
            checkpoint.raw,
            checkpoint.copy_scars(),
            checkpoint.copy_features(),
        )
        if view.applied:
            logger.info(f"Restored checkpoint '{checkpoint.label}' on block {checkpoint.block_id}")
        return view

    def delete_checkpoint(self, checkpoint_id: str) -> bool:
        checkpoint = self._checkpoints.pop(checkpoint_id, None)
        if checkpoint is None:
            return False
        logger.info(f"Deleted checkpoint '{checkpoint.label}'")
        return True

    def list_checkpoints(self, block_id: str) -> List[BlockCheckpoint]:
        """Checkpoints of a block, newest first."""
        ordered = [c for c in self._checkpoints.values() if c.block_id == block_id]
        indexed = list(enumerate(ordered))
        indexed.sort(key=lambda item: (item[1].timestamp, item[0]), reverse=True)
        return [c for _, c in indexed]

    def clear_block(self, block_id: str) -> int:
        """Delete every checkpoint of a block. Returns the number removed."""
        doomed = [cid for cid, c in self._checkpoints.items() if c.block_id == block_id]
        for cid in doomed:
            del self._checkpoints[cid]
        return len(doomed)
