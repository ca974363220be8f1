"""
Session registry keyed by block id.

The registry is the single owner of EditSession instances: every block id
maps to exactly one authoritative session, and all mutation entry points
used by the UI and by the checkpoint manager go through it.
"""

import logging
import time
from typing import Callable, Dict, Iterable, Iterator, Optional

from .models import Feature, MutationScar, SequenceBuffer, SequenceType, Topology, new_id
from .session import DEFAULT_MAX_HISTORY, EditSession, EditView

logger = logging.getLogger(__name__)


class UnknownBlockError(KeyError):
    """Raised when a block id has no open session."""


class SessionRegistry:
    """Explicit registry of open edit sessions."""

    def __init__(
        self,
        max_history: int = DEFAULT_MAX_HISTORY,
        clock: Callable[[], float] = time.time,
    ):
        self.max_history = max_history
        self._clock = clock
        self._sessions: Dict[str, EditSession] = {}

    def __contains__(self, block_id: str) -> bool:
        return block_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sessions)

    def open_block(
        self,
        raw: str,
        sequence_type: SequenceType = SequenceType.DNA,
        topology: Topology = Topology.LINEAR,
        block_id: Optional[str] = None,
        name: str = '',
        features: Optional[Iterable[Feature]] = None,
        scars: Optional[Iterable[MutationScar]] = None,
        locked: bool = False,
    ) -> EditSession:
        """
        Create the session for a new block.

        Raises:
            ValueError: If block_id is already open or raw holds residues
                invalid for sequence_type
        """
        block_id = block_id or new_id()
        if block_id in self._sessions:
            raise ValueError(f"Block already open: {block_id}")

        buffer = SequenceBuffer(
            id=block_id,
            raw=raw,
            sequence_type=sequence_type,
            topology=topology,
            name=name,
        )
        session = EditSession(
            buffer,
            features=features,
            scars=scars,
            max_history=self.max_history,
            locked=locked,
            clock=self._clock,
        )
        self._sessions[block_id] = session
        logger.info(
            f"Opened block {block_id} ({buffer.sequence_type.value}, "
            f"{buffer.topology.value}, {len(buffer)} residues)"
        )
        return session

    def close_block(self, block_id: str) -> bool:
        """Drop a block's session. Returns False if it was not open."""
        session = self._sessions.pop(block_id, None)
        if session is None:
            return False
        logger.info(f"Closed block {block_id}")
        return True

    def get(self, block_id: str) -> Optional[EditSession]:
        return self._sessions.get(block_id)

    def session(self, block_id: str) -> EditSession:
        """Return the session for block_id or raise UnknownBlockError."""
        try:
            return self._sessions[block_id]
        except KeyError:
            raise UnknownBlockError(block_id) from None

    # Entry points used by the presentation layer

    def view(self, block_id: str) -> EditView:
        return self.session(block_id).view()

    def apply_click(self, block_id: str, position: int) -> EditView:
        return self.session(block_id).click(position)

    def apply_key(self, block_id: str, key: str) -> EditView:
        return self.session(block_id).press_key(key)

    def apply_paste(self, block_id: str, text: str) -> EditView:
        return self.session(block_id).paste(text)

    def toggle_insert_mode(self, block_id: str) -> EditView:
        return self.session(block_id).toggle_insert_mode()

    def undo(self, block_id: str) -> EditView:
        return self.session(block_id).undo()

    def redo(self, block_id: str) -> EditView:
        return self.session(block_id).redo()

    def lock(self, block_id: str) -> EditView:
        return self.session(block_id).set_locked(True)

    def unlock(self, block_id: str) -> EditView:
        return self.session(block_id).set_locked(False)

    def blur(self, block_id: str) -> EditView:
        return self.session(block_id).blur()

    def apply_mutation_snapshot(
        self,
        block_id: str,
        raw: str,
        scars: Iterable[MutationScar],
        features: Iterable[Feature],
        record_history: bool = False,
    ) -> EditView:
        return self.session(block_id).apply_mutation_snapshot(
            raw, scars, features, record_history=record_history
        )
