"""
Edit session state machine for a single sequence block.

An EditSession turns positional input (clicks, key presses, pastes) into
sequence mutations. Every mutation records scars in the ScarLedger, keeps
feature coordinates anchored via adjust_features(), and pushes the
pre-edit state onto a bounded undo stack.

Rejected actions (invalid residues, locked buffers, nothing to undo) are
reported through EditStatus on the returned EditView, never raised.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from .alphabet import filter_residues, invalid_residues, is_valid_residue
from .features import adjust_features
from .models import Feature, FeatureType, MutationScar, ScarType, SequenceBuffer
from .scars import ScarLedger

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY = 100

# Named keys understood by press_key()
BACKSPACE = 'Backspace'
DELETE = 'Delete'
ARROW_LEFT = 'ArrowLeft'
ARROW_RIGHT = 'ArrowRight'
HOME = 'Home'
END = 'End'
INSERT = 'Insert'
ESCAPE = 'Escape'


class SessionState(Enum):
    """Whether the block is the active editing target."""
    IDLE = 'idle'
    EDITING = 'editing'


class EditStatus(Enum):
    """Outcome of an edit session operation."""
    APPLIED = 'applied'
    INVALID_RESIDUE = 'invalid_residue'
    LOCKED_BUFFER = 'locked_buffer'
    NOT_FOUND = 'not_found'
    INVALID_RANGE = 'invalid_range'
    NO_OP = 'no_op'
    IGNORED = 'ignored'


@dataclass(frozen=True)
class Snapshot:
    """Value copy of the editable state, stored on the undo/redo stacks."""
    raw: str
    scars: Tuple[MutationScar, ...]
    features: Tuple[Feature, ...]
    cursor_position: int


@dataclass
class EditView:
    """
    State returned to callers after every session operation.

    Attributes:
        block_id: Block the view belongs to
        raw: Current sequence
        scars: Scar ledger contents, oldest first
        features: Current features
        cursor_position: Cursor index in [0, len(raw)]
        can_undo: Undo stack is non-empty
        can_redo: Redo stack is non-empty
        insert_mode: True for insert, False for substitute
        editing: Session is in the EDITING state
        locked: Buffer rejects mutations
        status: Outcome of the operation that produced this view
        message: Human-readable reason for a rejection
    """
    block_id: str
    raw: str
    scars: List[MutationScar]
    features: List[Feature]
    cursor_position: int
    can_undo: bool
    can_redo: bool
    insert_mode: bool
    editing: bool
    locked: bool
    status: EditStatus = EditStatus.APPLIED
    message: str = ''

    @property
    def applied(self) -> bool:
        return self.status is EditStatus.APPLIED


class EditSession:
    """Authoritative editing state for one sequence block."""

    def __init__(
        self,
        buffer: SequenceBuffer,
        features: Optional[Iterable[Feature]] = None,
        scars: Optional[Iterable[MutationScar]] = None,
        max_history: int = DEFAULT_MAX_HISTORY,
        locked: bool = False,
        clock: Callable[[], float] = time.time,
    ):
        bad = invalid_residues(buffer.raw, buffer.sequence_type)
        if bad:
            raise ValueError(
                f"Invalid {buffer.sequence_type.value} residues in block {buffer.id}: "
                f"{''.join(bad)}"
            )
        if max_history < 1:
            raise ValueError(f"max_history must be >= 1, got {max_history}")

        self.buffer = buffer
        self.ledger = ScarLedger(scars, clock=clock)
        self.features: List[Feature] = [
            f.clone() for f in features or () if f.is_valid_for(len(buffer.raw))
        ]
        self.max_history = max_history
        self.locked = locked
        self.insert_mode = False
        self.state = SessionState.IDLE
        self._cursor = 0
        self._undo: List[Snapshot] = []
        self._redo: List[Snapshot] = []

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def block_id(self) -> str:
        return self.buffer.id

    @property
    def raw(self) -> str:
        return self.buffer.raw

    @property
    def scars(self) -> List[MutationScar]:
        return list(self.ledger)

    @property
    def cursor_position(self) -> int:
        return self._cursor

    @property
    def is_editing(self) -> bool:
        return self.state is SessionState.EDITING

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_stack(self) -> Tuple[Snapshot, ...]:
        return tuple(self._undo)

    @property
    def redo_stack(self) -> Tuple[Snapshot, ...]:
        return tuple(self._redo)

    def view(self, status: EditStatus = EditStatus.APPLIED, message: str = '') -> EditView:
        """Build an EditView of the current state."""
        return EditView(
            block_id=self.block_id,
            raw=self.buffer.raw,
            scars=list(self.ledger.snapshot()),
            features=[f.clone() for f in self.features],
            cursor_position=self._cursor,
            can_undo=self.can_undo,
            can_redo=self.can_redo,
            insert_mode=self.insert_mode,
            editing=self.is_editing,
            locked=self.locked,
            status=status,
            message=message,
        )

    def snapshot(self) -> Snapshot:
        return Snapshot(
            raw=self.buffer.raw,
            scars=self.ledger.snapshot(),
            features=tuple(f.clone() for f in self.features),
            cursor_position=self._cursor,
        )

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def _clamp(self, position: int) -> int:
        return max(0, min(int(position), len(self.buffer.raw)))

    def activate(self, position: Optional[int] = None) -> EditView:
        """Make this block the editing target (IDLE -> EDITING)."""
        self.state = SessionState.EDITING
        if position is not None:
            self._cursor = self._clamp(position)
        return self.view()

    def blur(self) -> EditView:
        """Leave editing (EDITING -> IDLE). The cursor is kept."""
        self.state = SessionState.IDLE
        return self.view()

    def click(self, position: int) -> EditView:
        """Place the cursor at a residue index, activating the session."""
        return self.activate(position)

    def move_cursor(self, position: int) -> EditView:
        self._cursor = self._clamp(position)
        return self.view()

    def toggle_insert_mode(self) -> EditView:
        """Flip between insert and substitute mode. Not recorded in history."""
        self.insert_mode = not self.insert_mode
        return self.view()

    def set_locked(self, locked: bool) -> EditView:
        self.locked = locked
        return self.view()

    def _reject_locked(self, action: str) -> EditView:
        logger.warning(f"Block {self.block_id} is locked; rejected {action}")
        return self.view(EditStatus.LOCKED_BUFFER, f"Block is locked: cannot {action}")

    def _push_history(self):
        self._undo.append(self.snapshot())
        if len(self._undo) > self.max_history:
            del self._undo[0]
        self._redo.clear()

    def _restore(self, snap: Snapshot):
        self.buffer.raw = snap.raw
        self.ledger.replace(snap.scars)
        self.features = [f.clone() for f in snap.features]
        self._cursor = self._clamp(snap.cursor_position)

    # Raw mutations; callers push history first

    def _insert(self, position: int, residues: str):
        raw = self.buffer.raw
        self.buffer.raw = raw[:position] + residues + raw[position:]
        self.ledger.record(ScarType.INSERTION, position, inserted=residues)
        self.features = adjust_features(self.features, position, len(residues))
        self._cursor = position + len(residues)

    def _delete(self, start: int, count: int):
        raw = self.buffer.raw
        removed = raw[start:start + count]
        self.buffer.raw = raw[:start] + raw[start + count:]
        self.ledger.record(ScarType.DELETION, start, original=removed)
        self.features = adjust_features(self.features, start, -count)
        self._cursor = start

    def _substitute(self, position: int, residue: str):
        raw = self.buffer.raw
        original = raw[position]
        self.buffer.raw = raw[:position] + residue + raw[position + 1:]
        self.ledger.record(ScarType.SUBSTITUTION, position, original=original, inserted=residue)
        self._cursor = position + 1

    # ------------------------------------------------------------------
    # Keyboard input
    # ------------------------------------------------------------------

    def press_key(self, key: str) -> EditView:
        """
        Handle one key press at the cursor.

        Single characters are residues (substituted or inserted depending
        on insert mode). Named keys: Backspace, Delete, ArrowLeft,
        ArrowRight, Home, End, Insert, Escape.
        """
        if not self.is_editing:
            return self.view(EditStatus.IGNORED, 'Block is not being edited')

        if key == ARROW_LEFT:
            return self.move_cursor(self._cursor - 1)
        if key == ARROW_RIGHT:
            return self.move_cursor(self._cursor + 1)
        if key == HOME:
            return self.move_cursor(0)
        if key == END:
            return self.move_cursor(len(self.buffer.raw))
        if key == INSERT:
            return self.toggle_insert_mode()
        if key == ESCAPE:
            return self.blur()
        if key == BACKSPACE:
            return self.backspace()
        if key == DELETE:
            return self.delete_forward()
        if len(key) == 1:
            return self.type_residue(key)

        return self.view(EditStatus.IGNORED, f"Unhandled key: {key}")

    def type_residue(self, residue: str) -> EditView:
        """Substitute or insert one residue at the cursor."""
        if self.locked:
            return self._reject_locked('edit sequence')
        if not is_valid_residue(residue, self.buffer.sequence_type):
            return self.view(
                EditStatus.INVALID_RESIDUE,
                f"'{residue}' is not a valid {self.buffer.sequence_type.value} residue",
            )

        residue = residue.upper()
        position = self._cursor
        if self.insert_mode:
            self._push_history()
            self._insert(position, residue)
            logger.debug(f"{self.block_id}: inserted {residue} at {position}")
            return self.view()

        if position >= len(self.buffer.raw):
            return self.view(EditStatus.NO_OP, 'Cursor is past the last residue')
        self._push_history()
        self._substitute(position, residue)
        logger.debug(f"{self.block_id}: substituted {residue} at {position}")
        return self.view()

    def backspace(self) -> EditView:
        """Delete the residue before the cursor."""
        if self.locked:
            return self._reject_locked('delete')
        if self._cursor <= 0:
            return self.view(EditStatus.NO_OP, 'Nothing before the cursor')
        self._push_history()
        self._delete(self._cursor - 1, 1)
        return self.view()

    def delete_forward(self) -> EditView:
        """Delete the residue at the cursor."""
        if self.locked:
            return self._reject_locked('delete')
        if self._cursor >= len(self.buffer.raw):
            return self.view(EditStatus.NO_OP, 'Nothing after the cursor')
        self._push_history()
        self._delete(self._cursor, 1)
        return self.view()

    def delete_range(self, start: int, end: int) -> EditView:
        """Delete the selected range [start, end) as one edit."""
        if not self.is_editing:
            return self.view(EditStatus.IGNORED, 'Block is not being edited')
        if self.locked:
            return self._reject_locked('delete')
        start, end = self._clamp(start), self._clamp(end)
        if start >= end:
            return self.view(EditStatus.INVALID_RANGE, f"Empty selection {start}-{end}")
        self._push_history()
        self._delete(start, end - start)
        return self.view()

    def paste(self, text: str, replace: Optional[Tuple[int, int]] = None) -> EditView:
        """
        Insert pasted residues at the cursor.

        Characters outside the alphabet (whitespace, digits, stray letters)
        are dropped. With replace=(start, end) that range is deleted first
        and the residues go in its place; both steps undo together.
        """
        if not self.is_editing:
            return self.view(EditStatus.IGNORED, 'Block is not being edited')
        if self.locked:
            return self._reject_locked('paste')
        residues = filter_residues(text, self.buffer.sequence_type)
        if not residues:
            return self.view(EditStatus.INVALID_RESIDUE, 'Clipboard holds no valid residues')

        self._push_history()
        position = self._cursor
        if replace is not None:
            start, end = self._clamp(replace[0]), self._clamp(replace[1])
            if start < end:
                self._delete(start, end - start)
            position = start
        self._insert(position, residues)
        logger.debug(f"{self.block_id}: pasted {len(residues)} residues at {position}")
        return self.view()

    # ------------------------------------------------------------------
    # Features
    # ------------------------------------------------------------------

    def _find_feature(self, feature_id: str) -> Optional[Feature]:
        for feature in self.features:
            if feature.id == feature_id:
                return feature
        return None

    def add_feature(self, feature: Feature) -> EditView:
        """Annotate a range. Recorded in undo history, no scar."""
        if self.locked:
            return self._reject_locked('add feature')
        if not feature.is_valid_for(len(self.buffer.raw)):
            return self.view(
                EditStatus.INVALID_RANGE,
                f"Feature range {feature.start}-{feature.end} is outside "
                f"0-{len(self.buffer.raw)}",
            )
        self._push_history()
        self.features.append(feature.clone())
        return self.view()

    def update_feature(
        self,
        feature_id: str,
        name: Optional[str] = None,
        feature_type: Optional[FeatureType] = None,
        strand: Optional[int] = None,
        color: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> EditView:
        """Rename, retype, recolor or re-strand a feature."""
        if self.locked:
            return self._reject_locked('edit feature')
        feature = self._find_feature(feature_id)
        if feature is None:
            return self.view(EditStatus.NOT_FOUND, f"No feature {feature_id}")
        if strand is not None and strand not in (1, -1):
            return self.view(EditStatus.NO_OP, f"Strand must be +1 or -1, got {strand}")
        if feature_type is not None:
            try:
                feature_type = FeatureType(feature_type)
            except ValueError:
                return self.view(EditStatus.NO_OP, f"Unknown feature type: {feature_type}")

        self._push_history()
        if name is not None:
            feature.name = name
        if feature_type is not None:
            feature.type = feature_type
        if strand is not None:
            feature.strand = strand
        if color is not None:
            feature.color = color
        if metadata is not None:
            feature.metadata = dict(metadata)
        return self.view()

    def remove_feature(self, feature_id: str) -> EditView:
        if self.locked:
            return self._reject_locked('remove feature')
        if self._find_feature(feature_id) is None:
            return self.view(EditStatus.NOT_FOUND, f"No feature {feature_id}")
        self._push_history()
        self.features = [f for f in self.features if f.id != feature_id]
        return self.view()

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def undo(self) -> EditView:
        """Restore the state before the most recent edit."""
        if self.locked:
            return self._reject_locked('undo')
        if not self._undo:
            return self.view(EditStatus.NOT_FOUND, 'Nothing to undo')
        self._redo.append(self.snapshot())
        self._restore(self._undo.pop())
        return self.view()

    def redo(self) -> EditView:
        """Re-apply the most recently undone edit."""
        if self.locked:
            return self._reject_locked('redo')
        if not self._redo:
            return self.view(EditStatus.NOT_FOUND, 'Nothing to redo')
        self._undo.append(self.snapshot())
        if len(self._undo) > self.max_history:
            del self._undo[0]
        self._restore(self._redo.pop())
        return self.view()

    def clear_history(self):
        self._undo.clear()
        self._redo.clear()

    def apply_mutation_snapshot(
        self,
        raw: str,
        scars: Iterable[MutationScar],
        features: Iterable[Feature],
        record_history: bool = False,
    ) -> EditView:
        """
        Replace raw, scars and features wholesale.

        Used by checkpoint restore and by external whole-sequence
        manipulations. Undo/redo stacks are untouched unless
        record_history is True. Features that no longer fit the new
        sequence are dropped.
        """
        if self.locked:
            return self._reject_locked('replace sequence')
        bad = invalid_residues(raw, self.buffer.sequence_type)
        if bad:
            return self.view(
                EditStatus.INVALID_RESIDUE,
                f"Invalid {self.buffer.sequence_type.value} residues: {''.join(bad)}",
            )

        if record_history:
            self._push_history()
        raw = raw.upper()
        self.buffer.raw = raw
        self.ledger.replace(scars)
        self.features = [f.clone() for f in features if f.is_valid_for(len(raw))]
        self._cursor = self._clamp(self._cursor)
        return self.view()
