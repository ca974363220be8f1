"""
Append-only ledger of mutation scars.
"""

import time
from dataclasses import replace
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from .models import MutationScar, ScarType

# Smallest step used to keep created_at strictly increasing
_TICK = 1e-6


class ScarLedger:
    """
    Ordered, append-only record of every edit applied to one buffer.

    Scars are stamped with a strictly increasing created_at on append and
    never modified afterwards. Undo/redo and checkpoint restore swap the
    whole ledger with replace() rather than replaying edits.
    """

    def __init__(
        self,
        scars: Optional[Iterable[MutationScar]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._clock = clock
        self._scars: List[MutationScar] = [s.clone() for s in scars or ()]

    def __len__(self) -> int:
        return len(self._scars)

    def __iter__(self) -> Iterator[MutationScar]:
        return iter(self._scars)

    def __getitem__(self, index: int) -> MutationScar:
        return self._scars[index]

    @property
    def last(self) -> Optional[MutationScar]:
        return self._scars[-1] if self._scars else None

    def _next_timestamp(self) -> float:
        now = self._clock()
        last = self.last
        if last is not None and now <= last.created_at:
            now = last.created_at + _TICK
        return now

    def append(self, scar: MutationScar) -> MutationScar:
        """Stamp and append a scar. Returns the stored scar."""
        stamped = replace(scar, created_at=self._next_timestamp())
        self._scars.append(stamped)
        return stamped

    def record(
        self,
        scar_type: ScarType,
        position: int,
        original: Optional[str] = None,
        inserted: Optional[str] = None,
    ) -> MutationScar:
        """Create and append a new scar."""
        return self.append(MutationScar(
            position=position,
            type=scar_type,
            original=original,
            inserted=inserted,
        ))

    def snapshot(self) -> Tuple[MutationScar, ...]:
        """Value copy of the ledger contents, oldest first."""
        return tuple(s.clone() for s in self._scars)

    def replace(self, scars: Iterable[MutationScar]):
        """Swap the whole ledger for a copy of scars."""
        self._scars = [s.clone() for s in scars]

    def most_recent_first(self) -> List[MutationScar]:
        """Scars ordered for changelog display."""
        return list(reversed(self._scars))

    def count_by_type(self) -> dict:
        counts = {t: 0 for t in ScarType}
        for scar in self._scars:
            counts[scar.type] += 1
        return counts
