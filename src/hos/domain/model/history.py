"""History ledger: the append-only audit trail kept on every order."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HistoryEntry:
    when: datetime
    action: str


def record_history(
    history: list[HistoryEntry], action: str, now: datetime
) -> list[HistoryEntry]:
    """Append ``action`` stamped with ``now`` and return the same list.

    Entries are only ever appended; nothing is removed or reordered.
    """
    history.append(HistoryEntry(when=now, action=action))
    return history
