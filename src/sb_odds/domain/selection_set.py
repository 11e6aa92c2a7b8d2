"""Bet slip under composition: unique legs with an active flag each.

Entries are never dropped by remove(); they are only deactivated, so a
re-toggle restores the leg with its league/event label intact.
"""

from collections.abc import Iterator
from dataclasses import dataclass, replace

from src.sb_common.enums import BetType
from src.sb_odds.domain.models import LegKey, Selection
from src.sb_odds.domain.odds import validate_odds


@dataclass
class _Entry:
    selection: Selection
    active: bool


class SelectionSet:
    def __init__(self) -> None:
        self._entries: dict[LegKey, _Entry] = {}

    def toggle(
        self,
        key: LegKey,
        quoted_odds: int,
        league: str = "",
        event_label: str = "",
    ) -> bool:
        """Flip the leg's active flag (inserting it active if new). Returns the new state.

        The odds snapshot is refreshed on every toggle; metadata is kept when
        the caller passes none.
        """
        validate_odds(quoted_odds)
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = _Entry(
                Selection(key.event_id, key.market, key.outcome, quoted_odds, league, event_label),
                active=True,
            )
            return True

        entry.selection = replace(
            entry.selection,
            odds=quoted_odds,
            league=league or entry.selection.league,
            event_label=event_label or entry.selection.event_label,
        )
        entry.active = not entry.active
        return entry.active

    def add(self, selection: Selection) -> None:
        """Make the leg active with this snapshot regardless of its prior state."""
        validate_odds(selection.odds)
        self._entries[selection.key] = _Entry(selection, active=True)

    def remove(self, key: LegKey) -> None:
        entry = self._entries.get(key)
        if entry is not None:
            entry.active = False

    def clear(self) -> None:
        self._entries.clear()

    def active_legs(self) -> Iterator[Selection]:
        return (e.selection for e in self._entries.values() if e.active)

    def is_active(self, key: LegKey) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.active

    def get(self, key: LegKey) -> Selection | None:
        entry = self._entries.get(key)
        return entry.selection if entry else None

    @property
    def active_count(self) -> int:
        return sum(1 for _ in self.active_legs())

    @property
    def inferred_mode(self) -> BetType:
        """UI hint only: two or more active legs suggest a parlay."""
        return BetType.PARLAY if self.active_count >= 2 else BetType.SINGLE

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
