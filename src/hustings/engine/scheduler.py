"""Event scheduler: decides, per electorate-day, whether and which event fires.

For each electorate on each day:
1. Flip a coin (uniform over the configured sides). Only the firing
   face produces an event.
2. Roll uniform(1, roll_sides) and map the roll to an event kind through
   the cumulative threshold table (1-9 debate, 10 scandal, 11-12 prank,
   13 leader bout, 14 leader debate, 15-16 international issue,
   17-20 issue disclosure).
3. Leader events share one slot per day across all electorates. If the
   slot is already used, the roll is repeated (not the coin) until a
   non-leader kind comes up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hustings.engine.random_source import RandomSource
from hustings.models.event import EventKind
from hustings.policy.resolver import PolicyResolver


@dataclass
class DayLedger:
    """Per-day scheduling state. A fresh ledger starts every day."""
    day: int
    leader_event_used: bool = False


class EventScheduler:
    """Draws event kinds from the shared random source."""

    def __init__(self, resolver: PolicyResolver, rng: RandomSource) -> None:
        self._resolver = resolver
        self._rng = rng
        self._thresholds = resolver.event_thresholds()

    def begin_day(self, day: int) -> DayLedger:
        return DayLedger(day=day)

    def kind_for_roll(self, roll: int) -> EventKind:
        """Map a roll onto the cumulative threshold table."""
        for bound, kind in self._thresholds:
            if roll <= bound:
                return kind
        raise ValueError(
            f"Roll {roll} is outside 1..{self._resolver.event_roll_sides()}"
        )

    def draw_kind(self) -> EventKind:
        return self.kind_for_roll(
            self._rng.uniform(1, self._resolver.event_roll_sides())
        )

    def next_event(self, ledger: DayLedger) -> Optional[EventKind]:
        """Decide the event for one electorate on the ledger's day.

        Returns None when the coin says nothing happens. Marks the
        ledger's leader slot as used when a leader event is returned.
        """
        coin = self._rng.uniform(1, self._resolver.event_coin_sides())
        if coin != self._resolver.event_fire_face():
            return None

        kind = self.draw_kind()
        while kind.is_leader_event and ledger.leader_event_used:
            kind = self.draw_kind()
        if kind.is_leader_event:
            ledger.leader_event_used = True
        return kind
