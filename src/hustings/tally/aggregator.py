"""Result aggregator: turns seat counts into the election verdict.

The highest and second-highest seat counts are tracked across all
parties. If they are equal the parliament is hung, whatever the value
(including everyone on zero). Otherwise the party holding the strict
maximum wins and its leader is elected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from hustings.models.party import Party
from hustings.persistence.event_log import CampaignLog, RecordKind


def leading_index(seats: Sequence[int]) -> Optional[int]:
    """Index of the strict seat leader, or None for a hung result."""
    if not seats:
        return None
    top_index = 0
    top = seats[0]
    runner_up = -1
    for index, count in enumerate(seats[1:], start=1):
        if count > top:
            runner_up = top
            top, top_index = count, index
        elif count > runner_up:
            runner_up = count
    if top == runner_up:
        return None
    return top_index


@dataclass(frozen=True)
class ElectionVerdict:
    """Outcome of the election."""
    hung: bool
    winning_party: Optional[str] = None
    elected_leader: Optional[str] = None
    seats: dict[str, int] = field(default_factory=dict)

    def as_payload(self) -> dict:
        return {
            "hung": self.hung,
            "winning_party": self.winning_party,
            "elected_leader": self.elected_leader,
            "seats": dict(self.seats),
        }


class ResultAggregator:
    """Decides the overall election outcome from party seat counters."""

    def __init__(self, log: Optional[CampaignLog] = None) -> None:
        self._log = log

    def aggregate(self, parties: Sequence[Party]) -> ElectionVerdict:
        seats = {p.name: p.seats_won for p in parties}
        index = leading_index([p.seats_won for p in parties])
        if index is None:
            verdict = ElectionVerdict(hung=True, seats=seats)
        else:
            winner = parties[index]
            verdict = ElectionVerdict(
                hung=False,
                winning_party=winner.name,
                elected_leader=winner.leader.name,
                seats=seats,
            )
        if self._log is not None:
            self._log.record(RecordKind.VERDICT_DECLARED, "election", verdict.as_payload())
        return verdict
