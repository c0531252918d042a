"""Campaign runner: drives the day-by-day campaign over an election.

Days count down from the campaign length to 1. Each day starts a fresh
DayLedger (one shared leader-event slot), then every electorate in load
order asks the scheduler for an event and, if one fires, the resolver
resolves it. After the last day, leader coattails are applied when the
policy enables them.

All engines share the one RandomSource handed to the runner, so the
traversal order here fixes the draw order of the whole campaign.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from hustings.engine.coattails import apply_leader_coattails
from hustings.engine.influence import OpinionInfluencer
from hustings.engine.random_source import RandomSource
from hustings.engine.resolver import EventResolver
from hustings.engine.scheduler import EventScheduler
from hustings.models.election import Election
from hustings.models.event import EventOutcome, TraitChange
from hustings.persistence.event_log import CampaignLog, RecordKind
from hustings.policy.resolver import PolicyResolver


@dataclass
class CampaignReport:
    """What happened during the campaign."""
    outcomes: list[EventOutcome] = field(default_factory=list)
    quiet_days: list[tuple[int, str]] = field(default_factory=list)
    coattail_changes: list[TraitChange] = field(default_factory=list)

    def outcomes_on(self, day: int) -> list[EventOutcome]:
        return [o for o in self.outcomes if o.day == day]


class CampaignRunner:
    """Runs the campaign phase of a simulated election."""

    def __init__(
        self,
        resolver: PolicyResolver,
        rng: RandomSource,
        log: Optional[CampaignLog] = None,
    ) -> None:
        self._resolver = resolver
        self._log = log
        self._scheduler = EventScheduler(resolver, rng)
        self._events = EventResolver(resolver, rng, OpinionInfluencer(resolver, rng))

    def run(self, election: Election) -> CampaignReport:
        """Run every campaign day, then apply coattails.

        Raises:
            ElectionPreconditionError: If the election fails validation.
        """
        election.require_valid()
        report = CampaignReport()
        self._record(RecordKind.CAMPAIGN_STARTED, "campaign", {
            "days": election.days,
            "electorates": [e.name for e in election.electorates],
            "parties": [p.name for p in election.parties],
        })

        for day in range(election.days, 0, -1):
            ledger = self._scheduler.begin_day(day)
            for electorate in election.electorates:
                kind = self._scheduler.next_event(ledger)
                if kind is None:
                    report.quiet_days.append((day, electorate.name))
                    self._record(RecordKind.QUIET_DAY, electorate.name, {"day": day})
                    continue
                outcome = self._events.resolve(election, kind, electorate, day)
                report.outcomes.append(outcome)
                self._record(RecordKind.EVENT_RESOLVED, electorate.name, outcome.as_payload())

        if self._resolver.coattails_enabled():
            report.coattail_changes = apply_leader_coattails(election.parties, self._resolver)
            self._record(RecordKind.COATTAILS_APPLIED, "campaign", {
                "changes": [
                    {"holder": c.holder, "before": c.before, "after": c.after}
                    for c in report.coattail_changes
                ],
            })
        return report

    def _record(self, kind: RecordKind, actor_id: str, payload: dict) -> None:
        if self._log is not None:
            self._log.record(kind, actor_id, payload)
