"""Event resolver: computes the stochastic outcome of a scheduled event.

Dispatch goes through an explicit handler table keyed by EventKind, so a
new kind is one handler plus one table entry. Before dispatch every
event draws a party permutation (participants are taken from its head)
and issue events then draw their issue category; outcome draws follow.

Rolls:
  head-to-head candidates:  N(trait + charisma//2, 3)
  head-to-head leaders:     N(trait + charisma//2 + event_handling, 3)
  scandal:                  N(trait + charisma//2, 5) + event_handling, pass >= 30
  prank:                    N(trait + charisma//2, 5), pass >= 20
  issue disclosure:         N(trait + charisma//2, 5), pass >= 15

A head-to-head tie changes nothing. All trait writes clamp to [0, 100].
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from hustings.engine.influence import OpinionInfluencer
from hustings.engine.random_source import RandomSource
from hustings.models.election import Election
from hustings.models.electorate import Electorate
from hustings.models.event import (
    EventCategory,
    EventKind,
    EventOutcome,
    EventTemplate,
    OutcomeStatus,
    TraitChange,
)
from hustings.models.issue import Issue, IssueCategory, Stance
from hustings.models.party import Candidate
from hustings.models.traits import Characteristic, HasTraits
from hustings.policy.resolver import PolicyResolver


@dataclass
class EventContext:
    """Everything a handler needs to resolve one event."""
    election: Election
    template: EventTemplate
    electorate: Electorate
    day: int
    order: list[int]
    issue: Optional[Issue] = None
    changes: list[TraitChange] = field(default_factory=list)

    def candidates(self, count: int) -> list[Candidate]:
        fielded = self.election.candidates_in(self.electorate)
        return [fielded[i] for i in self.order[:count]]

    def leaders(self, count: int) -> list[Candidate]:
        leaders = self.election.leaders()
        return [leaders[i] for i in self.order[:count]]

    def adjust(self, holder: HasTraits, characteristic: Characteristic, delta: int) -> None:
        before = holder.traits.get(characteristic)
        after = holder.traits.adjust(characteristic, delta)
        self.changes.append(TraitChange(holder.name, characteristic, before, after))

    def outcome(self, status: OutcomeStatus, **kwargs) -> EventOutcome:
        return EventOutcome(
            day=self.day,
            electorate=self.electorate.name,
            kind=self.template.kind,
            status=status,
            issue_code=self.issue.code if self.issue else None,
            issue_category=self.issue.category if self.issue else None,
            trait_changes=tuple(self.changes),
            **kwargs,
        )


Handler = Callable[[EventContext], EventOutcome]


class EventResolver:
    """Resolves scheduled events against election state."""

    def __init__(
        self,
        resolver: PolicyResolver,
        rng: RandomSource,
        influencer: OpinionInfluencer,
    ) -> None:
        self._resolver = resolver
        self._rng = rng
        self._influencer = influencer
        self._handlers: dict[EventKind, Handler] = {
            EventKind.CANDIDATE_DEBATE: self._candidate_debate,
            EventKind.CANDIDATE_SCANDAL: self._candidate_scandal,
            EventKind.CANDIDATE_PRANK: self._candidate_prank,
            EventKind.LEADER_BOUT: self._leader_bout,
            EventKind.LEADER_DEBATE: self._leader_debate,
            EventKind.INTERNATIONAL_ISSUE: self._international_issue,
            EventKind.ISSUE_DISCLOSURE: self._issue_disclosure,
        }

    def resolve(
        self,
        election: Election,
        kind: EventKind,
        electorate: Electorate,
        day: int,
    ) -> EventOutcome:
        """Resolve one event in an electorate and mutate state accordingly."""
        template = election.event(kind)
        order = self._rng.permutation(len(election.parties))
        issue = None
        if template.category == EventCategory.ISSUE_RELATED:
            issue = self._draw_issue(election)
        ctx = EventContext(
            election=election,
            template=template,
            electorate=electorate,
            day=day,
            order=order,
            issue=issue,
        )
        return self._handlers[kind](ctx)

    def _draw_issue(self, election: Election) -> Issue:
        categories = list(IssueCategory)
        category = categories[self._rng.uniform(0, len(categories) - 1)]
        for issue in election.issues:
            if issue.category == category:
                return issue
        raise KeyError(f"Election has no issue for {category.value!r}")

    # ------------------------------------------------------------------
    # Rolls
    # ------------------------------------------------------------------

    def _roll(
        self,
        person: HasTraits,
        impacted: Characteristic,
        stddev: float,
        modifier: int = 0,
    ) -> int:
        center = (
            person.traits.get(impacted)
            + person.traits.get(Characteristic.CHARISMA) // 2
            + modifier
        )
        return self._rng.normal_round(center, stddev)

    def _leader_rolls(
        self, ctx: EventContext
    ) -> tuple[Candidate, Candidate, int, int]:
        first, second = ctx.leaders(2)
        impacted = ctx.template.impacted_trait
        stddev = self._resolver.head_to_head_stddev()
        roll_1 = self._roll(first, impacted, stddev, first.party.event_handling)
        roll_2 = self._roll(second, impacted, stddev, second.party.event_handling)
        return first, second, roll_1, roll_2

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _candidate_debate(self, ctx: EventContext) -> EventOutcome:
        first, second = ctx.candidates(2)
        impacted = ctx.template.impacted_trait
        stddev = self._resolver.head_to_head_stddev()
        roll_1 = self._roll(first, impacted, stddev)
        roll_2 = self._roll(second, impacted, stddev)
        names = (first.name, second.name)

        if roll_1 == roll_2:
            return ctx.outcome(OutcomeStatus.DRAWN, participants=names, rolls=(roll_1, roll_2))
        winner, loser = (first, second) if roll_1 > roll_2 else (second, first)

        ctx.adjust(winner, impacted, ctx.template.impact)
        ctx.adjust(winner, Characteristic.POPULARITY, ctx.template.impact)
        self._influencer.influence_electorate(ctx.electorate, winner.stances, True)
        return ctx.outcome(
            OutcomeStatus.WON,
            participants=names,
            winner=winner.name,
            loser=loser.name,
            rolls=(roll_1, roll_2),
            influenced=(ctx.electorate.name,),
        )

    def _candidate_scandal(self, ctx: EventContext) -> EventOutcome:
        (candidate,) = ctx.candidates(1)
        impacted = ctx.template.impacted_trait
        impact = ctx.template.impact
        handling = candidate.party.event_handling
        roll = self._roll(candidate, impacted, self._resolver.solo_stddev()) + handling

        if roll >= self._resolver.pass_roll(EventKind.CANDIDATE_SCANDAL):
            # Handled well: the hit is softened and charisma grows.
            ctx.adjust(candidate, impacted, -(impact - handling))
            ctx.adjust(candidate, Characteristic.CHARISMA, impact)
            status = OutcomeStatus.PASSED
        else:
            ctx.adjust(candidate, impacted, -impact)
            status = OutcomeStatus.FAILED
        return ctx.outcome(status, participants=(candidate.name,), rolls=(roll,))

    def _candidate_prank(self, ctx: EventContext) -> EventOutcome:
        (candidate,) = ctx.candidates(1)
        impacted = ctx.template.impacted_trait
        impact = ctx.template.impact
        roll = self._roll(candidate, impacted, self._resolver.solo_stddev())

        if roll >= self._resolver.pass_roll(EventKind.CANDIDATE_PRANK):
            ctx.adjust(candidate, impacted, impact)
            ctx.adjust(candidate, Characteristic.CHARISMA, impact)
            status = OutcomeStatus.PASSED
        else:
            ctx.adjust(candidate, impacted, -impact)
            status = OutcomeStatus.FAILED
        return ctx.outcome(status, participants=(candidate.name,), rolls=(roll,))

    def _leader_bout(self, ctx: EventContext) -> EventOutcome:
        first, second, roll_1, roll_2 = self._leader_rolls(ctx)
        names = (first.name, second.name)
        if roll_1 == roll_2:
            return ctx.outcome(OutcomeStatus.DRAWN, participants=names, rolls=(roll_1, roll_2))
        winner, loser = (first, second) if roll_1 > roll_2 else (second, first)

        impact = ctx.template.impact
        ctx.adjust(winner, ctx.template.impacted_trait, impact)
        ctx.adjust(loser, ctx.template.impacted_trait, impact // 2)
        return ctx.outcome(
            OutcomeStatus.WON,
            participants=names,
            winner=winner.name,
            loser=loser.name,
            rolls=(roll_1, roll_2),
        )

    def _leader_debate(self, ctx: EventContext) -> EventOutcome:
        first, second, roll_1, roll_2 = self._leader_rolls(ctx)
        names = (first.name, second.name)
        if roll_1 == roll_2:
            return ctx.outcome(OutcomeStatus.DRAWN, participants=names, rolls=(roll_1, roll_2))
        winner, loser = (first, second) if roll_1 > roll_2 else (second, first)

        impact = ctx.template.impact
        ctx.adjust(winner, ctx.template.impacted_trait, impact)
        ctx.adjust(winner, Characteristic.POPULARITY, impact)
        targets = ctx.election.electorates
        self._influencer.influence(targets, winner.stances, True)
        return ctx.outcome(
            OutcomeStatus.WON,
            participants=names,
            winner=winner.name,
            loser=loser.name,
            rolls=(roll_1, roll_2),
            influenced=tuple(e.name for e in targets),
        )

    def _international_issue(self, ctx: EventContext) -> EventOutcome:
        check = self._rng.uniform(1, self._resolver.international_check_sides())
        if check != self._resolver.international_fire_face():
            return ctx.outcome(OutcomeStatus.NO_EFFECT, rolls=(check,))

        significance = self._resolver.synthetic_significance()
        approach = self._resolver.synthetic_approach()
        foreign = Stance(
            ctx.issue,
            self._rng.uniform(significance.low, significance.high),
            self._rng.uniform(approach.low, approach.high),
        )
        self._influencer.influence_stance(ctx.electorate, foreign, True)
        return ctx.outcome(
            OutcomeStatus.INFLUENCED,
            rolls=(check,),
            influenced=(ctx.electorate.name,),
        )

    def _issue_disclosure(self, ctx: EventContext) -> EventOutcome:
        (candidate,) = ctx.candidates(1)
        impacted = ctx.template.impacted_trait
        impact = ctx.template.impact
        roll = self._roll(candidate, impacted, self._resolver.solo_stddev())

        positive = roll >= self._resolver.pass_roll(EventKind.ISSUE_DISCLOSURE)
        ctx.adjust(candidate, impacted, impact if positive else -impact)
        disclosed = candidate.stance_for(ctx.issue.category)
        self._influencer.influence_stance(ctx.electorate, disclosed, positive)
        return ctx.outcome(
            OutcomeStatus.PASSED if positive else OutcomeStatus.FAILED,
            participants=(candidate.name,),
            rolls=(roll,),
            influenced=(ctx.electorate.name,),
        )
