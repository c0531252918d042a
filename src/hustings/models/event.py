"""Campaign event templates and structured event outcomes.

There are seven event kinds. Their position in EventKind is the event id
used by the scheduler's roll table (0 = candidate debate ... 6 = issue
disclosure). Templates are immutable catalog entries; everything decided
while resolving an event (participants, rolls, issue, trait changes)
is carried by an EventOutcome record instead of being written back onto
the template.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional

from hustings.models.issue import IssueCategory
from hustings.models.traits import Characteristic


class EventCategory(str, enum.Enum):
    """Broad grouping of event kinds."""
    DEBATE = "debate"
    CANDIDATE_RELATED = "candidate_related"
    LEADER_RELATED = "leader_related"
    ISSUE_RELATED = "issue_related"


class EventKind(str, enum.Enum):
    """The seven event kinds, in event-id order."""
    CANDIDATE_DEBATE = "candidate_debate"
    CANDIDATE_SCANDAL = "candidate_scandal"
    CANDIDATE_PRANK = "candidate_prank"
    LEADER_BOUT = "leader_bout"
    LEADER_DEBATE = "leader_debate"
    INTERNATIONAL_ISSUE = "international_issue"
    ISSUE_DISCLOSURE = "issue_disclosure"

    @property
    def event_id(self) -> int:
        return list(EventKind).index(self)

    @property
    def is_leader_event(self) -> bool:
        return self in LEADER_EVENT_KINDS

    @property
    def expected_category(self) -> EventCategory:
        return EXPECTED_CATEGORIES[self]


LEADER_EVENT_KINDS = frozenset({EventKind.LEADER_BOUT, EventKind.LEADER_DEBATE})

# Kinds resolved by a single roll against a configured pass threshold.
SOLO_ROLL_KINDS = frozenset({
    EventKind.CANDIDATE_SCANDAL,
    EventKind.CANDIDATE_PRANK,
    EventKind.ISSUE_DISCLOSURE,
})

# Issue-related kinds need an issue drawn before they resolve.
EXPECTED_CATEGORIES: dict[EventKind, EventCategory] = {
    EventKind.CANDIDATE_DEBATE: EventCategory.DEBATE,
    EventKind.CANDIDATE_SCANDAL: EventCategory.CANDIDATE_RELATED,
    EventKind.CANDIDATE_PRANK: EventCategory.CANDIDATE_RELATED,
    EventKind.LEADER_BOUT: EventCategory.LEADER_RELATED,
    EventKind.LEADER_DEBATE: EventCategory.LEADER_RELATED,
    EventKind.INTERNATIONAL_ISSUE: EventCategory.ISSUE_RELATED,
    EventKind.ISSUE_DISCLOSURE: EventCategory.ISSUE_RELATED,
}


@dataclass(frozen=True)
class EventTemplate:
    """A catalog event: what it is, how hard it hits and what it hits."""
    kind: EventKind
    category: EventCategory
    message: str
    impact: int
    impacted_trait: Characteristic


class OutcomeStatus(str, enum.Enum):
    """How an event resolved."""
    WON = "won"              # head-to-head with a strict winner
    DRAWN = "drawn"          # head-to-head tie: no state change
    PASSED = "passed"        # solo roll met the pass threshold
    FAILED = "failed"        # solo roll missed the pass threshold
    INFLUENCED = "influenced"  # issue event that moved opinion
    NO_EFFECT = "no_effect"  # issue event that did nothing


@dataclass(frozen=True)
class TraitChange:
    """A single clamped trait update made while resolving an event."""
    holder: str
    characteristic: Characteristic
    before: int
    after: int

    @property
    def delta(self) -> int:
        return self.after - self.before


@dataclass(frozen=True)
class EventOutcome:
    """Structured record of one resolved event.

    Consumed by the formatting collaborator and the campaign log;
    resolution logic never formats text itself.
    """
    day: int
    electorate: str
    kind: EventKind
    status: OutcomeStatus
    participants: tuple[str, ...] = ()
    winner: Optional[str] = None
    loser: Optional[str] = None
    issue_code: Optional[str] = None
    issue_category: Optional[IssueCategory] = None
    rolls: tuple[int, ...] = ()
    influenced: tuple[str, ...] = ()
    trait_changes: tuple[TraitChange, ...] = field(default_factory=tuple)

    @property
    def is_leader_event(self) -> bool:
        return self.kind.is_leader_event

    def as_payload(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "electorate": self.electorate,
            "kind": self.kind.value,
            "status": self.status.value,
            "participants": list(self.participants),
            "winner": self.winner,
            "loser": self.loser,
            "issue_code": self.issue_code,
            "issue_category": (
                self.issue_category.value if self.issue_category else None
            ),
            "rolls": list(self.rolls),
            "influenced": list(self.influenced),
            "trait_changes": [
                {
                    "holder": c.holder,
                    "characteristic": c.characteristic.value,
                    "before": c.before,
                    "after": c.after,
                }
                for c in self.trait_changes
            ],
        }
