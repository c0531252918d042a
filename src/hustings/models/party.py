"""Party, candidate and managerial-team data models.

Parties are registered in a fixed order; that order is the tie-break
order for every contest in the tally. Each party has:
- A leader (a Candidate without an electorate).
- A managerial team whose event-handling trait boosts crisis rolls.
- A stance-range template (one StanceRange per catalog issue), used
  only when generating stances.
- One fielded candidate per electorate.
- A seats-won counter, incremented only by the tally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from hustings.models.issue import (
    APPROACH_MAX,
    APPROACH_MIN,
    SIGNIFICANCE_MAX,
    SIGNIFICANCE_MIN,
    IssueCategory,
    Stance,
)
from hustings.models.traits import Characteristic, TraitSet


@dataclass(frozen=True)
class StanceRange:
    """Generation bounds for one issue: significance and approach ranges.

    Invariants:
    - SIGNIFICANCE_MIN <= sig_min <= sig_max <= SIGNIFICANCE_MAX
    - APPROACH_MIN <= app_min <= app_max <= APPROACH_MAX
    """
    sig_min: int
    sig_max: int
    app_min: int
    app_max: int

    def __post_init__(self) -> None:
        if not SIGNIFICANCE_MIN <= self.sig_min <= self.sig_max <= SIGNIFICANCE_MAX:
            raise ValueError(
                f"Invalid significance range {self.sig_min}-{self.sig_max}"
            )
        if not APPROACH_MIN <= self.app_min <= self.app_max <= APPROACH_MAX:
            raise ValueError(
                f"Invalid approach range {self.app_min}-{self.app_max}"
            )

    @classmethod
    def from_row(cls, row: list[int]) -> StanceRange:
        if len(row) != 4:
            raise ValueError(
                f"Stance range row must have 4 values "
                f"(sig_min, sig_max, app_min, app_max), got {len(row)}"
            )
        return cls(*(int(v) for v in row))

    def as_row(self) -> list[int]:
        return [self.sig_min, self.sig_max, self.app_min, self.app_max]


@dataclass
class Candidate:
    """A candidate contesting one electorate, or a party leader.

    Vote counters:
    - stances_won: stance slots won in the cluster being tallied; reset
      after each cluster.
    - cluster_votes: votes banked from the last cluster tallied.
    - total_votes: running total across all clusters of the electorate.
    """
    name: str
    traits: TraitSet
    stances: list[Stance] = field(default_factory=list)
    electorate: Optional[str] = None
    party: Optional[Party] = field(default=None, repr=False, compare=False)
    stances_won: int = 0
    cluster_votes: int = 0
    total_votes: int = 0

    @property
    def party_name(self) -> str:
        return self.party.name if self.party is not None else ""

    @property
    def popularity(self) -> int:
        return self.traits.get(Characteristic.POPULARITY)

    def stance_for(self, category: IssueCategory) -> Stance:
        for stance in self.stances:
            if stance.category == category:
                return stance
        raise KeyError(f"{self.name} has no stance on {category.value!r}")

    def record_stance_won(self) -> None:
        self.stances_won += 1

    def bank_cluster_votes(self, votes_per_stance: int) -> int:
        """Convert stances won into cluster votes and reset the counter.

        Returns the votes banked for this cluster.
        """
        self.cluster_votes = votes_per_stance * self.stances_won
        self.total_votes += self.cluster_votes
        self.stances_won = 0
        return self.cluster_votes

    def as_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "party": self.party_name,
            "electorate": self.electorate,
            "traits": self.traits.as_dict(),
            "stances": [s.as_dict() for s in self.stances],
            "total_votes": self.total_votes,
        }


@dataclass
class ManagerialTeam:
    """A party's campaign managers. Carries the event-handling trait."""
    name: str
    traits: TraitSet

    @property
    def event_handling(self) -> int:
        return self.traits.get(Characteristic.EVENT_HANDLING)


@dataclass
class Party:
    """A registered party and everything it fields."""
    name: str
    leader: Candidate
    managerial_team: ManagerialTeam
    stance_ranges: list[StanceRange] = field(default_factory=list)
    candidates: dict[str, Candidate] = field(default_factory=dict)
    seats_won: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        self.leader.party = self

    def field_candidate(self, candidate: Candidate) -> None:
        """Field a candidate in their electorate. One per electorate."""
        if not candidate.electorate:
            raise ValueError(f"Candidate {candidate.name} has no electorate")
        if candidate.electorate in self.candidates:
            raise ValueError(
                f"{self.name} already fields a candidate in {candidate.electorate}"
            )
        candidate.party = self
        self.candidates[candidate.electorate] = candidate

    def candidate_for(self, electorate_name: str) -> Candidate:
        try:
            return self.candidates[electorate_name]
        except KeyError:
            raise KeyError(
                f"{self.name} has no candidate in {electorate_name}"
            ) from None

    @property
    def event_handling(self) -> int:
        return self.managerial_team.event_handling

    def record_seat(self) -> None:
        self.seats_won += 1

    def as_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "leader": self.leader.as_dict(),
            "event_handling": self.event_handling,
            "stance_ranges": [r.as_row() for r in self.stance_ranges],
            "candidates": [c.as_dict() for c in self.candidates.values()],
            "seats_won": self.seats_won,
        }
