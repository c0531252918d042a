"""Vote tally engine: two-level apportionment of votes, run after the campaign.

Cluster level: each issue slot of a cluster is won by the candidate
whose stance is closest to the cluster's, adjusted by popularity:

    score = |approach diff| + |significance diff| - popularity // 4

The strictly lowest score wins the slot. Once every slot is decided,
each candidate draws normal_round(population // slots, 3) and multiplies
it by the slots they won; the product is banked into their running
total. Every candidate draws, in registration order, whether they won
a slot or not.

Electorate level: the strictly greatest running total wins the seat.

Ties at either level are broken by the named TieBreak policy. Summed
votes need not equal the cluster population; that drift is accepted
as donkey votes.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Sequence

from hustings.engine.random_source import RandomSource
from hustings.models.election import Election, ElectionPreconditionError
from hustings.models.electorate import Electorate, ElectorateCluster
from hustings.models.issue import Stance
from hustings.models.party import Candidate
from hustings.persistence.event_log import CampaignLog, RecordKind
from hustings.policy.resolver import PolicyResolver


class TieBreak(str, enum.Enum):
    """How equal scores or totals are settled."""
    REGISTRATION_ORDER = "registration_order"  # first-registered party wins


@dataclass(frozen=True)
class ClusterTally:
    """Result of tallying one cluster."""
    index: int
    population: int
    vote_unit: int
    stances_won: dict[str, int] = field(default_factory=dict)
    votes: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ElectorateTally:
    """Result of tallying one electorate."""
    electorate: str
    population: int
    clusters: tuple[ClusterTally, ...]
    totals: dict[str, int]
    winner: str
    winning_party: str

    def as_payload(self) -> dict:
        return {
            "electorate": self.electorate,
            "population": self.population,
            "clusters": [
                {
                    "index": c.index,
                    "population": c.population,
                    "vote_unit": c.vote_unit,
                    "stances_won": dict(c.stances_won),
                    "votes": dict(c.votes),
                }
                for c in self.clusters
            ],
            "totals": dict(self.totals),
            "winner": self.winner,
            "winning_party": self.winning_party,
        }


class VoteTallyEngine:
    """Tallies votes and awards seats."""

    def __init__(
        self,
        resolver: PolicyResolver,
        rng: RandomSource,
        log: Optional[CampaignLog] = None,
        tie_break: TieBreak = TieBreak.REGISTRATION_ORDER,
    ) -> None:
        self._resolver = resolver
        self._rng = rng
        self._log = log
        self._tie_break = tie_break

    @property
    def tie_break(self) -> TieBreak:
        return self._tie_break

    def score(self, candidate: Candidate, candidate_stance: Stance, cluster_stance: Stance) -> int:
        """Distance between a candidate stance and a cluster stance. Lower is closer."""
        return (
            abs(candidate_stance.approach - cluster_stance.approach)
            + abs(candidate_stance.significance - cluster_stance.significance)
            - candidate.popularity // self._resolver.popularity_divisor()
        )

    def stance_slot_winner(
        self,
        candidates: Sequence[Candidate],
        slot: int,
        cluster_stance: Stance,
    ) -> Candidate:
        """The candidate with the strictly lowest score on one issue slot."""
        scored = [
            (self.score(c, c.stances[slot], cluster_stance), c) for c in candidates
        ]
        return self._pick(scored, lowest=True)

    def tally_cluster(
        self,
        candidates: Sequence[Candidate],
        cluster: ElectorateCluster,
        index: int = 0,
    ) -> ClusterTally:
        """Award each issue slot, then bank cluster votes for every candidate."""
        for slot, cluster_stance in enumerate(cluster.stances):
            self.stance_slot_winner(candidates, slot, cluster_stance).record_stance_won()

        won = {c.name: c.stances_won for c in candidates}
        unit = cluster.population // len(cluster.stances)
        stddev = self._resolver.stance_vote_stddev()
        votes = {
            c.name: c.bank_cluster_votes(self._rng.normal_round(unit, stddev))
            for c in candidates
        }
        return ClusterTally(
            index=index,
            population=cluster.population,
            vote_unit=unit,
            stances_won=won,
            votes=votes,
        )

    def tally_electorate(self, election: Election, electorate: Electorate) -> ElectorateTally:
        """Tally every cluster of an electorate and award its seat.

        Raises:
            ElectionPreconditionError: If the electorate has no clusters
                or no candidates.
        """
        if not electorate.clusters:
            raise ElectionPreconditionError(
                [f"{electorate.name}: electorate has no clusters"]
            )
        candidates = election.candidates_in(electorate)
        if not candidates:
            raise ElectionPreconditionError(
                [f"{electorate.name}: no candidates fielded"]
            )
        names = [c.name for c in candidates]
        if len(set(names)) != len(names):
            raise ElectionPreconditionError(
                [f"{electorate.name}: candidate names are not unique: {names}"]
            )

        clusters = tuple(
            self.tally_cluster(candidates, cluster, index)
            for index, cluster in enumerate(electorate.clusters)
        )
        winner = self._pick([(c.total_votes, c) for c in candidates], lowest=False)
        winner.party.record_seat()

        result = ElectorateTally(
            electorate=electorate.name,
            population=electorate.population,
            clusters=clusters,
            totals={c.name: c.total_votes for c in candidates},
            winner=winner.name,
            winning_party=winner.party_name,
        )
        if self._log is not None:
            self._log.record(RecordKind.ELECTORATE_TALLIED, electorate.name, result.as_payload())
        return result

    def tally_all(self, election: Election) -> list[ElectorateTally]:
        """Tally every electorate in load order.

        Raises:
            ElectionPreconditionError: If the election fails validation.
        """
        election.require_valid()
        return [self.tally_electorate(election, e) for e in election.electorates]

    def _pick(self, scored: list[tuple[int, Candidate]], lowest: bool) -> Candidate:
        # Candidates arrive in registration order; only a strict
        # improvement displaces the current best.
        if self._tie_break is not TieBreak.REGISTRATION_ORDER:
            raise ValueError(f"Unsupported tie-break: {self._tie_break}")
        best_value, best = scored[0]
        for value, candidate in scored[1:]:
            if (value < best_value) if lowest else (value > best_value):
                best_value, best = value, candidate
        return best
