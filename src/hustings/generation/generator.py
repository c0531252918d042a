"""Election generator: builds a randomised Election from the roster.

Generation consumes the shared random source in a fixed order:
1. Electorates (roster order, first N). For each electorate, every
   cluster population is drawn first, from uniform(max // 2, max) where
   max = population // clusters_per_electorate; then every cluster
   draws one stance per catalog issue (significance, then approach).
   The electorate population is reset to the sum of its clusters.
2. Parties (roster order). The leader draws its traits, then its
   stances from the party's stance-range template, then the managerial
   team draws its event-handling trait.
3. Candidates, party by party, one per electorate in electorate order.
   Each draws its traits, then its stances from the party template.
"""

from __future__ import annotations

from hustings.catalog import Catalog
from hustings.engine.random_source import RandomSource
from hustings.models.election import Election
from hustings.models.electorate import Electorate, ElectorateCluster
from hustings.models.issue import Stance
from hustings.models.party import Candidate, ManagerialTeam, Party, StanceRange
from hustings.models.traits import Characteristic, TraitSet
from hustings.policy.resolver import IntRange, PolicyResolver
from hustings.roster import ElectorateEntry, PartyEntry, Roster


class ElectionGenerator:
    """Turns a roster into a fully populated Election."""

    def __init__(
        self,
        resolver: PolicyResolver,
        rng: RandomSource,
        catalog: Catalog,
    ) -> None:
        self._resolver = resolver
        self._rng = rng
        self._catalog = catalog

    def generate(self, roster: Roster, electorate_count: int, days: int) -> Election:
        """Generate an election over the first `electorate_count` electorates.

        Raises:
            ValueError: If the roster cannot supply the requested electorates.
            ElectionPreconditionError: If the result is structurally invalid.
        """
        electorates = [
            self._electorate(entry) for entry in roster.first_electorates(electorate_count)
        ]
        parties = [self._party(entry) for entry in roster.parties]
        for entry, party in zip(roster.parties, parties):
            for name, electorate in zip(entry.candidates, electorates):
                party.field_candidate(self._candidate(name, electorate.name, party))

        election = Election(
            issues=self._catalog.issues,
            events=self._catalog.events,
            parties=parties,
            electorates=electorates,
            days=days,
        )
        election.require_valid()
        return election

    # ------------------------------------------------------------------
    # Electorates
    # ------------------------------------------------------------------

    def _electorate(self, entry: ElectorateEntry) -> Electorate:
        count = self._resolver.clusters_per_electorate()
        max_pop = entry.population // count
        electorate = Electorate(name=entry.name, population=entry.population)
        for _ in range(count):
            electorate.add_cluster(
                ElectorateCluster(population=self._rng.uniform(max_pop // 2, max_pop))
            )

        significance = self._resolver.cluster_significance()
        approach = self._resolver.cluster_approach()
        for cluster in electorate.clusters:
            for issue in self._catalog.issues:
                cluster.stances.append(
                    Stance(
                        issue,
                        self._draw(significance),
                        self._draw(approach),
                    )
                )

        electorate.population = electorate.cluster_population()
        return electorate

    # ------------------------------------------------------------------
    # Parties and candidates
    # ------------------------------------------------------------------

    def _party(self, entry: PartyEntry) -> Party:
        leader = Candidate(
            name=entry.leader,
            traits=self._traits(self._resolver.leader_trait_ranges()),
        )
        leader.stances = self._stances(entry.stance_ranges)
        team = ManagerialTeam(
            name=f"{entry.name} Campaign Managers",
            traits=TraitSet({
                Characteristic.EVENT_HANDLING: self._draw(
                    self._resolver.managerial_event_handling()
                ),
            }),
        )
        return Party(
            name=entry.name,
            leader=leader,
            managerial_team=team,
            stance_ranges=list(entry.stance_ranges),
            description=entry.description,
        )

    def _candidate(self, name: str, electorate: str, party: Party) -> Candidate:
        candidate = Candidate(
            name=name,
            traits=self._traits(self._resolver.candidate_trait_ranges()),
            electorate=electorate,
        )
        candidate.stances = self._stances(party.stance_ranges)
        return candidate

    def _traits(self, ranges: dict[Characteristic, IntRange]) -> TraitSet:
        return TraitSet({char: self._draw(span) for char, span in ranges.items()})

    def _stances(self, ranges: tuple[StanceRange, ...] | list[StanceRange]) -> list[Stance]:
        stances = []
        for issue, span in zip(self._catalog.issues, ranges):
            significance = self._rng.uniform(span.sig_min, span.sig_max)
            approach = self._rng.uniform(span.app_min, span.app_max)
            stances.append(Stance(issue, significance, approach))
        return stances

    def _draw(self, span: IntRange) -> int:
        return self._rng.uniform(span.low, span.high)
