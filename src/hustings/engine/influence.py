"""Opinion influencer: moves cluster approaches toward or away from an actor.

Two matching policies, used by different callers:
- Stance vector (a candidate's or leader's full stance list): a cluster
  stance is matched to the actor stance with the same issue category.
- Single stance (a synthesised international stance, or one stance a
  candidate discloses): a cluster stance is matched by exact issue code.

For every matched cluster stance a step of uniform(1, 3) is drawn.
Positive influence moves the cluster approach toward the actor's
approach (down when the cluster is above it, otherwise up); negative
influence moves it the opposite way. Writes go through the clamped
approach setter.

Draw order: electorates in the order given, clusters in order, cluster
stances in catalog order, one draw per match.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Union

from hustings.engine.random_source import RandomSource
from hustings.models.electorate import Electorate
from hustings.models.issue import Stance
from hustings.policy.resolver import PolicyResolver


class OpinionInfluencer:
    """Propagates an actor's stances into electorate clusters."""

    def __init__(self, resolver: PolicyResolver, rng: RandomSource) -> None:
        self._resolver = resolver
        self._rng = rng

    def influence(
        self,
        electorates: Iterable[Electorate],
        actor: Union[Stance, Sequence[Stance]],
        positive: bool,
    ) -> int:
        """Influence every cluster of every target electorate.

        A single Stance uses exact-code matching; a stance sequence uses
        category matching. Returns the number of cluster stances moved.
        """
        moved = 0
        for electorate in electorates:
            if isinstance(actor, Stance):
                moved += self.influence_stance(electorate, actor, positive)
            else:
                moved += self.influence_electorate(electorate, actor, positive)
        return moved

    def influence_electorate(
        self,
        electorate: Electorate,
        actor_stances: Sequence[Stance],
        positive: bool,
    ) -> int:
        """Category-matched influence from a full stance vector."""
        moved = 0
        for cluster in electorate.clusters:
            for cluster_stance in cluster.stances:
                for actor_stance in actor_stances:
                    if cluster_stance.category == actor_stance.category:
                        self._move(cluster_stance, actor_stance, positive)
                        moved += 1
        return moved

    def influence_stance(
        self,
        electorate: Electorate,
        stance: Stance,
        positive: bool,
    ) -> int:
        """Exact-code matched influence from a single stance."""
        moved = 0
        for cluster in electorate.clusters:
            for cluster_stance in cluster.stances:
                if cluster_stance.issue.code == stance.issue.code:
                    self._move(cluster_stance, stance, positive)
                    moved += 1
        return moved

    def _move(
        self,
        cluster_stance: Stance,
        actor_stance: Stance,
        positive: bool,
    ) -> None:
        step_range = self._resolver.influence_step()
        step = self._rng.uniform(step_range.low, step_range.high)
        above = cluster_stance.approach > actor_stance.approach
        # Toward the actor when positive, away when negative.
        if above == positive:
            step = -step
        cluster_stance.shift(step)
