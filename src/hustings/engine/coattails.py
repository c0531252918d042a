"""Leader coattails: the post-campaign popularity lift.

Once the campaign is over, every candidate less popular than their own
party leader gains a quarter of the leader's popularity (clamped).
Candidates already at or above their leader are left alone.
"""

from __future__ import annotations

from typing import Iterable

from hustings.models.event import TraitChange
from hustings.models.party import Party
from hustings.models.traits import Characteristic
from hustings.policy.resolver import PolicyResolver


def apply_leader_coattails(
    parties: Iterable[Party],
    resolver: PolicyResolver,
) -> list[TraitChange]:
    """Lift trailing candidates toward their leader. Returns the changes made."""
    divisor = resolver.coattail_divisor()
    changes: list[TraitChange] = []
    for party in parties:
        leader_popularity = party.leader.popularity
        for candidate in party.candidates.values():
            if candidate.popularity >= leader_popularity:
                continue
            before = candidate.popularity
            after = candidate.traits.adjust(
                Characteristic.POPULARITY, leader_popularity // divisor
            )
            changes.append(
                TraitChange(candidate.name, Characteristic.POPULARITY, before, after)
            )
    return changes
