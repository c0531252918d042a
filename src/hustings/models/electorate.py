"""Electorate and cluster data models.

An electorate is a voting district split into clusters: static voter
blocks, each with its own population and one stance per catalog issue
(same order as the catalog). Cluster populations are summed into the
electorate population once, at generation time; the campaign never
resynchronises them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hustings.models.issue import IssueCategory, Stance


@dataclass
class ElectorateCluster:
    """A population sub-segment of an electorate."""
    population: int
    stances: list[Stance] = field(default_factory=list)

    def stance_for(self, category: IssueCategory) -> Stance:
        for stance in self.stances:
            if stance.category == category:
                return stance
        raise KeyError(f"Cluster has no stance on {category.value!r}")

    def as_dict(self) -> dict[str, object]:
        return {
            "population": self.population,
            "stances": [s.as_dict() for s in self.stances],
        }


@dataclass
class Electorate:
    """A voting district."""
    name: str
    population: int
    clusters: list[ElectorateCluster] = field(default_factory=list)

    def add_cluster(self, cluster: ElectorateCluster) -> None:
        self.clusters.append(cluster)

    def cluster_population(self) -> int:
        return sum(c.population for c in self.clusters)

    def as_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "population": self.population,
            "clusters": [c.as_dict() for c in self.clusters],
        }
