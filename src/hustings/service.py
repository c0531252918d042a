"""Hustings service: unified facade for running a simulated election.

This is the primary interface for programmatic access to Hustings.
It orchestrates all phases in their fixed order:
- Generation (electorates, clusters, parties, leaders, candidates)
- Campaign (scheduled events, resolution, opinion influence, coattails)
- Tally (cluster and electorate apportionment, seat awards)
- Aggregation (clear winner or hung parliament)

Every phase draws from one RandomSource seeded per run. All operations
return a ServiceResult; precondition failures are reported as errors
rather than raised, so callers never see a half-run election.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from hustings.catalog import Catalog
from hustings.engine.campaign import CampaignReport, CampaignRunner
from hustings.engine.random_source import RandomSource
from hustings.generation.generator import ElectionGenerator
from hustings.models.election import Election
from hustings.persistence.event_log import CampaignLog
from hustings.persistence.snapshot import election_snapshot
from hustings.policy.resolver import PolicyResolver
from hustings.roster import Roster
from hustings.tally.aggregator import ElectionVerdict, ResultAggregator
from hustings.tally.engine import ElectorateTally, VoteTallyEngine


@dataclass(frozen=True)
class ServiceResult:
    """Result of a service operation."""
    success: bool
    errors: list[str] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class SimulationRun:
    """Everything produced by one simulated election."""
    seed: Optional[int]
    election: Election
    campaign: CampaignReport
    tallies: list[ElectorateTally]
    verdict: ElectionVerdict

    def snapshot(self) -> dict[str, Any]:
        return election_snapshot(self.election, self.verdict, self.seed)


class CampaignService:
    """Election simulation facade.

    Usage:
        service = CampaignService.from_config_dir(config_dir)
        result = service.simulate(electorates=5, days=10, seed=42)
        run = result.data["run"]
    """

    def __init__(
        self,
        resolver: PolicyResolver,
        catalog: Catalog,
        roster: Roster,
        log: Optional[CampaignLog] = None,
    ) -> None:
        self._resolver = resolver
        self._catalog = catalog
        self._roster = roster
        self._log = log

    @classmethod
    def from_config_dir(
        cls,
        config_dir: Path,
        log: Optional[CampaignLog] = None,
    ) -> CampaignService:
        catalog = Catalog.from_config_dir(config_dir)
        return cls(
            PolicyResolver.from_config_dir(config_dir),
            catalog,
            Roster.from_config_dir(config_dir, issue_count=len(catalog.issues)),
            log=log,
        )

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def roster(self) -> Roster:
        return self._roster

    def check_limits(self, electorates: int, days: int) -> list[str]:
        """Validate run arguments against the policy limits."""
        errors: list[str] = []
        e_limits = self._resolver.electorate_limits()
        d_limits = self._resolver.day_limits()
        if not e_limits.contains(electorates):
            errors.append(
                f"electorates must be between {e_limits.low} and {e_limits.high}, "
                f"got {electorates}"
            )
        if not d_limits.contains(days):
            errors.append(
                f"days must be between {d_limits.low} and {d_limits.high}, got {days}"
            )
        if electorates > len(self._roster.electorates):
            errors.append(
                f"roster defines only {len(self._roster.electorates)} electorates"
            )
        return errors

    def generate(
        self,
        electorates: int,
        days: int,
        rng: RandomSource,
    ) -> ServiceResult:
        """Generate an election without campaigning it."""
        errors = self.check_limits(electorates, days)
        if errors:
            return ServiceResult(success=False, errors=errors)
        try:
            generator = ElectionGenerator(self._resolver, rng, self._catalog)
            election = generator.generate(self._roster, electorates, days)
        except ValueError as e:
            return ServiceResult(success=False, errors=[str(e)])
        return ServiceResult(success=True, data={"election": election})

    def simulate(
        self,
        electorates: int,
        days: int,
        seed: Optional[int] = None,
    ) -> ServiceResult:
        """Generate, campaign, tally and decide one election."""
        rng = RandomSource(seed)
        generated = self.generate(electorates, days, rng)
        if not generated.success:
            return generated
        return self.run_election(generated.data["election"], rng)

    def run_election(self, election: Election, rng: RandomSource) -> ServiceResult:
        """Campaign, tally and decide an already generated election.

        The same RandomSource used for generation must be passed in to
        keep the draw stream, and so the outcome, reproducible.
        """
        try:
            campaign = CampaignRunner(self._resolver, rng, log=self._log).run(election)
            tallies = VoteTallyEngine(self._resolver, rng, log=self._log).tally_all(election)
        except ValueError as e:
            return ServiceResult(success=False, errors=[str(e)])
        verdict = ResultAggregator(log=self._log).aggregate(election.parties)

        run = SimulationRun(
            seed=rng.seed,
            election=election,
            campaign=campaign,
            tallies=tallies,
            verdict=verdict,
        )
        return ServiceResult(
            success=True,
            data={
                "run": run,
                "verdict": verdict.as_payload(),
                "events_resolved": len(campaign.outcomes),
            },
        )
