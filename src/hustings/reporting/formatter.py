"""Reporting: turns structured election state and outcomes into text.

Resolution logic never formats text. Everything a reader sees is built
here from EventOutcome records, tallies and the verdict. Event lines go
through a per-kind handler table; the headline comes from the catalog
template's named placeholders ({first}, {second}, {electorate}, {issue}).
"""

from __future__ import annotations

from typing import Callable, Iterable

from hustings.engine.campaign import CampaignReport
from hustings.models.election import Election
from hustings.models.event import EventKind, EventOutcome, OutcomeStatus
from hustings.models.party import Candidate
from hustings.tally.aggregator import ElectionVerdict
from hustings.tally.engine import ElectorateTally

RULE = "-" * 60
HEAVY_RULE = "=" * 60


def _stance_cells(stances) -> str:
    return "  ".join(f"{s.significance}/{s.approach}".rjust(7) for s in stances)


def _traits_line(person: Candidate) -> str:
    return ", ".join(
        f"{char.label}: {value}" for char, value in person.traits.values.items()
    )


class OutcomeFormatter:
    """Renders EventOutcome records for one election."""

    def __init__(self, election: Election) -> None:
        self._election = election
        self._party_of = {
            person.name: person.party_name
            for person in [*election.leaders(), *election.all_candidates()]
        }
        self._details: dict[EventKind, Callable[[EventOutcome], list[str]]] = {
            EventKind.CANDIDATE_DEBATE: self._debate,
            EventKind.CANDIDATE_SCANDAL: self._scandal,
            EventKind.CANDIDATE_PRANK: self._prank,
            EventKind.LEADER_BOUT: self._bout,
            EventKind.LEADER_DEBATE: self._leader_debate,
            EventKind.INTERNATIONAL_ISSUE: self._international,
            EventKind.ISSUE_DISCLOSURE: self._disclosure,
        }

    def headline(self, outcome: EventOutcome) -> str:
        template = self._election.event(outcome.kind)
        names = list(outcome.participants) + ["", ""]
        return template.message.format(
            first=names[0],
            second=names[1],
            electorate=outcome.electorate,
            issue=outcome.issue_code or "",
        )

    def format(self, outcome: EventOutcome) -> list[str]:
        return [self.headline(outcome), *self._details[outcome.kind](outcome)]

    # ------------------------------------------------------------------
    # Per-kind detail lines
    # ------------------------------------------------------------------

    def _debate(self, outcome: EventOutcome) -> list[str]:
        if outcome.status == OutcomeStatus.DRAWN:
            return ["There was no clear winner of the debate!"]
        return [
            f"{outcome.winner} has won the debate for {self._party_of[outcome.winner]}!",
            f"{outcome.electorate} has been swayed by the points made by "
            f"{outcome.winner} during the debate.",
        ]

    def _scandal(self, outcome: EventOutcome) -> list[str]:
        name = outcome.participants[0]
        if outcome.status == OutcomeStatus.PASSED:
            return [f"{name} was somehow able to talk their way out of the scandal!"]
        return [
            f"{name} has not been able to explain themselves.",
            f"{outcome.electorate} is not happy with how {name} handled this.",
        ]

    def _prank(self, outcome: EventOutcome) -> list[str]:
        name = outcome.participants[0]
        if outcome.status == OutcomeStatus.PASSED:
            return [f"{outcome.electorate} found the prank {name} pulled hilarious!"]
        return [f"{outcome.electorate} was not impressed with the prank {name} pulled."]

    def _bout(self, outcome: EventOutcome) -> list[str]:
        if outcome.status == OutcomeStatus.DRAWN:
            return [
                "There was no clear winner of the bout!",
                "The nation is impressed with both leaders!",
            ]
        return [
            f"{outcome.winner} has won the bout!",
            f"The nation is impressed with how {outcome.winner} handled the fight.",
        ]

    def _leader_debate(self, outcome: EventOutcome) -> list[str]:
        if outcome.status == OutcomeStatus.DRAWN:
            return ["There was no clear winner of the debate!"]
        return [
            f"{outcome.winner} has won the debate for {self._party_of[outcome.winner]}!",
            f"The nation has been swayed by the points made by {outcome.winner} "
            f"during the debate.",
        ]

    def _international(self, outcome: EventOutcome) -> list[str]:
        if outcome.status == OutcomeStatus.INFLUENCED:
            return [
                f"{outcome.electorate} now leans toward international views on "
                f"the {outcome.issue_code} issue."
            ]
        return [
            f"Other countries share {outcome.electorate}'s views, so nothing changes."
        ]

    def _disclosure(self, outcome: EventOutcome) -> list[str]:
        name = outcome.participants[0]
        if outcome.status == OutcomeStatus.PASSED:
            return [
                f"{name} was able to confirm the new information was credible.",
                f"{outcome.electorate} is now more aligned with {name}.",
            ]
        return [
            f"{name} was unable to confirm the new information was credible.",
            f"{outcome.electorate} is now less aligned with {name}.",
        ]


# ----------------------------------------------------------------------
# Whole-report sections
# ----------------------------------------------------------------------

def format_overview(election: Election) -> list[str]:
    """Pre-campaign overview: issues, parties, electorates and clusters."""
    lines = [HEAVY_RULE, "ISSUES", HEAVY_RULE]
    for number, issue in enumerate(election.issues, 1):
        lines.append(f"Issue #{number} - {issue.code} ({issue.category.value})")
        lines.append(f"  {issue.statement}")

    lines += ["", HEAVY_RULE, "PARTIES", HEAVY_RULE]
    for number, party in enumerate(election.parties, 1):
        lines.append(f"Party {number}: {party.name}")
        if party.description:
            lines.append(f"  {party.description}")
        lines.append(f"  Leader: {party.leader.name} ({_traits_line(party.leader)})")
        lines.append(f"  Event handling: {party.event_handling}")
        ranges = "  ".join(
            f"{r.sig_min}-{r.sig_max}/{r.app_min}-{r.app_max}" for r in party.stance_ranges
        )
        lines.append(f"  Ranges (sig/app): {ranges}")
        for candidate in party.candidates.values():
            lines.append(
                f"    {candidate.name} [{candidate.electorate}] "
                f"{_traits_line(candidate)} | {_stance_cells(candidate.stances)}"
            )
        lines.append(RULE)

    lines += ["", HEAVY_RULE, "ELECTORATES", HEAVY_RULE]
    for electorate in election.electorates:
        lines.append(f"{electorate.name} (Population: {electorate.population})")
        for number, cluster in enumerate(electorate.clusters, 1):
            lines.append(
                f"  Cluster #{number} ({cluster.population} people) "
                f"{_stance_cells(cluster.stances)}"
            )
    return lines


def format_campaign(election: Election, report: CampaignReport) -> list[str]:
    """Day-by-day narrative of the campaign."""
    formatter = OutcomeFormatter(election)
    quiet = set(report.quiet_days)
    lines = ["CAMPAIGNING HAS STARTED"]
    for day in range(election.days, 0, -1):
        lines.append(f"----- {day} day(s) until the election -----")
        outcomes = {o.electorate: o for o in report.outcomes_on(day)}
        for electorate in election.electorates:
            lines.append(f"Daily report for {electorate.name}:")
            if (day, electorate.name) in quiet:
                lines.append(f"Nothing happened in {electorate.name} today")
            else:
                lines.extend(formatter.format(outcomes[electorate.name]))
    lines.append("CAMPAIGNING HAS FINISHED")
    return lines


def format_standings(election: Election) -> list[str]:
    """Post-campaign traits of every leader and candidate."""
    lines = [HEAVY_RULE, "POST-CAMPAIGN STANDINGS", HEAVY_RULE]
    for party in election.parties:
        lines.append(f"{party.name} - {party.leader.name} ({_traits_line(party.leader)})")
        for candidate in party.candidates.values():
            lines.append(f"  {candidate.name} [{candidate.electorate}] {_traits_line(candidate)}")
    return lines


def format_tally(tallies: Iterable[ElectorateTally]) -> list[str]:
    lines = ["VOTING HAS STARTED"]
    for tally in tallies:
        lines.append(f"{tally.electorate} (Population: {tally.population}) vote distribution:")
        for cluster in tally.clusters:
            lines.append(f"  Cluster #{cluster.index + 1} (Population: {cluster.population})")
            for name, votes in cluster.votes.items():
                lines.append(f"    {name} votes: {votes}")
        for name, total in tally.totals.items():
            lines.append(f"  {name} total votes: {total}")
        lines.append(
            f"{tally.winner} has won the election in {tally.electorate} "
            f"for the {tally.winning_party} with a total of "
            f"{tally.totals[tally.winner]} votes!"
        )
    lines.append("VOTING HAS FINISHED")
    return lines


def format_verdict(verdict: ElectionVerdict) -> list[str]:
    lines = [HEAVY_RULE, "RESULTS", HEAVY_RULE]
    for party, seats in verdict.seats.items():
        lines.append(f"{party} has {seats} candidate(s) elected in their electorate.")
    if verdict.hung:
        lines.append("Oh no! No party has enough seats to secure parliament!")
        lines.append("THIS HAS RESULTED IN A HUNG PARLIAMENT, NO ONE HAS BEEN ELECTED PRIME MINISTER")
    else:
        lines.append(f"{verdict.winning_party} has won the election!")
        lines.append(f"{verdict.elected_leader} has been elected as Prime Minister!")
    return lines
