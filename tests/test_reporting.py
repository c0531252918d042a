"""Tests for reporting: event headlines, detail lines and the verdict text."""

from hustings.engine.campaign import CampaignReport
from hustings.models.event import EventKind, EventOutcome, OutcomeStatus
from hustings.reporting.formatter import (
    OutcomeFormatter,
    format_campaign,
    format_overview,
    format_verdict,
)
from hustings.tally.aggregator import ElectionVerdict

from campaign_helpers import make_election


def _outcome(kind: EventKind, status: OutcomeStatus, **kw) -> EventOutcome:
    return EventOutcome(day=1, electorate="Alpha", kind=kind, status=status, **kw)


class TestHeadlines:
    def test_debate_names_both_candidates(self) -> None:
        formatter = OutcomeFormatter(make_election())
        outcome = _outcome(
            EventKind.CANDIDATE_DEBATE, OutcomeStatus.DRAWN,
            participants=("Candidate 0-Alpha", "Candidate 2-Alpha"),
        )
        assert formatter.headline(outcome) == (
            "Candidate 0-Alpha & Candidate 2-Alpha have decided to have a debate"
        )

    def test_international_names_electorate_and_issue(self) -> None:
        formatter = OutcomeFormatter(make_election())
        outcome = _outcome(
            EventKind.INTERNATIONAL_ISSUE, OutcomeStatus.NO_EFFECT,
            issue_code="Global Warming",
        )
        assert formatter.headline(outcome) == (
            "Alpha has observed how other countries are handling the Global Warming issue."
        )


class TestDetails:
    def test_debate_winner_credits_party(self) -> None:
        formatter = OutcomeFormatter(make_election())
        outcome = _outcome(
            EventKind.CANDIDATE_DEBATE, OutcomeStatus.WON,
            participants=("Candidate 0-Alpha", "Candidate 1-Alpha"),
            winner="Candidate 1-Alpha", loser="Candidate 0-Alpha",
        )
        lines = formatter.format(outcome)
        assert lines[1] == "Candidate 1-Alpha has won the debate for Party 1!"

    def test_drawn_bout(self) -> None:
        formatter = OutcomeFormatter(make_election())
        outcome = _outcome(
            EventKind.LEADER_BOUT, OutcomeStatus.DRAWN,
            participants=("Leader 0", "Leader 1"),
        )
        assert "There was no clear winner of the bout!" in formatter.format(outcome)

    def test_failed_scandal(self) -> None:
        formatter = OutcomeFormatter(make_election())
        outcome = _outcome(
            EventKind.CANDIDATE_SCANDAL, OutcomeStatus.FAILED,
            participants=("Candidate 2-Alpha",),
        )
        assert formatter.format(outcome)[1] == (
            "Candidate 2-Alpha has not been able to explain themselves."
        )


class TestCampaignNarrative:
    def test_quiet_days_reported(self) -> None:
        election = make_election(days=2)
        report = CampaignReport(quiet_days=[(2, "Alpha"), (1, "Alpha")])
        lines = format_campaign(election, report)
        assert lines[0] == "CAMPAIGNING HAS STARTED"
        assert lines[1] == "----- 2 day(s) until the election -----"
        assert lines.count("Nothing happened in Alpha today") == 2
        assert lines[-1] == "CAMPAIGNING HAS FINISHED"

    def test_overview_lists_parties_and_clusters(self) -> None:
        lines = format_overview(make_election(clusters=2))
        assert "Party 1: Party 0" in lines
        assert "Alpha (Population: 2000)" in lines
        assert any(line.startswith("  Cluster #2 (1000 people)") for line in lines)


class TestVerdict:
    def test_winner_and_prime_minister(self) -> None:
        verdict = ElectionVerdict(
            hung=False,
            winning_party="Party 1",
            elected_leader="Leader 1",
            seats={"Party 0": 1, "Party 1": 3},
        )
        lines = format_verdict(verdict)
        assert "Party 1 has 3 candidate(s) elected in their electorate." in lines
        assert lines[-2] == "Party 1 has won the election!"
        assert lines[-1] == "Leader 1 has been elected as Prime Minister!"

    def test_hung_parliament(self) -> None:
        verdict = ElectionVerdict(hung=True, seats={"Party 0": 2, "Party 1": 2})
        assert format_verdict(verdict)[-1] == (
            "THIS HAS RESULTED IN A HUNG PARLIAMENT, NO ONE HAS BEEN ELECTED PRIME MINISTER"
        )
