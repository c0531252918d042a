"""Tests for the data models: clamping, stance rules and election validation."""

import random

import pytest

from hustings.models.election import ElectionPreconditionError
from hustings.models.event import EventKind
from hustings.models.issue import Issue, IssueCategory, Stance
from hustings.models.party import Candidate, StanceRange
from hustings.models.traits import Characteristic, TraitSet

from campaign_helpers import make_election


ISSUE = Issue("Sauce Debate", "Fridge or cupboard?", IssueCategory.SOCIAL)


class TestTraitClamping:
    """Every trait value stays in [0, 100] whatever updates are applied."""

    def test_construction_clamps(self) -> None:
        traits = TraitSet({Characteristic.POPULARITY: 140, Characteristic.CHARISMA: -5})
        assert traits.get(Characteristic.POPULARITY) == 100
        assert traits.get(Characteristic.CHARISMA) == 0

    def test_random_update_sequences_stay_bounded(self) -> None:
        rnd = random.Random(1234)
        for _ in range(200):
            traits = TraitSet({Characteristic.POPULARITY: rnd.randint(0, 100)})
            for _ in range(50):
                value = traits.adjust(Characteristic.POPULARITY, rnd.randint(-60, 60))
                assert 0 <= value <= 100

    def test_missing_trait_raises(self) -> None:
        traits = TraitSet({Characteristic.POPULARITY: 10})
        with pytest.raises(KeyError):
            traits.get(Characteristic.DEBATING)
        with pytest.raises(KeyError):
            traits.adjust(Characteristic.DEBATING, 5)

    def test_string_keys_coerced(self) -> None:
        traits = TraitSet({"charisma": 12})
        assert traits.get(Characteristic.CHARISMA) == 12


class TestStance:
    def test_approach_clamped_on_every_write(self) -> None:
        rnd = random.Random(99)
        stance = Stance(ISSUE, 5, 50)
        for _ in range(500):
            stance.shift(rnd.randint(-40, 40))
            assert 0 <= stance.approach <= 100
        stance.approach = 250
        assert stance.approach == 100
        stance.approach = -3
        assert stance.approach == 0

    def test_constructor_clamps_approach(self) -> None:
        assert Stance(ISSUE, 5, 120).approach == 100

    def test_significance_out_of_range_rejected(self) -> None:
        with pytest.raises(ValueError):
            Stance(ISSUE, 0, 50)
        with pytest.raises(ValueError):
            Stance(ISSUE, 10, 50)

    def test_copy_is_independent(self) -> None:
        original = Stance(ISSUE, 4, 40)
        clone = original.copy()
        clone.shift(10)
        assert original.approach == 40
        assert clone.approach == 50


class TestStanceRange:
    def test_from_row(self) -> None:
        r = StanceRange.from_row([2, 5, 30, 60])
        assert r.as_row() == [2, 5, 30, 60]

    def test_short_row_rejected(self) -> None:
        with pytest.raises(ValueError, match="4 values"):
            StanceRange.from_row([2, 5, 30])

    def test_inverted_range_rejected(self) -> None:
        with pytest.raises(ValueError):
            StanceRange(6, 2, 0, 100)
        with pytest.raises(ValueError):
            StanceRange(1, 9, 80, 20)


class TestCandidateCounters:
    def test_bank_cluster_votes_resets_stances_won(self) -> None:
        c = Candidate(name="A", traits=TraitSet({Characteristic.POPULARITY: 10}))
        c.record_stance_won()
        c.record_stance_won()
        assert c.bank_cluster_votes(100) == 200
        assert c.stances_won == 0
        assert c.total_votes == 200
        assert c.bank_cluster_votes(100) == 0
        assert c.total_votes == 200


class TestElectionValidation:
    def test_valid_election_has_no_errors(self) -> None:
        assert make_election().validate() == []

    def test_zero_clusters_rejected(self) -> None:
        election = make_election(clusters=0)
        errors = election.validate()
        assert any("no clusters" in e for e in errors)
        with pytest.raises(ElectionPreconditionError):
            election.require_valid()

    def test_single_party_rejected(self) -> None:
        assert any("at least 2 parties" in e for e in make_election(party_count=1).validate())

    def test_zero_days_rejected(self) -> None:
        assert any("at least 1 day" in e for e in make_election(days=0).validate())

    def test_missing_stance_range_row_rejected(self) -> None:
        election = make_election()
        election.parties[0].stance_ranges = election.parties[0].stance_ranges[:4]
        assert any("stance-range template" in e for e in election.validate())

    def test_missing_event_template_rejected(self) -> None:
        election = make_election()
        election.events = tuple(
            t for t in election.events if t.kind != EventKind.LEADER_BOUT
        )
        assert any("leader_bout" in e for e in election.validate())

    def test_misordered_cluster_stances_rejected(self) -> None:
        election = make_election()
        stances = election.electorates[0].clusters[0].stances
        stances[0], stances[1] = stances[1], stances[0]
        assert any("issue order" in e for e in election.validate())

    def test_error_lists_every_problem(self) -> None:
        election = make_election(party_count=1, days=0)
        with pytest.raises(ElectionPreconditionError) as exc:
            election.require_valid()
        assert len(exc.value.errors) == 2

    def test_repeated_person_names_rejected(self) -> None:
        election = make_election()
        election.parties[0].candidate_for("Alpha").name = "Sam Lee"
        election.parties[1].candidate_for("Alpha").name = "Sam Lee"
        errors = election.validate()
        assert any("unique names" in e and "Sam Lee" in e for e in errors)

    def test_leader_sharing_candidate_name_rejected(self) -> None:
        election = make_election()
        election.parties[2].leader.name = "Candidate 0-Alpha"
        assert any("unique names" in e for e in election.validate())
