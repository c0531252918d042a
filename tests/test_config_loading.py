"""Tests for the configuration loaders: catalog, policy resolver and roster."""

import copy
import json

import pytest

from hustings.catalog import Catalog
from hustings.models.event import EventCategory, EventKind
from hustings.models.issue import IssueCategory
from hustings.models.traits import Characteristic
from hustings.policy.resolver import IntRange, PolicyResolver
from hustings.roster import Roster, validate_roster_data

from campaign_helpers import CONFIG_DIR


def _raw(name: str) -> dict:
    with (CONFIG_DIR / name).open("r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.from_config_dir(CONFIG_DIR)


@pytest.fixture
def resolver() -> PolicyResolver:
    return PolicyResolver.from_config_dir(CONFIG_DIR)


@pytest.fixture
def roster() -> Roster:
    return Roster.from_config_dir(CONFIG_DIR)


class TestCatalog:
    def test_five_issues_in_category_order(self, catalog: Catalog) -> None:
        assert [i.category for i in catalog.issues] == list(IssueCategory)
        assert catalog.issues[0].code == "COVID-19 Financial Situation"

    def test_seven_events_in_id_order(self, catalog: Catalog) -> None:
        assert [t.kind for t in catalog.events] == list(EventKind)

    def test_event_impacts(self, catalog: Catalog) -> None:
        debate = catalog.events[EventKind.CANDIDATE_DEBATE.event_id]
        assert debate.impact == 6
        assert debate.impacted_trait == Characteristic.DEBATING
        assert debate.category == EventCategory.DEBATE
        assert catalog.events[EventKind.CANDIDATE_SCANDAL.event_id].impact == 10
        assert catalog.events[EventKind.INTERNATIONAL_ISSUE.event_id].impact == 7

    def test_issue_lookup(self, catalog: Catalog) -> None:
        assert catalog.issue_for(IssueCategory.HEALTH).code == "Mandatory Vaccines"
        assert catalog.issue_index(IssueCategory.LOGISTICS) == 2

    def test_missing_issue_rejected(self) -> None:
        data = _raw("catalog.json")
        data["issues"] = data["issues"][:4]
        with pytest.raises(ValueError, match="exactly 5 issues"):
            Catalog(data)

    def test_duplicate_category_rejected(self) -> None:
        data = _raw("catalog.json")
        data["issues"][1]["category"] = "economic"
        with pytest.raises(ValueError, match="every issue category"):
            Catalog(data)

    def test_events_out_of_order_rejected(self) -> None:
        data = _raw("catalog.json")
        data["events"][0], data["events"][1] = data["events"][1], data["events"][0]
        with pytest.raises(ValueError, match="event-id order"):
            Catalog(data)

    def test_missing_file_raises(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            Catalog.from_config_dir(tmp_path)

    def test_event_categories_match_kinds(self, catalog: Catalog) -> None:
        for template in catalog.events:
            assert template.category == template.kind.expected_category

    @pytest.mark.parametrize("index, category", [
        (5, "leader_related"),
        (6, "candidate_related"),
        (0, "issue_related"),
    ])
    def test_wrong_event_category_rejected(self, index: int, category: str) -> None:
        data = _raw("catalog.json")
        data["events"][index]["category"] = category
        with pytest.raises(ValueError, match="must be in category"):
            Catalog(data)


class TestPolicyResolver:
    def test_threshold_table(self, resolver: PolicyResolver) -> None:
        assert resolver.event_thresholds() == [
            (9, EventKind.CANDIDATE_DEBATE),
            (10, EventKind.CANDIDATE_SCANDAL),
            (12, EventKind.CANDIDATE_PRANK),
            (13, EventKind.LEADER_BOUT),
            (14, EventKind.LEADER_DEBATE),
            (16, EventKind.INTERNATIONAL_ISSUE),
            (20, EventKind.ISSUE_DISCLOSURE),
        ]

    def test_resolution_parameters(self, resolver: PolicyResolver) -> None:
        assert resolver.head_to_head_stddev() == 3
        assert resolver.solo_stddev() == 5
        assert resolver.pass_roll(EventKind.CANDIDATE_SCANDAL) == 30
        assert resolver.pass_roll(EventKind.CANDIDATE_PRANK) == 20
        assert resolver.pass_roll(EventKind.ISSUE_DISCLOSURE) == 15
        assert resolver.influence_step() == IntRange(1, 3)

    def test_no_pass_roll_for_head_to_head(self, resolver: PolicyResolver) -> None:
        with pytest.raises(KeyError):
            resolver.pass_roll(EventKind.CANDIDATE_DEBATE)

    def test_generation_ranges(self, resolver: PolicyResolver) -> None:
        assert resolver.clusters_per_electorate() == 4
        leader = resolver.leader_trait_ranges()
        assert leader[Characteristic.POPULARITY] == IntRange(25, 30)
        assert Characteristic.DEBATING not in leader
        assert resolver.candidate_trait_ranges()[Characteristic.DEBATING] == IntRange(10, 15)

    def test_limits(self, resolver: PolicyResolver) -> None:
        assert resolver.electorate_limits() == IntRange(1, 10)
        assert resolver.day_limits() == IntRange(1, 30)

    def test_thresholds_must_cover_roll(self) -> None:
        params = _raw("campaign_params.json")
        params["event_schedule"]["thresholds"][-1][0] = 19
        with pytest.raises(ValueError, match="roll_sides"):
            PolicyResolver(params)

    def test_thresholds_must_increase(self) -> None:
        params = _raw("campaign_params.json")
        params["event_schedule"]["thresholds"][2][0] = 10
        with pytest.raises(ValueError, match="strictly increasing"):
            PolicyResolver(params)

    def test_leader_only_thresholds_rejected(self) -> None:
        params = _raw("campaign_params.json")
        params["event_schedule"]["thresholds"] = [[10, "leader_bout"], [20, "leader_debate"]]
        with pytest.raises(ValueError, match="thresholds missing"):
            PolicyResolver(params)

    def test_every_kind_needs_a_threshold(self) -> None:
        params = _raw("campaign_params.json")
        thresholds = params["event_schedule"]["thresholds"]
        del thresholds[-2]  # international_issue
        with pytest.raises(ValueError, match="international_issue"):
            PolicyResolver(params)

    @pytest.mark.parametrize("kind", ["candidate_scandal", "candidate_prank", "issue_disclosure"])
    def test_solo_kinds_need_pass_roll(self, kind: str) -> None:
        params = _raw("campaign_params.json")
        del params["event_resolution"]["pass_rolls"][kind]
        with pytest.raises(ValueError, match=f"pass_rolls missing.*{kind}"):
            PolicyResolver(params)

    def test_missing_section_rejected(self) -> None:
        params = _raw("campaign_params.json")
        del params["tally"]
        with pytest.raises(ValueError, match="tally"):
            PolicyResolver(params)

    def test_inverted_range_rejected(self) -> None:
        params = _raw("campaign_params.json")
        params["influence"]["step"] = [3, 1]
        with pytest.raises(ValueError, match="influence.step"):
            PolicyResolver(params)


class TestRoster:
    def test_parties_in_registration_order(self, roster: Roster) -> None:
        assert [p.name for p in roster.parties] == [
            "Labor Party", "Liberal Party", "Foam Party",
        ]

    def test_every_party_has_five_ranges(self, roster: Roster) -> None:
        for party in roster.parties:
            assert len(party.stance_ranges) == 5

    def test_first_electorates(self, roster: Roster) -> None:
        first = roster.first_electorates(3)
        assert [e.name for e in first] == ["Banks", "Bennelong", "Chisholm"]

    def test_too_many_electorates_rejected(self, roster: Roster) -> None:
        with pytest.raises(ValueError):
            roster.first_electorates(len(roster.electorates) + 1)

    def test_short_template_rejected(self) -> None:
        data = copy.deepcopy(_raw("roster.json"))
        data["parties"][0]["stance_ranges"] = data["parties"][0]["stance_ranges"][:4]
        errors = validate_roster_data(data, issue_count=5)
        assert any("5 rows" in e for e in errors)
        with pytest.raises(ValueError, match="Invalid roster"):
            Roster.from_dict(data)

    def test_bad_range_row_rejected(self) -> None:
        data = copy.deepcopy(_raw("roster.json"))
        data["parties"][1]["stance_ranges"][0] = [9, 1, 0, 100]
        assert validate_roster_data(data, issue_count=5)

    def test_too_few_candidates_rejected(self) -> None:
        data = copy.deepcopy(_raw("roster.json"))
        data["parties"][2]["candidates"] = data["parties"][2]["candidates"][:3]
        errors = validate_roster_data(data, issue_count=5)
        assert any("candidate names" in e for e in errors)

    def test_repeated_person_names_rejected(self) -> None:
        data = copy.deepcopy(_raw("roster.json"))
        data["parties"][1]["candidates"][0] = data["parties"][0]["candidates"][0]
        errors = validate_roster_data(data, issue_count=5)
        assert any("must be unique" in e for e in errors)
        with pytest.raises(ValueError, match="Invalid roster"):
            Roster.from_dict(data)

    def test_leader_reused_as_candidate_rejected(self) -> None:
        data = copy.deepcopy(_raw("roster.json"))
        data["parties"][2]["candidates"][4] = data["parties"][0]["leader"]
        assert any("must be unique" in e for e in validate_roster_data(data, issue_count=5))
