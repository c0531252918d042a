"""Tests for the event scheduler: roll mapping and the one-leader-event-per-day rule."""

import pytest

from hustings.engine.random_source import RandomSource
from hustings.engine.scheduler import EventScheduler
from hustings.models.event import EventKind

from campaign_helpers import ScriptedRandom, load_resolver


@pytest.fixture
def resolver():
    return load_resolver()


class TestRollMapping:
    @pytest.mark.parametrize("roll, kind", [
        (1, EventKind.CANDIDATE_DEBATE),
        (9, EventKind.CANDIDATE_DEBATE),
        (10, EventKind.CANDIDATE_SCANDAL),
        (11, EventKind.CANDIDATE_PRANK),
        (12, EventKind.CANDIDATE_PRANK),
        (13, EventKind.LEADER_BOUT),
        (14, EventKind.LEADER_DEBATE),
        (15, EventKind.INTERNATIONAL_ISSUE),
        (16, EventKind.INTERNATIONAL_ISSUE),
        (17, EventKind.ISSUE_DISCLOSURE),
        (20, EventKind.ISSUE_DISCLOSURE),
    ])
    def test_threshold_table(self, resolver, roll: int, kind: EventKind) -> None:
        scheduler = EventScheduler(resolver, RandomSource(seed=0))
        assert scheduler.kind_for_roll(roll) == kind

    def test_roll_past_table_rejected(self, resolver) -> None:
        scheduler = EventScheduler(resolver, RandomSource(seed=0))
        with pytest.raises(ValueError):
            scheduler.kind_for_roll(21)


class TestCoin:
    def test_non_firing_face_means_no_event(self, resolver) -> None:
        rng = ScriptedRandom(uniforms=[1])
        scheduler = EventScheduler(resolver, rng)
        assert scheduler.next_event(scheduler.begin_day(3)) is None
        assert rng.calls == [("uniform", 1, 2)]

    def test_firing_face_rolls_the_table(self, resolver) -> None:
        rng = ScriptedRandom(uniforms=[2, 10])
        scheduler = EventScheduler(resolver, rng)
        assert scheduler.next_event(scheduler.begin_day(3)) == EventKind.CANDIDATE_SCANDAL
        assert rng.calls == [("uniform", 1, 2), ("uniform", 1, 20)]


class TestLeaderSlot:
    """Across one day at most one leader event is scheduled."""

    def test_first_leader_event_claims_slot(self, resolver) -> None:
        rng = ScriptedRandom(uniforms=[2, 13])
        scheduler = EventScheduler(resolver, rng)
        ledger = scheduler.begin_day(1)
        assert scheduler.next_event(ledger) == EventKind.LEADER_BOUT
        assert ledger.leader_event_used is True

    def test_used_slot_rerolls_without_new_coin(self, resolver) -> None:
        # Coin fires, roll 14 (leader debate) is refused, 13 refused, 5 accepted.
        rng = ScriptedRandom(uniforms=[2, 13, 2, 14, 13, 5])
        scheduler = EventScheduler(resolver, rng)
        ledger = scheduler.begin_day(1)
        assert scheduler.next_event(ledger) == EventKind.LEADER_BOUT
        assert scheduler.next_event(ledger) == EventKind.CANDIDATE_DEBATE
        assert rng.exhausted
        assert [c for c in rng.calls if c == ("uniform", 1, 2)] == [("uniform", 1, 2)] * 2

    def test_new_day_resets_slot(self, resolver) -> None:
        rng = ScriptedRandom(uniforms=[2, 14, 2, 14])
        scheduler = EventScheduler(resolver, rng)
        assert scheduler.next_event(scheduler.begin_day(2)) == EventKind.LEADER_DEBATE
        assert scheduler.next_event(scheduler.begin_day(1)) == EventKind.LEADER_DEBATE

    def test_random_days_never_exceed_one_leader_event(self, resolver) -> None:
        for seed in range(200):
            scheduler = EventScheduler(resolver, RandomSource(seed=seed))
            ledger = scheduler.begin_day(1)
            kinds = [scheduler.next_event(ledger) for _ in range(10)]
            leader_events = [k for k in kinds if k is not None and k.is_leader_event]
            assert len(leader_events) <= 1
