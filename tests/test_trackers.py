"""Tests for trackers.py — matchup and per-round team trackers."""

from fixturecheck.models import FixtureSlot, Schedule, SlotRef, Team
from fixturecheck.trackers import (
    build_matchup_tracker, build_round_team_tracker, build_trackers,
)


def _teams():
    return [Team(id=c, name=c) for c in "ABCDEF"]


def _put(schedule, teams, r, s, home, away, touched=True):
    by_id = {t.id: t for t in teams}
    schedule.put(SlotRef(r, s), FixtureSlot(
        round_number=r + 1, home=by_id.get(home), away=by_id.get(away),
        touched=touched,
    ))


class TestMatchupTracker:
    def test_initial_state(self):
        teams = _teams()
        tracker = build_matchup_tracker(Schedule.empty(6), teams)
        assert len(tracker) == 15
        assert not any(tracker.values())

    def test_keys_are_unordered(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        _put(schedule, teams, 2, 1, "E", "B")
        tracker = build_matchup_tracker(schedule, teams)
        assert tracker[("B", "E")] is True
        assert ("E", "B") not in tracker

    def test_ignores_touched_flag(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        _put(schedule, teams, 0, 0, "A", "B", touched=False)
        assert build_matchup_tracker(schedule, teams)[("A", "B")] is True

    def test_half_filled_slot_not_counted(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        _put(schedule, teams, 0, 0, "A", None)
        assert not any(build_matchup_tracker(schedule, teams).values())

    def test_self_play_not_tracked(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        _put(schedule, teams, 0, 0, "A", "A")
        tracker = build_matchup_tracker(schedule, teams)
        assert len(tracker) == 15
        assert not any(tracker.values())


class TestRoundTeamTracker:
    def test_marks_both_teams_in_round_only(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        _put(schedule, teams, 1, 2, "C", "F")
        tracker = build_round_team_tracker(schedule, teams)
        assert sorted(tracker) == [0, 1, 2, 3, 4]
        assert tracker[1] == {"A": False, "B": False, "C": True,
                              "D": False, "E": False, "F": True}
        assert not any(tracker[0].values())


class TestRecompute:
    def test_idempotent_and_order_independent(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        _put(schedule, teams, 0, 0, "A", "B")
        _put(schedule, teams, 3, 1, "C", "D")
        first = build_trackers(schedule, teams)
        assert build_trackers(schedule, teams) == first

        reordered = Schedule.empty(6)
        _put(reordered, teams, 3, 1, "C", "D")
        _put(reordered, teams, 0, 0, "A", "B")
        assert build_trackers(reordered, teams) == first
