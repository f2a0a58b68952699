"""Tests for suggestions.py — matchup suggestions and unfeasible reasons."""

import itertools

import pytest

from fixturecheck.constraints import check_constraints
from fixturecheck.models import (
    ALREADY_PLAYED, UNCLASSIFIED, FixtureSlot, Schedule, SlotRef, Team,
    Trackers, matchup_key,
)
from fixturecheck.suggestions import (
    AWAY, HOME, available_teams, conflict_solutions, free_teams,
    suggest_matchups, unfeasible_matchups,
)
from fixturecheck.trackers import build_trackers


def _teams():
    return [Team(id=c, name=f"Team {c}") for c in "ABCDEF"]


def _put(schedule, teams, r, s, home, away, when="2026-02-07T14:15"):
    by_id = {t.id: t for t in teams}
    schedule.put(SlotRef(r, s), FixtureSlot(
        round_number=r + 1, home=by_id.get(home), away=by_id.get(away),
        date=when, touched=True,
    ))


class TestSuggestMatchups:
    def test_empty_schedule_offers_every_pair(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        out = suggest_matchups(SlotRef(0, 0), teams, build_trackers(schedule, teams))
        assert len(out) == 15
        assert out[0] == "Team A vs Team B"

    def test_excludes_teams_busy_in_round(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        _put(schedule, teams, 0, 0, "A", "B")
        trackers = build_trackers(schedule, teams)
        out = suggest_matchups(SlotRef(0, 1), teams, trackers)
        assert len(out) == 6
        assert all("Team A" not in m and "Team B" not in m for m in out)

    def test_excludes_pairs_played_in_other_rounds(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        _put(schedule, teams, 0, 0, "C", "D")
        trackers = build_trackers(schedule, teams)
        out = suggest_matchups(SlotRef(1, 0), teams, trackers)
        assert "Team C vs Team D" not in out
        assert len(out) == 14

    def test_non_empty_iff_free_unplayed_pair_exists(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        _put(schedule, teams, 0, 0, "A", "B")
        _put(schedule, teams, 0, 1, "C", "D")
        _put(schedule, teams, 1, 0, "A", "E")
        _put(schedule, teams, 1, 1, "B", "F")
        _put(schedule, teams, 2, 0, "E", "F")
        trackers = build_trackers(schedule, teams)
        for r in range(schedule.round_count):
            ref = SlotRef(r, 2)
            free = free_teams(ref, teams, trackers)
            expected = any(
                not trackers.matchups[matchup_key(a.id, b.id)]
                for a, b in itertools.combinations(free, 2)
            )
            assert bool(suggest_matchups(ref, teams, trackers)) == expected


class TestUnfeasible:
    def test_already_played(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        # Round 1 uses C-D; round 2 leaves only C and D free
        _put(schedule, teams, 0, 0, "C", "D")
        _put(schedule, teams, 1, 0, "A", "B")
        _put(schedule, teams, 1, 1, "E", "F", "2026-02-14T14:15")
        trackers = build_trackers(schedule, teams)
        ref = SlotRef(1, 2)
        assert suggest_matchups(ref, teams, trackers) == []
        reasons = unfeasible_matchups(ref, teams, trackers)
        assert [(u.team_a.id, u.team_b.id, u.reason) for u in reasons] == [
            ("C", "D", ALREADY_PLAYED),
        ]

    def test_empty_when_suggestions_exist(self):
        teams = _teams()
        trackers = build_trackers(Schedule.empty(6), teams)
        assert unfeasible_matchups(SlotRef(0, 0), teams, trackers) == []

    def test_unclassified_for_untracked_pair(self):
        teams = _teams()[:2]
        trackers = Trackers(matchups={}, per_round={0: {"A": False, "B": False}})
        ref = SlotRef(0, 0)
        assert suggest_matchups(ref, teams, trackers) == []
        reasons = unfeasible_matchups(ref, teams, trackers)
        assert [u.reason for u in reasons] == [UNCLASSIFIED]


class TestConflictSolutions:
    def test_lookup(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        _put(schedule, teams, 0, 0, "A", "B")
        _put(schedule, teams, 1, 0, "B", "A", "2026-02-14T14:15")
        report = check_constraints(schedule, teams)
        solutions = conflict_solutions(report, SlotRef(1, 0))
        assert [s.owner for s in solutions] == [SlotRef(0, 0)]
        assert conflict_solutions(report, SlotRef(0, 0)) == []


class TestAvailableTeams:
    def test_filters_busy_teams_but_keeps_current_pick(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        _put(schedule, teams, 0, 0, "A", "B")
        _put(schedule, teams, 0, 1, "C", "D")
        trackers = build_trackers(schedule, teams)

        home = available_teams(schedule, teams, trackers, SlotRef(0, 1), HOME)
        assert [t.id for t in home] == ["C", "E", "F"]
        away = available_teams(schedule, teams, trackers, SlotRef(0, 1), AWAY)
        assert [t.id for t in away] == ["D", "E", "F"]
        empty = available_teams(schedule, teams, trackers, SlotRef(0, 2), HOME)
        assert [t.id for t in empty] == ["E", "F"]

    def test_bad_side(self):
        teams = _teams()
        schedule = Schedule.empty(6)
        with pytest.raises(ValueError):
            available_teams(schedule, teams, build_trackers(schedule, teams),
                            SlotRef(0, 0), "neutral")
