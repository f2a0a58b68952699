"""Tests for models.py — data classes and the schedule grid."""

import pytest

from fixturecheck.models import (
    STRUCTURAL, ConflictSuggestion, ConstraintViolation, DiagnosticReport,
    FixtureSlot, Schedule, SlotRef, Team, matchup_key,
)


class TestMatchupKey:
    def test_unordered(self):
        assert matchup_key("B", "A") == matchup_key("A", "B") == ("A", "B")

    def test_same_team(self):
        assert matchup_key("A", "A") == ("A", "A")


class TestSlotRef:
    def test_key_and_label(self):
        ref = SlotRef(2, 1)
        assert ref.key == "2-1"
        assert ref.label() == "Round 3, Fixture 2"

    def test_hashable_and_ordered(self):
        refs = {SlotRef(1, 0): "x", SlotRef(0, 2): "y"}
        assert refs[SlotRef(1, 0)] == "x"
        assert sorted(refs) == [SlotRef(0, 2), SlotRef(1, 0)]


class TestFixtureSlot:
    def test_defaults(self):
        s = FixtureSlot(round_number=1)
        assert s.home is None and s.away is None and s.stadium is None
        assert s.location == ""
        assert s.date == ""
        assert not s.touched
        assert not s.is_complete

    def test_complete_needs_both_teams_and_date(self):
        a, b = Team("A", "Alpha"), Team("B", "Bravo")
        assert not FixtureSlot(1, home=a, away=b).is_complete
        assert not FixtureSlot(1, home=a, date="2026-02-07T14:00").is_complete
        assert FixtureSlot(1, home=a, away=b, date="2026-02-07T14:00").is_complete

    def test_describe(self):
        assert FixtureSlot(1, home=Team("A", "Alpha")).describe() == "Alpha vs TBD"


class TestSchedule:
    def test_empty_six_teams(self):
        s = Schedule.empty(6)
        assert s.round_count == 5
        assert s.slots_per_round == 3
        assert s.team_count == 6
        assert len(s.slots) == 15
        assert [slot.round_number for slot in s.round(4)] == [5, 5, 5]

    @pytest.mark.parametrize("n", [0, 1, 5, 7])
    def test_rejects_odd_or_tiny(self, n):
        with pytest.raises(ValueError):
            Schedule.empty(n)

    def test_put_and_slot_use_stride(self):
        s = Schedule.empty(4)
        slot = FixtureSlot(round_number=2, location="here")
        s.put(SlotRef(1, 1), slot)
        assert s.slots[3] is slot
        assert s.slot(SlotRef(1, 1)) is slot
        assert s.round(1)[1] is slot

    def test_out_of_range(self):
        s = Schedule.empty(4)
        with pytest.raises(IndexError):
            s.slot(SlotRef(3, 0))
        with pytest.raises(IndexError):
            s.slot(SlotRef(0, 2))

    def test_items_order(self):
        s = Schedule.empty(4)
        refs = [ref for ref, _ in s.items()]
        assert refs == [SlotRef(r, i) for r in range(3) for i in range(2)]


class TestDiagnosticReport:
    def test_empty_is_satisfied(self):
        assert DiagnosticReport().all_satisfied()

    def test_violations_at(self):
        v1 = ConstraintViolation("x", STRUCTURAL, SlotRef(0, 0))
        v2 = ConstraintViolation("y", STRUCTURAL)
        report = DiagnosticReport(violations=[v1, v2])
        assert report.violations_at(SlotRef(0, 0)) == [v1]
        assert v2.to_dict() == {"message": "y"}
        assert v1.to_dict() == {"message": "x", "roundIndex": 0, "slotIndex": 0}

    def test_conflict_describe(self):
        c = ConflictSuggestion(reset_target=SlotRef(1, 0), owner=SlotRef(0, 2))
        assert "Round 2, Fixture 1" in c.describe()
        assert "Round 1, Fixture 3" in c.describe()
