"""A manual scheduling session.

Every edit (team pick, date pick, reset) mutates the schedule and is
immediately followed by ``recompute``: trackers first, then a full
constraint pass. There is no incremental update.
"""

from datetime import datetime
from typing import Optional, Union

from fixturecheck.constraints import check_constraints
from fixturecheck.models import (
    DEFAULT_RULES, CompetitionRules, ConflictSuggestion, DiagnosticReport,
    FixtureSlot, Schedule, SlotRef, Team, Trackers, UnfeasibleMatchup,
)
from fixturecheck.output import to_records
from fixturecheck.suggestions import (
    AWAY, HOME, available_teams, conflict_solutions, suggest_matchups,
    unfeasible_matchups,
)
from fixturecheck.trackers import build_trackers

DEFAULT_TEAM_COUNT = 6


def select_teams(roster: list[Team], team_ids,
                 team_count: int = DEFAULT_TEAM_COUNT) -> list[Team]:
    """Pick the session's teams from the roster, keeping roster order."""
    wanted = set(team_ids)
    known = {t.id for t in roster}
    unknown = sorted(wanted - known)
    if unknown:
        raise ValueError(f"Unknown team ids: {', '.join(unknown)}")
    if len(wanted) != team_count:
        raise ValueError(
            f"Please select exactly {team_count} teams "
            f"({len(wanted)} selected)."
        )
    return [t for t in roster if t.id in wanted]


def recompute(schedule: Schedule, teams: list[Team],
              rules: CompetitionRules = DEFAULT_RULES,
              ) -> tuple[Trackers, DiagnosticReport]:
    """Rebuild all derived state from the schedule."""
    return build_trackers(schedule, teams), check_constraints(schedule, teams, rules)


class SchedulingSession:
    """Owns the schedule for one roster and keeps its diagnostics current."""

    def __init__(self, teams: list[Team],
                 rules: CompetitionRules = DEFAULT_RULES,
                 season: Optional[int] = None,
                 schedule: Optional[Schedule] = None):
        self.teams = list(teams)
        self.rules = rules
        self.season = season
        self.schedule = schedule or Schedule.empty(len(self.teams))
        self._by_id = {t.id: t for t in self.teams}
        self.trackers, self.report = recompute(self.schedule, self.teams, rules)

    def _refresh(self) -> None:
        self.trackers, self.report = recompute(
            self.schedule, self.teams, self.rules)

    def pick_team(self, ref: SlotRef, side: str, team_id: str) -> FixtureSlot:
        """Set the home or away team of a slot.

        Venue is cleared on every pick, then taken from the home team's
        stadium once both sides are filled.
        """
        if side not in (HOME, AWAY):
            raise ValueError(f"side must be {HOME!r} or {AWAY!r}, got {side!r}")
        team = self._by_id.get(team_id)
        if team is None:
            raise ValueError(f"Team {team_id} is not part of this session")

        slot = self.schedule.slot(ref)
        if side == HOME:
            slot.home = team
        else:
            slot.away = team
        slot.stadium = None
        slot.location = ""
        slot.touched = True

        if slot.has_teams and slot.home.stadium is not None:
            slot.stadium = slot.home.stadium
            slot.location = slot.home.stadium.city

        self._refresh()
        return slot

    def set_date(self, ref: SlotRef,
                 value: Union[str, datetime, None]) -> FixtureSlot:
        slot = self.schedule.slot(ref)
        slot.date = value if value is not None else ""
        slot.touched = True
        self._refresh()
        return slot

    def reset(self, ref: SlotRef) -> FixtureSlot:
        """Return a slot to its untouched default."""
        slot = FixtureSlot(round_number=ref.round_index + 1)
        self.schedule.put(ref, slot)
        self._refresh()
        return slot

    def suggestions(self, ref: SlotRef) -> list[str]:
        return suggest_matchups(ref, self.teams, self.trackers)

    def unfeasible(self, ref: SlotRef) -> list[UnfeasibleMatchup]:
        return unfeasible_matchups(ref, self.teams, self.trackers)

    def conflict_solutions(self, ref: SlotRef) -> list[ConflictSuggestion]:
        return conflict_solutions(self.report, ref)

    def available_teams(self, ref: SlotRef, side: str) -> list[Team]:
        return available_teams(self.schedule, self.teams, self.trackers,
                               ref, side)

    def all_constraints_satisfied(self) -> bool:
        return self.report.all_satisfied()

    def ready_for_summary(self) -> bool:
        """True once something has been checked and every rule holds."""
        return bool(self.report.constraints) and self.report.all_satisfied()

    def records(self) -> list[dict]:
        return to_records(self.schedule, self.season)
