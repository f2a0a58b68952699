"""Constraint validation for manually scheduled fixtures.

One pass over the whole schedule produces every violation, a named boolean
per rule, the rounds that share a weekend, and reset suggestions for
duplicate matchups. Nothing here raises for bad schedule content; problems
are reported, never thrown.
"""

from collections import defaultdict
from datetime import date

from fixturecheck.dates import (
    date_rejection, parse_timestamp, previous_weekend, week_of_month,
    weekend_bucket,
)
from fixturecheck.models import (
    DEFAULT_RULES, STRUCTURAL, TEMPORAL, UNIQUENESS, CompetitionRules,
    ConflictSuggestion, ConstraintViolation, DiagnosticReport, Schedule,
    SlotRef, Team, WeekendCollision, matchup_key,
)

TEAM_PLAYS_ONCE_PER_ROUND = "teamPlaysOnlyOncePerRound"
ROUND_FULLY_SCHEDULED = "playsOncePerRound"
UNIQUE_MATCHUPS = "eachTeamPlaysEachOther"
NO_SELF_PLAY = "noSelfPlay"
DATES_ALLOWED = "datesWithinAllowedRange"
SAME_WEEKEND_PER_ROUND = "sameWeekendPerRound"
NO_CONFLICTING_ROUNDS = "conflictingRounds"
ROUNDS_IN_ORDER = "roundsInOrder"
ROUND1_FIRST_WEEK = "round1InFirstWeek"
NO_ROUNDS_BEFORE_ROUND1 = "noRoundsBeforeRound1"
ALL_FIXTURES_TOUCHED = "allFixturesTouched"


def _fmt_weekend(d: date) -> str:
    return d.strftime("%a %d %b %Y")


def check_constraints(schedule: Schedule, teams: list[Team],
                      rules: CompetitionRules = DEFAULT_RULES,
                      ) -> DiagnosticReport:
    """Validate a schedule against all fixture rules.

    Returns an empty report while nothing has been touched, or while no
    touched slot is complete (both teams and a date).
    """
    touched = [(ref, slot) for ref, slot in schedule.items() if slot.touched]
    completed = [(ref, slot) for ref, slot in touched if slot.is_complete]
    if not completed:
        return DiagnosticReport()

    errors: list[ConstraintViolation] = []
    constraints: dict[str, bool] = {}
    expected_teams = len(teams) if teams else schedule.team_count

    # Each team at most once per round; finished rounds hold every team
    once_per_round = True
    fully_scheduled = True
    for r, round_slots in enumerate(schedule.rounds()):
        seen: set[str] = set()
        for s, slot in enumerate(round_slots):
            if not slot.is_complete:
                continue
            for team in (slot.home, slot.away):
                if team.id in seen:
                    once_per_round = False
                    errors.append(ConstraintViolation(
                        f"Team {team.name} is scheduled multiple times in "
                        f"Round {r + 1}.",
                        STRUCTURAL, SlotRef(r, s),
                    ))
                else:
                    seen.add(team.id)

        round_finished = all(slot.is_complete for slot in round_slots)
        if round_finished and len(seen) != expected_teams:
            fully_scheduled = False
            errors.append(ConstraintViolation(
                f"Round {r + 1} does not have all teams scheduled "
                f"({len(seen)} of {expected_teams}).",
                STRUCTURAL,
            ))

    constraints[ROUND_FULLY_SCHEDULED] = fully_scheduled
    constraints[TEAM_PLAYS_ONCE_PER_ROUND] = once_per_round

    # No self-play, and every pair meets at most once
    unique_matchups = True
    no_self_play = True
    owners: dict[tuple[str, str], SlotRef] = {}
    conflict_map: dict[SlotRef, list[ConflictSuggestion]] = {}

    for ref, slot in completed:
        if slot.home.id == slot.away.id:
            no_self_play = False
            errors.append(ConstraintViolation(
                f"Team {slot.home.name} is playing itself.",
                UNIQUENESS, ref,
            ))
            continue

        key = matchup_key(slot.home.id, slot.away.id)
        owner = owners.get(key)
        if owner is None:
            owners[key] = ref
            continue

        unique_matchups = False
        errors.append(ConstraintViolation(
            f"Duplicate matchup: {slot.describe()} "
            f"(already scheduled in {owner.label()}).",
            UNIQUENESS, ref,
        ))
        conflict_map.setdefault(ref, []).append(
            ConflictSuggestion(reset_target=ref, owner=owner)
        )

    constraints[UNIQUE_MATCHUPS] = unique_matchups
    constraints[NO_SELF_PLAY] = no_self_play

    # Dates: allowed window, and one weekend per round
    valid_dates = True
    same_weekend = True
    round_weekends: dict[int, date] = {}
    round_starts: dict[int, date] = {}

    for ref, slot in touched:
        if not slot.has_teams:
            continue
        if not slot.has_date:
            valid_dates = False
            errors.append(ConstraintViolation(
                f"Missing date for {slot.describe()}.", TEMPORAL, ref,
            ))
            continue

        dt = parse_timestamp(slot.date)
        if dt is None:
            valid_dates = False
            errors.append(ConstraintViolation(
                f"Invalid date for {slot.describe()}: {slot.date!r} is not "
                f"a valid timestamp.",
                TEMPORAL, ref,
            ))
            continue

        reason = date_rejection(dt, rules)
        if reason:
            valid_dates = False
            errors.append(ConstraintViolation(
                f"Invalid date/time for {slot.describe()}: {reason}.",
                TEMPORAL, ref,
            ))

        round_number = ref.round_index + 1
        bucket = weekend_bucket(dt)
        start = round_starts.get(round_number)
        if start is None or dt.date() < start:
            round_starts[round_number] = dt.date()
        first = round_weekends.setdefault(round_number, bucket)
        if first != bucket:
            same_weekend = False
            errors.append(ConstraintViolation(
                f"All fixtures in Round {round_number} must be on the same "
                f"weekend ({_fmt_weekend(first)}).",
                TEMPORAL, ref,
            ))

    constraints[DATES_ALLOWED] = valid_dates
    constraints[SAME_WEEKEND_PER_ROUND] = same_weekend

    # Rounds sharing a weekend
    collisions: list[WeekendCollision] = []
    weekend_rounds: dict[date, list[int]] = defaultdict(list)
    for round_number, bucket in sorted(round_weekends.items()):
        weekend_rounds[bucket].append(round_number)

    for bucket, rounds in weekend_rounds.items():
        for i, r1 in enumerate(rounds):
            for r2 in rounds[i + 1:]:
                collisions.append(WeekendCollision(r1, r2))
                errors.append(ConstraintViolation(
                    f"Rounds {r1} and {r2} share the same weekend "
                    f"({_fmt_weekend(bucket)}).",
                    TEMPORAL,
                ))
    constraints[NO_CONFLICTING_ROUNDS] = not collisions

    # Rounds in chronological order
    in_order = True
    for k in range(2, schedule.round_count + 1):
        prev = round_weekends.get(k - 1)
        curr = round_weekends.get(k)
        if prev is not None and curr is not None and curr <= prev:
            in_order = False
            errors.append(ConstraintViolation(
                f"Round {k} must be after Round {k - 1}.", TEMPORAL,
            ))
    constraints[ROUNDS_IN_ORDER] = in_order

    # Round 1 opens the competition month
    first_week = True
    pre_season_clear = True
    r1_weekend = round_weekends.get(1)
    if r1_weekend is not None:
        # Earliest kick-off of the round, not its weekend bucket
        r1_start = round_starts[1]
        if week_of_month(r1_start) != 1:
            first_week = False
            errors.append(ConstraintViolation(
                f"Round 1 must be in the first week of "
                f"{r1_start:%B} (starts {_fmt_weekend(r1_start)}).",
                TEMPORAL,
            ))

        before = previous_weekend(r1_weekend)
        for round_number in weekend_rounds.get(before, []):
            pre_season_clear = False
            errors.append(ConstraintViolation(
                f"Round {round_number} is on the weekend before Round 1.",
                TEMPORAL,
            ))
    constraints[ROUND1_FIRST_WEEK] = first_week
    constraints[NO_ROUNDS_BEFORE_ROUND1] = pre_season_clear

    constraints[ALL_FIXTURES_TOUCHED] = all(s.touched for s in schedule.slots)

    return DiagnosticReport(
        violations=errors,
        constraints=constraints,
        weekend_collisions=collisions,
        conflict_suggestions=conflict_map,
    )


def format_validation_report(report: DiagnosticReport) -> str:
    """Format a diagnostic report as text."""
    lines = []
    lines.append("=" * 60)
    lines.append("FIXTURE VALIDATION REPORT")
    lines.append("=" * 60)

    if not report.constraints:
        lines.append("\nRESULT: NOT CHECKED (no completed fixtures yet)")
        return "\n".join(lines)

    if report.all_satisfied() and not report.violations:
        lines.append("\nRESULT: VALID (all constraints satisfied)")
    else:
        lines.append(f"\nRESULT: INVALID ({len(report.violations)} violations)")

    lines.append("\n--- CONSTRAINTS ---")
    for name, ok in report.constraints.items():
        lines.append(f"  [{'OK' if ok else '!!'}] {name}")

    if report.violations:
        lines.append(f"\n--- VIOLATIONS ({len(report.violations)}) ---")
        for v in report.violations:
            where = f"[{v.ref.label()}] " if v.ref else ""
            lines.append(f"  {v.category.upper()}: {where}{v.message}")

    if report.conflict_suggestions:
        lines.append("\n--- SUGGESTED RESETS ---")
        for ref in sorted(report.conflict_suggestions):
            for c in report.conflict_suggestions[ref]:
                lines.append(f"  {c.describe()}")

    return "\n".join(lines)
