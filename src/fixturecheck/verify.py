"""Standalone verifier for saved fixture files.

Reads persistence records (CSV or JSON) back into a schedule and checks
them the way the save endpoint would: record shape first, then every
schedule constraint.
Usage: python -m fixturecheck.verify <fixtures.csv|fixtures.json> [config.yaml]
"""

import csv
import json
import sys
from pathlib import Path

from fixturecheck.config import load_config
from fixturecheck.constraints import check_constraints, format_validation_report
from fixturecheck.models import (
    DEFAULT_RULES, CompetitionRules, DiagnosticReport, FixtureSlot, Schedule,
    SlotRef, Stadium, Team,
)
from fixturecheck.session import select_teams
from fixturecheck.stats import compute_stats, format_stats_report


def parse_records(path: str | Path) -> list[dict]:
    """Load records from a .json file (list or {"fixtures": [...]}) or a .csv.

    Raises ValueError when a JSON file does not hold a list of objects.
    """
    path = Path(path)
    if path.suffix.lower() == ".json":
        with open(path) as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("fixtures", [])
        if not isinstance(data, list):
            raise ValueError(f"{path}: fixtures must be a list of records")
        for i, rec in enumerate(data, 1):
            if not isinstance(rec, dict):
                raise ValueError(f"{path}: fixture {i} is not an object")
        return [dict(rec) for rec in data]

    records = []
    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            rec = {k: (v.strip() if isinstance(v, str) else v)
                   for k, v in row.items() if k}
            for k, v in rec.items():
                if v == "":
                    rec[k] = None
            records.append(rec)
    return records


def _round_number(rec: dict):
    try:
        return int(rec.get("round"))
    except (TypeError, ValueError):
        return None


def teams_for_records(records: list[dict], roster: list[Team],
                      team_count: int) -> list[Team]:
    """The session's teams: the whole roster, or the ones the records name."""
    if len(roster) == team_count:
        return list(roster)
    ids = {
        str(rec[k]) for rec in records
        for k in ("homeTeamId", "awayTeamId") if rec.get(k)
    }
    return select_teams(roster, ids, team_count)


def records_to_schedule(records: list[dict], teams: list[Team],
                        stadiums: dict[str, Stadium] | None = None) -> Schedule:
    """Rebuild a schedule; records fill each round's slots in file order.

    Records with an unusable round number, or beyond a round's last slot,
    are left out.
    """
    stadiums = stadiums or {}
    by_id = {t.id: t for t in teams}
    schedule = Schedule.empty(len(teams))
    next_slot: dict[int, int] = {}

    for rec in records:
        rnd = _round_number(rec)
        if rnd is None or not 1 <= rnd <= schedule.round_count:
            continue
        s = next_slot.get(rnd, 0)
        if s >= schedule.slots_per_round:
            continue
        next_slot[rnd] = s + 1

        home = by_id.get(str(rec["homeTeamId"])) if rec.get("homeTeamId") else None
        away = by_id.get(str(rec["awayTeamId"])) if rec.get("awayTeamId") else None
        stadium = stadiums.get(str(rec.get("stadiumId"))) if rec.get("stadiumId") else None
        schedule.put(SlotRef(rnd - 1, s), FixtureSlot(
            round_number=rnd,
            home=home,
            away=away,
            stadium=stadium,
            location=rec.get("location") or "",
            date=rec.get("date") or "",
            touched=True,
        ))
    return schedule


def validate_records(records: list[dict], teams: list[Team],
                     stadiums: dict[str, Stadium] | None = None,
                     rules: CompetitionRules = DEFAULT_RULES) -> dict:
    """Validate saved records.

    Returns dict with:
    - valid: bool (no record errors, no violations, every rule satisfied)
    - errors: list of record-level problems
    - report: DiagnosticReport for the rebuilt schedule
    - schedule: the rebuilt Schedule
    """
    errors = []
    team_ids = {t.id for t in teams}
    rounds_expected = len(teams) - 1
    per_round = len(teams) // 2

    if not records:
        errors.append("No fixtures provided")

    round_counts: dict[int, int] = {}
    for i, rec in enumerate(records, 1):
        rnd = _round_number(rec)
        if rnd is None or not 1 <= rnd <= rounds_expected:
            errors.append(f"Fixture {i}: invalid round {rec.get('round')!r}")
        else:
            round_counts[rnd] = round_counts.get(rnd, 0) + 1

        for key in ("date", "homeTeamId", "awayTeamId"):
            if not rec.get(key):
                errors.append(f"Fixture {i}: missing {key}")
        for key in ("homeTeamId", "awayTeamId"):
            tid = rec.get(key)
            if tid and str(tid) not in team_ids:
                errors.append(f"Fixture {i}: unknown team {tid}")

    if records and len(round_counts) != rounds_expected:
        errors.append(f"There must be exactly {rounds_expected} rounds")
    for rnd in range(1, rounds_expected + 1):
        count = round_counts.get(rnd, 0)
        if records and count != per_round:
            errors.append(
                f"Round {rnd} must have exactly {per_round} fixtures "
                f"(found {count})"
            )

    schedule = records_to_schedule(records, teams, stadiums)
    report: DiagnosticReport = check_constraints(schedule, teams, rules)

    valid = (
        not errors
        and not report.violations
        and bool(report.constraints)
        and report.all_satisfied()
    )
    return {
        "valid": valid,
        "errors": errors,
        "report": report,
        "schedule": schedule,
    }


def format_verify_report(result: dict) -> str:
    lines = []
    if result["errors"]:
        lines.append(f"--- RECORD ERRORS ({len(result['errors'])}) ---")
        for e in result["errors"]:
            lines.append(f"  ERROR: {e}")
        lines.append("")
    lines.append(format_validation_report(result["report"]))
    return "\n".join(lines)


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m fixturecheck.verify <fixtures.csv|.json> [config.yaml]")
        print("  Validates saved fixtures against the competition rules.")
        sys.exit(1)

    fixtures_path = sys.argv[1]
    config_path = sys.argv[2] if len(sys.argv) > 2 else "config.yaml"

    if not Path(fixtures_path).exists():
        print(f"Error: {fixtures_path} not found")
        sys.exit(1)
    if not Path(config_path).exists():
        print(f"Error: {config_path} not found")
        sys.exit(1)

    print(f"Loading config from {config_path}...")
    config = load_config(config_path)

    print(f"Parsing fixtures from {fixtures_path}...")
    try:
        records = parse_records(fixtures_path)
        print(f"Loaded {len(records)} fixtures")
        teams = teams_for_records(records, config["teams"], config["team_count"])
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    result = validate_records(records, teams, config["stadiums"],
                              config["rules"])
    print(format_verify_report(result))

    stats = compute_stats(result["schedule"], teams)
    print("\n" + format_stats_report(stats, teams))
    sys.exit(0 if result["valid"] else 1)


if __name__ == "__main__":
    main()
