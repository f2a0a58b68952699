#!/usr/bin/env python3
"""Manual fixture checker.

Verify mode (default):
    fixturecheck [config.yaml] --verify <fixtures.csv|fixtures.json>

    Re-imports saved fixtures and checks every rule. With --suggest, lists
    candidate matchups for each unfilled slot and resets for duplicates.
    Exit code 0 if valid, 1 if violations found.

Template mode:
    fixturecheck [config.yaml] --template [-o DIR]

    Writes an empty fixture grid sized from the roster, ready to fill in.

Examples:
    fixturecheck --verify fixtures.csv
    fixturecheck --verify fixtures.json --suggest
    fixturecheck --verify fixtures.csv --json > report.json
    fixturecheck custom.yaml --template -o season2026
"""

import argparse
import json
import sys
from pathlib import Path

from fixturecheck.config import load_config
from fixturecheck.models import Schedule
from fixturecheck.output import format_schedule, write_schedule
from fixturecheck.session import SchedulingSession
from fixturecheck.stats import compute_stats, format_stats_report
from fixturecheck.verify import (
    format_verify_report, parse_records, teams_for_records, validate_records,
)


def format_suggestions(session: SchedulingSession) -> str:
    """Suggestions for every slot that is unfilled or holds a duplicate."""
    lines = []
    lines.append("=" * 60)
    lines.append("SUGGESTIONS")
    lines.append("=" * 60)

    for ref, slot in session.schedule.items():
        conflicts = session.conflict_solutions(ref)
        if slot.has_teams and not conflicts:
            continue
        lines.append(f"\n{ref.label()} ({slot.describe()}):")
        for c in conflicts:
            lines.append(f"  RESET: {c.describe()}")
        if slot.has_teams:
            continue
        matchups = session.suggestions(ref)
        if matchups:
            for m in matchups:
                lines.append(f"  TRY: {m}")
            continue
        lines.append("  No feasible matchups due to conflicts or duplicates.")
        for u in session.unfeasible(ref):
            lines.append(f"    {u.team_a.name} vs {u.team_b.name}: {u.reason}")

    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(
        description="Manual round-robin fixture checker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Output files (template mode):
  {prefix}/schedule.txt   Human-readable grid
  {prefix}/fixtures.csv   Fixture records to fill in
  {prefix}/fixtures.json  Same records as JSON

Exit codes:
  0  Fixtures valid (or template written)
  1  Constraint violations found, or input error
""",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to config YAML file (default: config.yaml)"
    )
    parser.add_argument(
        "--verify", metavar="FILE",
        help="Verify saved fixtures (CSV or JSON records)"
    )
    parser.add_argument(
        "--suggest", action="store_true",
        help="List candidate matchups for unfilled slots and duplicate resets"
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the diagnostic report as JSON instead of text"
    )
    parser.add_argument(
        "--template", action="store_true",
        help="Write an empty fixture grid instead of verifying"
    )
    parser.add_argument(
        "--output-prefix", "-o", default="output",
        help="Output directory for template files (default: output/)"
    )
    args = parser.parse_args()

    config_path = args.config
    if not Path(config_path).exists():
        print(f"Error: config file {config_path} not found")
        sys.exit(1)

    if not args.json:
        print(f"Loading config from {config_path}...")
    config = load_config(config_path, quiet=args.json)

    if args.template:
        teams = config["teams"][:config["team_count"]]
        try:
            schedule = Schedule.empty(len(teams))
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)
        print(format_schedule(schedule))
        print("\nWriting output files...")
        write_schedule(schedule, config["season"],
                       output_prefix=args.output_prefix)
        sys.exit(0)

    if not args.verify:
        parser.error("nothing to do: pass --verify FILE or --template")
    if not Path(args.verify).exists():
        print(f"Error: {args.verify} not found")
        sys.exit(1)

    try:
        records = parse_records(args.verify)
        teams = teams_for_records(records, config["teams"], config["team_count"])
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    result = validate_records(records, teams, config["stadiums"],
                              config["rules"])

    if args.json:
        out = result["report"].to_dict()
        out["recordErrors"] = result["errors"]
        out["configErrors"] = config["errors"]
        out["configWarnings"] = config["warnings"]
        out["valid"] = result["valid"]
        print(json.dumps(out, indent=2))
        sys.exit(0 if result["valid"] else 1)

    print(f"Verifying {len(records)} fixtures from {args.verify}...")
    print(format_verify_report(result))

    stats = compute_stats(result["schedule"], teams)
    print("\n" + format_stats_report(stats, teams))

    if args.suggest:
        session = SchedulingSession(teams, config["rules"], config["season"],
                                    schedule=result["schedule"])
        print("\n" + format_suggestions(session))

    if result["valid"]:
        print("\nFixtures are valid.")
    else:
        n = len(result["errors"]) + len(result["report"].violations)
        print(f"\nFixtures have {n} problems.")
        print("Review the report above and correct the fixture file.")
    sys.exit(0 if result["valid"] else 1)


if __name__ == "__main__":
    main()
