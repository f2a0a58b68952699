"""Output formatters for the manual fixture checker."""

import csv
import json
from datetime import datetime
from io import StringIO
from pathlib import Path
from typing import Optional

from fixturecheck.dates import parse_timestamp
from fixturecheck.models import FixtureSlot, Schedule

RECORD_FIELDS = [
    "round", "date", "homeTeamId", "awayTeamId", "stadiumId", "location",
    "season",
]


def _iso_date(slot: FixtureSlot) -> str:
    if isinstance(slot.date, datetime):
        return slot.date.isoformat()
    return slot.date or ""


def to_records(schedule: Schedule, season: Optional[int]) -> list[dict]:
    """One persistence record per slot, in round then slot order."""
    records = []
    for _, slot in schedule.items():
        records.append({
            "round": slot.round_number,
            "date": _iso_date(slot),
            "homeTeamId": slot.home.id if slot.home else None,
            "awayTeamId": slot.away.id if slot.away else None,
            "stadiumId": slot.stadium.id if slot.stadium else None,
            "location": slot.location,
            "season": season,
        })
    return records


def format_schedule(schedule: Schedule, title: str = "FIXTURE SCHEDULE") -> str:
    """Format schedule as human-readable text, organized by round."""
    lines = []
    lines.append("=" * 72)
    lines.append(title)
    lines.append("=" * 72)

    for r, round_slots in enumerate(schedule.rounds()):
        lines.append(f"\n--- ROUND {r + 1} ---")
        for s, slot in enumerate(round_slots):
            dt = parse_timestamp(slot.date)
            when = dt.strftime("%a %d %b %Y %H:%M") if dt else "(no date)"
            venue = slot.stadium.name if slot.stadium else ""
            if slot.location:
                venue = f"{venue}, {slot.location}" if venue else slot.location
            mark = " " if slot.touched else "?"
            lines.append(
                f"  [{mark}] {s + 1}. {when:<22} {slot.describe():<32} {venue}"
            )

    return "\n".join(lines)


def format_records_csv(records: list[dict]) -> str:
    output = StringIO()
    writer = csv.DictWriter(output, fieldnames=RECORD_FIELDS)
    writer.writeheader()
    for rec in records:
        writer.writerow({k: "" if rec.get(k) is None else rec[k]
                         for k in RECORD_FIELDS})
    return output.getvalue()


def write_schedule(schedule: Schedule, season: Optional[int],
                   output_prefix: str = "output"):
    """Write all output files into {output_prefix}/ directory."""
    out_dir = Path(output_prefix)
    out_dir.mkdir(parents=True, exist_ok=True)
    records = to_records(schedule, season)

    schedule_path = out_dir / "schedule.txt"
    schedule_path.write_text(format_schedule(schedule))
    print(f"Written: {schedule_path}")

    csv_path = out_dir / "fixtures.csv"
    csv_path.write_text(format_records_csv(records))
    print(f"Written: {csv_path}")

    json_path = out_dir / "fixtures.json"
    json_path.write_text(json.dumps(
        {"season": season, "fixtures": records}, indent=2))
    print(f"Written: {json_path}")
