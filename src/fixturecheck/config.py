"""Config loading and validation for the manual fixture checker."""

from datetime import time
from pathlib import Path

import yaml

from fixturecheck.models import CompetitionRules, Stadium, Team
from fixturecheck.session import DEFAULT_TEAM_COUNT


def parse_time(s: str) -> time:
    """Parse kick-off times like '6pm', '8:00pm', '18:00'."""
    s_clean = s.strip().lower()
    suffix = s_clean[-2:] if s_clean.endswith(("am", "pm")) else ""
    if suffix:
        s_clean = s_clean[:-2].strip()

    h_str, _, m_str = s_clean.partition(":")
    h = int(h_str)
    m = int(m_str) if m_str else 0

    if suffix == "pm" and h < 12:
        h += 12
    elif suffix == "am" and h == 12:
        h = 0

    return time(h, m)


def load_config(path: str | Path, quiet: bool = False) -> dict:
    """Load and validate config YAML, returning structured data.

    Returns dict with:
    - season: int or None
    - team_count: int
    - rules: CompetitionRules
    - stadiums: dict[id -> Stadium]
    - teams: list[Team] in file order
    - errors, warnings: config problems, printed unless quiet
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    errors = []
    warnings = []

    comp = raw.get("competition", {}) or {}
    defaults = CompetitionRules()
    months = tuple(int(m) for m in comp.get("months", defaults.months))
    for m in months:
        if not 1 <= m <= 12:
            errors.append(f"Competition month {m} is not between 1 and 12")
    rules = CompetitionRules(
        months=months,
        friday_earliest=parse_time(str(comp["friday_earliest"]))
        if "friday_earliest" in comp else defaults.friday_earliest,
        sunday_latest=parse_time(str(comp["sunday_latest"]))
        if "sunday_latest" in comp else defaults.sunday_latest,
    )

    # Stadiums
    stadiums: dict[str, Stadium] = {}
    for sd in raw.get("stadiums", []) or []:
        sid = str(sd["id"])
        if sid in stadiums:
            errors.append(f"Stadium {sid} is defined twice")
        stadiums[sid] = Stadium(
            id=sid,
            name=sd.get("name", sid),
            city=sd.get("city", ""),
        )

    # Teams
    teams: list[Team] = []
    seen: set[str] = set()
    for td in raw.get("teams", []) or []:
        tid = str(td["id"])
        if tid in seen:
            errors.append(f"Team {tid} is defined twice")
            continue
        seen.add(tid)
        stadium = None
        if td.get("stadium") is not None:
            stadium = stadiums.get(str(td["stadium"]))
            if stadium is None:
                warnings.append(
                    f"team {tid} uses unknown stadium {td['stadium']}")
        teams.append(Team(id=tid, name=td.get("name", tid), stadium=stadium))

    team_count = int(raw.get("team_count", DEFAULT_TEAM_COUNT))
    if team_count < 2 or team_count % 2:
        errors.append(f"team_count must be even and at least 2, got {team_count}")
    if len(teams) < team_count:
        errors.append(
            f"Roster has {len(teams)} teams but team_count is {team_count}"
        )

    if not quiet:
        for w in warnings:
            print(f"Warning: {w}")
    if errors and not quiet:
        print("Config validation errors:")
        for e in errors:
            print(f"  {e}")

    season = raw.get("season")
    return {
        "season": int(season) if season is not None else None,
        "team_count": team_count,
        "rules": rules,
        "stadiums": stadiums,
        "teams": teams,
        "errors": errors,
        "warnings": warnings,
    }
