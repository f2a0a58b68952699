"""Summary statistics for a fixture schedule."""

from collections import defaultdict

from fixturecheck.dates import parse_timestamp, weekend_bucket
from fixturecheck.models import Schedule, Team


def compute_stats(schedule: Schedule, teams: list[Team]) -> dict:
    """Compute home/away balance, round weekends and the matchup matrix.

    Only slots with both teams count as games.
    """
    home_counts = defaultdict(int)
    away_counts = defaultdict(int)
    total_games = defaultdict(int)
    matchup_counts = defaultdict(lambda: defaultdict(int))  # team -> opponent -> count
    round_weekends = {}

    for ref, slot in schedule.items():
        if not slot.has_teams:
            continue
        h = slot.home.id
        a = slot.away.id
        home_counts[h] += 1
        away_counts[a] += 1
        total_games[h] += 1
        total_games[a] += 1
        matchup_counts[h][a] += 1
        matchup_counts[a][h] += 1

        dt = parse_timestamp(slot.date)
        if dt is not None:
            round_weekends.setdefault(ref.round_index + 1, weekend_bucket(dt))

    return {
        "home_counts": dict(home_counts),
        "away_counts": dict(away_counts),
        "total_games": dict(total_games),
        "matchup_counts": {t: dict(c) for t, c in matchup_counts.items()},
        "round_weekends": round_weekends,
        "games_scheduled": sum(1 for s in schedule.slots if s.has_teams),
        "games_expected": len(schedule.slots),
    }


def format_stats_report(stats: dict, teams: list[Team]) -> str:
    """Format statistics as a text report."""
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE SUMMARY")
    lines.append("=" * 60)
    lines.append(
        f"\nFixtures filled: {stats['games_scheduled']} of "
        f"{stats['games_expected']}"
    )

    lines.append("\n--- HOME/AWAY BALANCE ---")
    lines.append(f"{'Team':<16} {'H':>3} {'A':>3} {'Tot':>4} {'Diff':>5}")
    lines.append("-" * 35)
    for t in teams:
        h = stats["home_counts"].get(t.id, 0)
        a = stats["away_counts"].get(t.id, 0)
        tot = stats["total_games"].get(t.id, 0)
        diff = h - a
        flag = " ***" if abs(diff) > 1 else ""
        lines.append(f"{t.name:<16} {h:>3} {a:>3} {tot:>4} {diff:>+5}{flag}")

    if stats["round_weekends"]:
        lines.append("\n--- ROUND WEEKENDS ---")
        for rnd in sorted(stats["round_weekends"]):
            wk = stats["round_weekends"][rnd]
            lines.append(f"  Round {rnd}: weekend of {wk.strftime('%a %d %b %Y')}")

    lines.append("\n--- MATCHUP MATRIX ---")
    header = f"{'':>16}"
    for t in teams:
        header += f" {t.id[:5]:>5}"
    lines.append(header)
    lines.append("-" * (16 + 6 * len(teams)))
    for t1 in teams:
        row = f"{t1.name:>16}"
        for t2 in teams:
            if t1.id == t2.id:
                row += "     -"
            else:
                c = stats["matchup_counts"].get(t1.id, {}).get(t2.id, 0)
                row += f" {c:>5}"
        lines.append(row)

    return "\n".join(lines)
