"""Matchup and per-round team trackers.

Both are rebuilt from scratch from the current schedule on every change.
"""

from fixturecheck.models import Schedule, Team, Trackers, matchup_key


def build_matchup_tracker(schedule: Schedule,
                          teams: list[Team]) -> dict[tuple[str, str], bool]:
    """Map every roster pair to whether some slot already holds it.

    The ``touched`` flag is ignored. Pairs outside the roster (self-play,
    unknown teams) are not tracked.
    """
    tracker: dict[tuple[str, str], bool] = {}
    for i, team_a in enumerate(teams):
        for team_b in teams[i + 1:]:
            tracker[matchup_key(team_a.id, team_b.id)] = False

    for slot in schedule.slots:
        if not slot.has_teams:
            continue
        key = matchup_key(slot.home.id, slot.away.id)
        if key in tracker:
            tracker[key] = True
    return tracker


def build_round_team_tracker(schedule: Schedule,
                             teams: list[Team]) -> dict[int, dict[str, bool]]:
    """Map round index -> team id -> whether the team has a slot that round."""
    tracker: dict[int, dict[str, bool]] = {}
    for r, round_slots in enumerate(schedule.rounds()):
        seen = {t.id: False for t in teams}
        for slot in round_slots:
            if slot.has_teams:
                seen[slot.home.id] = True
                seen[slot.away.id] = True
        tracker[r] = seen
    return tracker


def build_trackers(schedule: Schedule, teams: list[Team]) -> Trackers:
    return Trackers(
        matchups=build_matchup_tracker(schedule, teams),
        per_round=build_round_team_tracker(schedule, teams),
    )
