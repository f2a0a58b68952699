"""Suggestions for filling empty slots and clearing duplicate matchups."""

from fixturecheck.models import (
    ALREADY_PLAYED, UNCLASSIFIED, ConflictSuggestion, DiagnosticReport,
    Schedule, SlotRef, Team, Trackers, UnfeasibleMatchup, matchup_key,
)

HOME = "home"
AWAY = "away"


def free_teams(ref: SlotRef, teams: list[Team],
               trackers: Trackers) -> list[Team]:
    """Teams with no fixture yet in the slot's round, in roster order."""
    scheduled = trackers.per_round.get(ref.round_index, {})
    return [t for t in teams if not scheduled.get(t.id, False)]


def _candidate_pairs(ref: SlotRef, teams: list[Team], trackers: Trackers):
    avail = free_teams(ref, teams, trackers)
    for i, team_a in enumerate(avail):
        for team_b in avail[i + 1:]:
            yield team_a, team_b


def suggest_matchups(ref: SlotRef, teams: list[Team],
                     trackers: Trackers) -> list[str]:
    """Pairs free in this round that have not met anywhere yet.

    Only pairs the matchup tracker knows about are offered.
    """
    out = []
    for team_a, team_b in _candidate_pairs(ref, teams, trackers):
        if trackers.matchups.get(matchup_key(team_a.id, team_b.id)) is False:
            out.append(f"{team_a.name} vs {team_b.name}")
    return out


def unfeasible_matchups(ref: SlotRef, teams: list[Team],
                        trackers: Trackers) -> list[UnfeasibleMatchup]:
    """Explain why no pair can be suggested for this slot.

    Empty whenever ``suggest_matchups`` has something to offer. Pairs that
    are blocked for any reason other than having met already fall into the
    UNCLASSIFIED bucket (for example a pair missing from a stale tracker).
    """
    if suggest_matchups(ref, teams, trackers):
        return []

    reasons = []
    for team_a, team_b in _candidate_pairs(ref, teams, trackers):
        if trackers.matchups.get(matchup_key(team_a.id, team_b.id)):
            reason = ALREADY_PLAYED
        else:
            reason = UNCLASSIFIED
        reasons.append(UnfeasibleMatchup(team_a, team_b, reason))
    return reasons


def conflict_solutions(report: DiagnosticReport,
                       ref: SlotRef) -> list[ConflictSuggestion]:
    return list(report.conflict_suggestions.get(ref, []))


def available_teams(schedule: Schedule, teams: list[Team],
                    trackers: Trackers, ref: SlotRef,
                    side: str) -> list[Team]:
    """Teams the home or away picker of a slot may offer.

    A team is offered if it has no fixture in the round yet, or if it is
    already the pick on that side of this slot.
    """
    if side not in (HOME, AWAY):
        raise ValueError(f"side must be {HOME!r} or {AWAY!r}, got {side!r}")
    slot = schedule.slot(ref)
    current = slot.home if side == HOME else slot.away
    scheduled = trackers.per_round.get(ref.round_index, {})
    return [
        t for t in teams
        if not scheduled.get(t.id, False)
        or (current is not None and current.id == t.id)
    ]
