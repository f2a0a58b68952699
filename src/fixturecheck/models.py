"""Data models for the manual fixture checker."""

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Optional, Union


@dataclass(frozen=True)
class Stadium:
    """A home venue."""
    id: str
    name: str
    city: str = ""


@dataclass(frozen=True)
class Team:
    """A team in the tournament roster."""
    id: str
    name: str
    stadium: Optional[Stadium] = None


def matchup_key(team_a: str, team_b: str) -> tuple[str, str]:
    """Canonical key for an unordered pair of team ids."""
    return (team_a, team_b) if team_a <= team_b else (team_b, team_a)


@dataclass(frozen=True, order=True)
class SlotRef:
    """Locates a fixture slot: 0-based round and slot indices."""
    round_index: int
    slot_index: int

    @property
    def key(self) -> str:
        return f"{self.round_index}-{self.slot_index}"

    def label(self) -> str:
        return f"Round {self.round_index + 1}, Fixture {self.slot_index + 1}"


@dataclass
class FixtureSlot:
    """One match placeholder within a round."""
    round_number: int
    home: Optional[Team] = None
    away: Optional[Team] = None
    stadium: Optional[Stadium] = None
    location: str = ""
    date: Union[str, datetime, None] = ""
    touched: bool = False

    @property
    def has_teams(self) -> bool:
        return self.home is not None and self.away is not None

    @property
    def has_date(self) -> bool:
        return bool(self.date)

    @property
    def is_complete(self) -> bool:
        return self.has_teams and self.has_date

    def describe(self) -> str:
        home = self.home.name if self.home else "TBD"
        away = self.away.name if self.away else "TBD"
        return f"{home} vs {away}"


@dataclass
class Schedule:
    """All fixture slots of a tournament, stored flat with a round stride.

    Slot (r, s) lives at ``slots[r * slots_per_round + s]``.
    """
    round_count: int
    slots_per_round: int
    slots: list[FixtureSlot] = field(default_factory=list)

    @classmethod
    def empty(cls, team_count: int) -> "Schedule":
        """Blank grid for a single round robin of ``team_count`` teams."""
        if team_count < 2 or team_count % 2:
            raise ValueError(
                f"Round robin needs an even number of teams, got {team_count}"
            )
        rounds = team_count - 1
        per_round = team_count // 2
        slots = [
            FixtureSlot(round_number=r + 1)
            for r in range(rounds)
            for _ in range(per_round)
        ]
        return cls(round_count=rounds, slots_per_round=per_round, slots=slots)

    @property
    def team_count(self) -> int:
        return self.slots_per_round * 2

    def _offset(self, ref: SlotRef) -> int:
        if not (0 <= ref.round_index < self.round_count
                and 0 <= ref.slot_index < self.slots_per_round):
            raise IndexError(f"No fixture slot at {ref.label()}")
        return ref.round_index * self.slots_per_round + ref.slot_index

    def slot(self, ref: SlotRef) -> FixtureSlot:
        return self.slots[self._offset(ref)]

    def put(self, ref: SlotRef, slot: FixtureSlot) -> None:
        self.slots[self._offset(ref)] = slot

    def round(self, round_index: int) -> list[FixtureSlot]:
        start = round_index * self.slots_per_round
        return self.slots[start:start + self.slots_per_round]

    def rounds(self) -> list[list[FixtureSlot]]:
        return [self.round(r) for r in range(self.round_count)]

    def items(self):
        """Yield (SlotRef, FixtureSlot) in round then slot order."""
        for i, slot in enumerate(self.slots):
            r, s = divmod(i, self.slots_per_round)
            yield SlotRef(r, s), slot


@dataclass(frozen=True)
class CompetitionRules:
    """When fixtures may be played."""
    months: tuple[int, ...] = (2, 3)
    friday_earliest: time = time(18, 0)
    sunday_latest: time = time(20, 0)


DEFAULT_RULES = CompetitionRules()

STRUCTURAL = "structural"
UNIQUENESS = "uniqueness"
TEMPORAL = "temporal"


@dataclass(frozen=True)
class ConstraintViolation:
    """A rule breach, optionally pinned to one slot."""
    message: str
    category: str
    ref: Optional[SlotRef] = None

    def to_dict(self) -> dict:
        d: dict = {"message": self.message}
        if self.ref is not None:
            d["roundIndex"] = self.ref.round_index
            d["slotIndex"] = self.ref.slot_index
        return d


@dataclass(frozen=True)
class ConflictSuggestion:
    """Duplicate matchup at ``reset_target``; ``owner`` claimed the pair first."""
    reset_target: SlotRef
    owner: SlotRef

    def describe(self) -> str:
        return (
            f"{self.reset_target.label()} repeats the matchup in "
            f"{self.owner.label()}. Reset one of them to free up teams."
        )

    def to_dict(self) -> dict:
        return {
            "resetTarget": {"roundIndex": self.reset_target.round_index,
                            "slotIndex": self.reset_target.slot_index},
            "owner": {"roundIndex": self.owner.round_index,
                      "slotIndex": self.owner.slot_index},
        }


@dataclass(frozen=True)
class WeekendCollision:
    """Two rounds (1-based numbers) sharing a weekend."""
    round1: int
    round2: int


ALREADY_PLAYED = "Already played each other."
UNCLASSIFIED = "Unknown conflict."


@dataclass(frozen=True)
class UnfeasibleMatchup:
    """Why two teams free in a round cannot be paired there."""
    team_a: Team
    team_b: Team
    reason: str


@dataclass
class Trackers:
    """Derived scheduling state.

    - matchups: matchup key -> already scheduled anywhere
    - per_round: round index -> team id -> scheduled in that round
    """
    matchups: dict[tuple[str, str], bool] = field(default_factory=dict)
    per_round: dict[int, dict[str, bool]] = field(default_factory=dict)


@dataclass
class DiagnosticReport:
    """Result of one constraint pass."""
    violations: list[ConstraintViolation] = field(default_factory=list)
    constraints: dict[str, bool] = field(default_factory=dict)
    weekend_collisions: list[WeekendCollision] = field(default_factory=list)
    conflict_suggestions: dict[SlotRef, list[ConflictSuggestion]] = field(
        default_factory=dict)

    def all_satisfied(self) -> bool:
        return all(self.constraints.values())

    def violations_at(self, ref: SlotRef) -> list[ConstraintViolation]:
        return [v for v in self.violations if v.ref == ref]

    def to_dict(self) -> dict:
        return {
            "violations": [v.to_dict() for v in self.violations],
            "constraints": dict(self.constraints),
            "weekendCollisions": [
                {"round1": c.round1, "round2": c.round2}
                for c in self.weekend_collisions
            ],
            "conflictSuggestions": {
                ref.key: [s.to_dict() for s in suggestions]
                for ref, suggestions in self.conflict_suggestions.items()
            },
        }
