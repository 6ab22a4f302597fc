"""
Team Balancing Data Models

Dataclasses shared by the balancing engine: player ratings, position
templates, balance weights, slot assignments and derived team statistics.
All of them are built fresh for a single balancing run.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from models.constants import (
    ATTRIBUTES,
    DEFAULT_ATTRIBUTE_VALUE,
    DEFAULT_WEIGHT,
    Position,
    PositionGroup,
    Team,
)


@dataclass(frozen=True)
class Player:
    """
    A player in the balancing pool.

    Attributes:
        player_id: Unique identifier
        name: Display name
        defending, goalscoring, stamina_pace, control, teamwork, resilience:
            Skill ratings (roughly 1-5). ``None`` means not rated.
        slot_number: Slot from a previous assignment, if any
        is_ringer: Guest player who may lack full rating data
    """
    player_id: int
    name: str = ""
    defending: Optional[float] = None
    goalscoring: Optional[float] = None
    stamina_pace: Optional[float] = None
    control: Optional[float] = None
    teamwork: Optional[float] = None
    resilience: Optional[float] = None
    slot_number: Optional[int] = None
    is_ringer: bool = False

    def attr(self, name: str, default: float = DEFAULT_ATTRIBUTE_VALUE) -> float:
        """
        Read a rating, substituting the neutral default when it is missing.

        Raises:
            KeyError: If ``name`` is not a tracked attribute
        """
        if name not in ATTRIBUTES:
            raise KeyError(f"Unknown player attribute: {name}")
        value = getattr(self, name)
        if value is None:
            return default
        return float(value)

    def ratings(self) -> Dict[str, float]:
        """Return all six ratings with defaults applied."""
        return {name: self.attr(name) for name in ATTRIBUTES}

    @classmethod
    def from_dict(cls, data: Dict) -> "Player":
        """Build a player from a plain mapping, ignoring unknown keys."""
        known = {key: data[key] for key in data if key in cls.__dataclass_fields__}
        return cls(**known)


@dataclass(frozen=True)
class PositionTemplate:
    """How many defenders, midfielders and attackers each team fields."""
    defenders: int
    midfielders: int
    attackers: int

    def __post_init__(self):
        for name in ("defenders", "midfielders", "attackers"):
            if getattr(self, name) < 0:
                raise ValueError(f"Template {name} must be non-negative")

    @property
    def team_size(self) -> int:
        return self.defenders + self.midfielders + self.attackers

    @classmethod
    def fallback(cls, team_size: int) -> "PositionTemplate":
        """
        Derive a template when none is configured for ``team_size``.

        Defenders and attackers each get a third of the team (at least one),
        midfielders take whatever is left. A one-player team is a lone
        defender.
        """
        defenders = max(team_size // 3, 1)
        attackers = min(max(team_size // 3, 1), max(team_size - defenders, 0))
        midfielders = max(team_size - defenders - attackers, 0)
        return cls(defenders=defenders, midfielders=midfielders, attackers=attackers)

    def count_for(self, position: Position) -> int:
        """Per-team count for a position."""
        return {
            Position.DEFENDER: self.defenders,
            Position.MIDFIELDER: self.midfielders,
            Position.ATTACKER: self.attackers,
        }[position]

    def slot_offset(self, position: Position, team: Team, team_size: int) -> int:
        """
        First slot number for ``position`` on ``team``.

        Team A occupies 1..team_size and Team B team_size+1..2*team_size;
        within a team defenders come first, then midfielders, then attackers.
        """
        base = 0 if team is Team.A else team_size
        if position is Position.DEFENDER:
            return base + 1
        if position is Position.MIDFIELDER:
            return base + self.defenders + 1
        if position is Position.ATTACKER:
            return base + self.defenders + self.midfielders + 1
        raise ValueError(f"No slot range for position {position.value}")

    def to_dict(self) -> Dict[str, int]:
        return {
            'defenders': self.defenders,
            'midfielders': self.midfielders,
            'attackers': self.attackers,
        }


@dataclass(frozen=True)
class BalanceWeight:
    """Weight applied to one attribute within one position group."""
    position_group: PositionGroup
    attribute: str
    weight: float

    def __post_init__(self):
        if isinstance(self.position_group, str):
            object.__setattr__(self, 'position_group', PositionGroup(self.position_group.lower()))
        if self.attribute not in ATTRIBUTES:
            raise ValueError(f"Unknown attribute for balance weight: {self.attribute}")
        if self.weight <= 0:
            raise ValueError(f"Balance weight must be positive, got {self.weight}")


class WeightTable:
    """Lookup of balance weights by position group and attribute."""

    def __init__(self, weights: Optional[Iterable[BalanceWeight]] = None):
        self._lookup: Dict[PositionGroup, Dict[str, float]] = {}
        for w in weights or []:
            self._lookup.setdefault(w.position_group, {})[w.attribute] = float(w.weight)

    def weight(self, group: PositionGroup, attribute: str) -> float:
        """Configured weight, or 1.0 when the pair has no entry."""
        return self._lookup.get(group, {}).get(attribute, DEFAULT_WEIGHT)

    def group(self, group: PositionGroup) -> Dict[str, float]:
        return dict(self._lookup.get(group, {}))

    def __len__(self) -> int:
        return sum(len(attrs) for attrs in self._lookup.values())


@dataclass(frozen=True)
class SlotAssignment:
    """A player's team and slot for one balancing attempt."""
    player_id: int
    team: Team
    slot_number: int
    position: Position

    def mirrored(self, team_size: int) -> "SlotAssignment":
        """Same slot on the opposite side."""
        if self.slot_number > 2 * team_size:
            slot = self.slot_number
        elif self.team is Team.A:
            slot = self.slot_number + team_size
        else:
            slot = self.slot_number - team_size
        return SlotAssignment(self.player_id, self.team.other, slot, self.position)

    def to_dict(self) -> Dict:
        return {
            'player_id': self.player_id,
            'team': self.team.value,
            'slot_number': self.slot_number,
            'position': self.position.value,
        }


@dataclass
class TeamStats:
    """Derived per-group averages plus team-wide resilience and teamwork."""
    defense: Dict[str, float]
    midfield: Dict[str, float]
    attack: Dict[str, float]
    resilience: float
    teamwork: float
    player_count: int = 0

    def group(self, group: PositionGroup) -> Dict[str, float]:
        return {
            PositionGroup.DEFENSE: self.defense,
            PositionGroup.MIDFIELD: self.midfield,
            PositionGroup.ATTACK: self.attack,
        }[group]


@dataclass
class BalanceDiagnostics:
    """How far the pool and template diverged from a clean two-team split."""
    pool_size: int
    expected_pool_size: int
    template: PositionTemplate
    template_source: str
    quota_shortfall: int = 0
    leftover_count: int = 0
    overflow_count: int = 0

    @property
    def size_mismatch(self) -> int:
        return self.pool_size - self.expected_pool_size

    @property
    def is_degraded(self) -> bool:
        return self.size_mismatch != 0 or self.quota_shortfall > 0 or self.overflow_count > 0

    def to_dict(self) -> Dict:
        return {
            'pool_size': self.pool_size,
            'expected_pool_size': self.expected_pool_size,
            'size_mismatch': self.size_mismatch,
            'template': self.template.to_dict(),
            'template_source': self.template_source,
            'quota_shortfall': self.quota_shortfall,
            'leftover_count': self.leftover_count,
            'overflow_count': self.overflow_count,
            'is_degraded': self.is_degraded,
        }


@dataclass
class BalanceResult:
    """Outcome of a balancing run, ready for the caller to persist."""
    assignments: List[SlotAssignment]
    balance_score: float
    balance_percentage: int
    quality: str
    team_size: int
    attempts_used: int
    early_exit: bool
    timed_out: bool
    diagnostics: BalanceDiagnostics
    breakdown: Dict[str, float] = field(default_factory=dict)

    def team(self, team: Team) -> List[SlotAssignment]:
        """Assignments for one side, ordered by slot."""
        return sorted((a for a in self.assignments if a.team is team), key=lambda a: a.slot_number)

    def to_dict(self) -> Dict:
        return {
            'slot_assignments': [a.to_dict() for a in sorted(self.assignments, key=lambda a: a.slot_number)],
            'balance_score': round(self.balance_score, 4),
            'balance_percentage': self.balance_percentage,
            'quality': self.quality,
            'team_size': self.team_size,
            'attempts_used': self.attempts_used,
            'early_exit': self.early_exit,
            'timed_out': self.timed_out,
            'breakdown': {k: round(v, 4) for k, v in self.breakdown.items()},
            'diagnostics': self.diagnostics.to_dict(),
        }
