"""
Centralized constants for the team balancing engine.
"""

from enum import Enum


class PositionGroup(Enum):
    DEFENSE = "defense"
    MIDFIELD = "midfield"
    ATTACK = "attack"
    TEAM = "team"


class Position(Enum):
    DEFENDER = "defender"
    MIDFIELDER = "midfielder"
    ATTACKER = "attacker"
    FLEX = "flex"


class Team(Enum):
    A = "A"
    B = "B"

    @property
    def other(self) -> "Team":
        return Team.B if self is Team.A else Team.A


# Player skill ratings tracked by the engine
ATTRIBUTES = (
    "defending",
    "goalscoring",
    "stamina_pace",
    "control",
    "teamwork",
    "resilience",
)

# Neutral midpoint used for any missing rating or empty position group
DEFAULT_ATTRIBUTE_VALUE = 3.0
DEFAULT_WEIGHT = 1.0

# Primary values closer than this are considered tied during selection
TIE_EPSILON = 0.1

# Selection passes run in this order: defenders are locked in first
SELECTION_ORDER = (Position.DEFENDER, Position.ATTACKER, Position.MIDFIELDER)

# (primary, secondary, tertiary) sort keys per position
POSITION_SORT_KEYS = {
    Position.DEFENDER: ("defending", "control", "stamina_pace"),
    Position.ATTACKER: ("goalscoring", "stamina_pace", "control"),
    Position.MIDFIELDER: ("control", "stamina_pace", "teamwork"),
}

POSITION_GROUPS = {
    Position.DEFENDER: PositionGroup.DEFENSE,
    Position.MIDFIELDER: PositionGroup.MIDFIELD,
    Position.ATTACKER: PositionGroup.ATTACK,
}

# Attributes averaged within each position group; defending only drives selection
GROUP_ATTRIBUTES = (
    "goalscoring",
    "stamina_pace",
    "control",
    "teamwork",
    "resilience",
)

# Attributes also scored as team-wide averages over the whole team
TEAM_ATTRIBUTES = ("resilience", "teamwork")

# Search defaults
DEFAULT_MAX_ATTEMPTS = 8400
DEFAULT_EARLY_EXIT_THRESHOLD = 0.05
DEFAULT_RESHUFFLE_INTERVAL = 50
MIN_POOL_SIZE = 2

# Upper bounds (inclusive) of the balance score for each quality label
BALANCE_QUALITY_THRESHOLDS = {
    "excellent": 0.2,
    "good": 0.3,
    "not great": 0.4,
}

ATTRIBUTE_NAMES = {
    "defending": "Defending",
    "goalscoring": "Goalscoring",
    "stamina_pace": "Stamina & Pace",
    "control": "Control",
    "teamwork": "Teamwork",
    "resilience": "Resilience",
}

# Default per-team formations, keyed by team size
DEFAULT_TEAM_TEMPLATES = {
    5: {"defenders": 2, "midfielders": 2, "attackers": 1},
    6: {"defenders": 2, "midfielders": 3, "attackers": 1},
    7: {"defenders": 3, "midfielders": 3, "attackers": 1},
    8: {"defenders": 3, "midfielders": 3, "attackers": 2},
    9: {"defenders": 3, "midfielders": 4, "attackers": 2},
    11: {"defenders": 4, "midfielders": 4, "attackers": 2},
}
