"""
Team Balancing Validation Schemas

Pydantic models for validating balancing API inputs.
Provides type-safe validation with automatic sanitization.
"""

from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict
from typing import List, Optional, Union
from enum import Enum

from models.constants import ATTRIBUTES


class PositionGroupEnum(str, Enum):
    """Valid position group values for balance weights."""
    DEFENSE = 'defense'
    MIDFIELD = 'midfield'
    ATTACK = 'attack'
    TEAM = 'team'


class BalanceModeEnum(str, Enum):
    """Valid balancing modes for a stored match."""
    RATING = 'rating'
    PERFORMANCE = 'performance'
    RANDOM = 'random'


class PlayerRatingSchema(BaseModel):
    """
    Validation schema for a single player in a roster.

    Ratings are optional; a missing rating is scored at the neutral default.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    player_id: int = Field(..., description="Unique player id")
    name: str = Field(default="", max_length=100, description="Display name")
    defending: Optional[float] = Field(default=None, ge=0, le=10)
    goalscoring: Optional[float] = Field(default=None, ge=0, le=10)
    stamina_pace: Optional[float] = Field(default=None, ge=0, le=10)
    control: Optional[float] = Field(default=None, ge=0, le=10)
    teamwork: Optional[float] = Field(default=None, ge=0, le=10)
    resilience: Optional[float] = Field(default=None, ge=0, le=10)
    is_ringer: bool = Field(default=False, description="Guest player")


class TemplateSchema(BaseModel):
    """Per-team position counts."""
    defenders: int = Field(..., ge=0)
    midfielders: int = Field(..., ge=0)
    attackers: int = Field(..., ge=0)


class WeightSchema(BaseModel):
    """Validation schema for one balance weight."""
    model_config = ConfigDict(str_strip_whitespace=True)

    position_group: PositionGroupEnum
    attribute: str
    weight: float = Field(..., gt=0, description="Relative importance, must be positive")

    @field_validator('position_group', mode='before')
    @classmethod
    def normalize_group(cls, v):
        """Convert position group to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator('attribute')
    @classmethod
    def validate_attribute(cls, v: str) -> str:
        """Ensure the attribute is one the engine tracks."""
        v = v.lower()
        if v not in ATTRIBUTES:
            raise ValueError(f"Unknown attribute '{v}'. Expected one of: {', '.join(ATTRIBUTES)}")
        return v


class BalanceRequestSchema(BaseModel):
    """
    Validation schema for a stateless balance request.

    Validates the roster, team size and optional overrides for the search.
    """
    players: List[PlayerRatingSchema] = Field(..., min_length=2, description="Player pool")
    team_size: int = Field(..., ge=1, le=20, description="Players per side")
    template: Optional[TemplateSchema] = None
    weights: List[WeightSchema] = Field(default_factory=list)
    max_attempts: Optional[int] = Field(default=None, ge=1, le=100000)
    early_exit_threshold: Optional[float] = Field(default=None, ge=0)
    seed: Optional[Union[int, str]] = None

    @field_validator('players')
    @classmethod
    def unique_player_ids(cls, v: List[PlayerRatingSchema]) -> List[PlayerRatingSchema]:
        """Reject rosters that list the same player twice."""
        ids = [p.player_id for p in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate player ids in roster")
        return v


class StatsRequestSchema(BaseModel):
    """Validation schema for comparing two already-picked teams."""
    team_a: List[PlayerRatingSchema] = Field(..., min_length=1)
    team_b: List[PlayerRatingSchema] = Field(..., min_length=1)


class RandomBalanceRequestSchema(BaseModel):
    """Validation schema for a random split."""
    player_ids: List[int] = Field(..., min_length=2)
    team_size: int = Field(..., ge=1, le=20)
    size_a: Optional[int] = Field(default=None, ge=0)
    size_b: Optional[int] = Field(default=None, ge=0)
    seed: Optional[Union[int, str]] = None


class MatchBalanceRequestSchema(BaseModel):
    """Validation schema for balancing a stored match."""
    mode: BalanceModeEnum = BalanceModeEnum.RATING
    seed: Optional[Union[int, str]] = None
    state_version: Optional[int] = Field(default=None, ge=0)

    @field_validator('mode', mode='before')
    @classmethod
    def normalize_mode(cls, v):
        if isinstance(v, str):
            return v.lower().strip()
        return v


class TemplateCreateSchema(TemplateSchema):
    """Validation schema for creating or updating a team size template."""
    model_config = ConfigDict(str_strip_whitespace=True)

    team_size: int = Field(..., ge=1, le=20)
    name: Optional[str] = Field(default=None, max_length=50)
    is_default: bool = True

    @model_validator(mode='after')
    def counts_match_team_size(self):
        """Position counts must fill the team exactly."""
        total = self.defenders + self.midfielders + self.attackers
        if total != self.team_size:
            raise ValueError(
                f"Template counts {self.defenders}/{self.midfielders}/{self.attackers} "
                f"sum to {total}, expected {self.team_size}"
            )
        return self
