"""
League data models.

Database schema for players, match pools, slot assignments and the
configuration the balancing engine reads (team size templates and weights).
Tables: players, team_size_templates, team_balance_weights, upcoming_matches,
match_player_pool, upcoming_match_players, player_power_ratings
"""
from extensions import db
from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime, Boolean, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from models.balance import Player, PositionTemplate, BalanceWeight


class SquadPlayer(db.Model):
    """Club player with skill ratings."""
    __tablename__ = 'players'

    player_id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)

    # Ratings on a 1-5 scale, NULL when not yet rated
    defending = Column(Float, nullable=True)
    goalscoring = Column(Float, nullable=True)
    stamina_pace = Column(Float, nullable=True)
    control = Column(Float, nullable=True)
    teamwork = Column(Float, nullable=True)
    resilience = Column(Float, nullable=True)

    is_ringer = Column(Boolean, default=False, nullable=False)
    is_retired = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    def to_engine_player(self) -> Player:
        """Convert to the engine's read-only player shape."""
        return Player(
            player_id=self.player_id,
            name=self.name,
            defending=self.defending,
            goalscoring=self.goalscoring,
            stamina_pace=self.stamina_pace,
            control=self.control,
            teamwork=self.teamwork,
            resilience=self.resilience,
            is_ringer=bool(self.is_ringer),
        )

    def __repr__(self):
        return f'<SquadPlayer {self.player_id} - {self.name}>'


class TeamSizeTemplate(db.Model):
    """Per-team position counts for a given team size."""
    __tablename__ = 'team_size_templates'

    template_id = Column(Integer, primary_key=True)
    team_size = Column(Integer, nullable=False, index=True)
    name = Column(String(50), nullable=False)
    defenders = Column(Integer, nullable=False)
    midfielders = Column(Integer, nullable=False)
    attackers = Column(Integer, nullable=False)
    is_default = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_template(self) -> PositionTemplate:
        return PositionTemplate(
            defenders=self.defenders,
            midfielders=self.midfielders,
            attackers=self.attackers,
        )

    def __repr__(self):
        return f'<TeamSizeTemplate {self.team_size}v{self.team_size} - {self.defenders}/{self.midfielders}/{self.attackers}>'


class TeamBalanceWeight(db.Model):
    """Weight of one attribute within a position group."""
    __tablename__ = 'team_balance_weights'

    weight_id = Column(Integer, primary_key=True)
    position_group = Column(String(20), nullable=False)  # 'defense', 'midfield', 'attack', 'team'
    attribute = Column(String(30), nullable=False)
    weight = Column(Float, nullable=False, default=1.0)

    __table_args__ = (
        UniqueConstraint('position_group', 'attribute', name='uq_group_attribute'),
    )

    def to_weight(self) -> BalanceWeight:
        return BalanceWeight(
            position_group=self.position_group,
            attribute=self.attribute,
            weight=self.weight,
        )

    def __repr__(self):
        return f'<TeamBalanceWeight {self.position_group}.{self.attribute} = {self.weight}>'


class UpcomingMatch(db.Model):
    """A planned match awaiting team selection."""
    __tablename__ = 'upcoming_matches'

    upcoming_match_id = Column(Integer, primary_key=True)
    match_date = Column(DateTime, nullable=False)
    team_size = Column(Integer, nullable=False)
    is_balanced = Column(Boolean, default=False, nullable=False)
    balance_type = Column(String(20), nullable=True)  # 'rating', 'performance', 'random'
    balance_score = Column(Float, nullable=True)
    state_version = Column(Integer, default=0, nullable=False)

    # Relationships
    pool_entries = relationship('MatchPoolEntry', back_populates='match', cascade='all, delete-orphan')
    slots = relationship('MatchSlot', back_populates='match', cascade='all, delete-orphan')

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<UpcomingMatch {self.upcoming_match_id} - {self.team_size}v{self.team_size}>'


class MatchPoolEntry(db.Model):
    """A player's availability response for an upcoming match."""
    __tablename__ = 'match_player_pool'

    pool_id = Column(Integer, primary_key=True)
    upcoming_match_id = Column(Integer, ForeignKey('upcoming_matches.upcoming_match_id'), nullable=False, index=True)
    player_id = Column(Integer, ForeignKey('players.player_id'), nullable=False)
    response_status = Column(String(10), nullable=False, default='PENDING')  # 'IN', 'OUT', 'MAYBE', 'PENDING'

    # Relationships
    match = relationship('UpcomingMatch', back_populates='pool_entries')
    player = relationship('SquadPlayer')

    __table_args__ = (
        UniqueConstraint('upcoming_match_id', 'player_id', name='uq_pool_match_player'),
    )

    def __repr__(self):
        return f'<MatchPoolEntry {self.upcoming_match_id} - {self.player_id} ({self.response_status})>'


class MatchSlot(db.Model):
    """Persisted slot assignment for an upcoming match."""
    __tablename__ = 'upcoming_match_players'

    upcoming_player_id = Column(Integer, primary_key=True)
    upcoming_match_id = Column(Integer, ForeignKey('upcoming_matches.upcoming_match_id'), nullable=False)
    player_id = Column(Integer, ForeignKey('players.player_id'), nullable=False)
    team = Column(String(1), nullable=False)  # 'A' or 'B'
    slot_number = Column(Integer, nullable=False)
    position = Column(String(20), nullable=True)

    match = relationship('UpcomingMatch', back_populates='slots')

    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index('idx_match_slot', 'upcoming_match_id', 'slot_number', unique=True),
    )

    def to_dict(self):
        return {
            'player_id': self.player_id,
            'team': self.team,
            'slot_number': self.slot_number,
            'position': self.position,
        }

    def __repr__(self):
        return f'<MatchSlot {self.upcoming_match_id} - {self.team}{self.slot_number}: {self.player_id}>'


class PlayerPowerRating(db.Model):
    """Aggregated past-performance rating used by performance balancing."""
    __tablename__ = 'player_power_ratings'

    player_id = Column(Integer, ForeignKey('players.player_id'), primary_key=True)
    rating = Column(Float, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<PlayerPowerRating {self.player_id} - {self.rating:.2f}>'
