"""
Models package for the Matchday Team Balancer.

Provides engine data models (players, templates, weights, slot assignments)
and the league database tables.
"""
from .constants import PositionGroup, Position, Team
from .balance import (
    Player,
    PositionTemplate,
    BalanceWeight,
    WeightTable,
    SlotAssignment,
    TeamStats,
    BalanceDiagnostics,
    BalanceResult
)

__all__ = [
    'PositionGroup',
    'Position',
    'Team',
    'Player',
    'PositionTemplate',
    'BalanceWeight',
    'WeightTable',
    'SlotAssignment',
    'TeamStats',
    'BalanceDiagnostics',
    'BalanceResult'
]
