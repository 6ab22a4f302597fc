"""
Analyzers Package

Contains the team balancing engine: position selection, slot assignment,
leftover distribution, balance scoring and the stochastic search loop.
"""

from .position_selector import PositionSelector
from .slot_assigner import SlotAssigner
from .leftover_distributor import LeftoverDistributor
from .balance_scorer import BalanceScorer
from .team_optimizer import StochasticOptimizer, OptimizationOutcome

__all__ = [
    'PositionSelector',
    'SlotAssigner',
    'LeftoverDistributor',
    'BalanceScorer',
    'StochasticOptimizer',
    'OptimizationOutcome'
]
