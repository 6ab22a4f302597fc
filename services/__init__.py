"""
Services Package - Business Logic Layer

This package contains service classes that encapsulate business logic,
keeping route handlers thin and focused on HTTP concerns.
"""

from .position_template_service import PositionTemplateService
from .team_balance_service import TeamBalanceService
from .team_stats_service import TeamStatsService
from .performance_balance_service import PerformanceBalanceService
from .random_balance_service import RandomBalanceService

__all__ = [
    'PositionTemplateService',
    'TeamBalanceService',
    'TeamStatsService',
    'PerformanceBalanceService',
    'RandomBalanceService',
]
