"""
Validation Schemas Package

Contains Pydantic models for input validation and data sanitization.
"""

from .balance import (
    PlayerRatingSchema,
    TemplateSchema,
    WeightSchema,
    BalanceRequestSchema,
    StatsRequestSchema,
    RandomBalanceRequestSchema,
    MatchBalanceRequestSchema,
    TemplateCreateSchema,
)

__all__ = [
    'PlayerRatingSchema',
    'TemplateSchema',
    'WeightSchema',
    'BalanceRequestSchema',
    'StatsRequestSchema',
    'RandomBalanceRequestSchema',
    'MatchBalanceRequestSchema',
    'TemplateCreateSchema',
]
