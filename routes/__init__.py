"""
Routes Package - Blueprint Registration

This package organizes Flask routes into modular blueprints for better
code organization and maintainability.
"""

from .main import main_bp
from .balance import balance_bp

__all__ = ['main_bp', 'balance_bp']
