"""
Utility modules for school insights.
"""

from .numbers import round_half_up, percentage

__all__ = [
    'round_half_up',
    'percentage',
]
