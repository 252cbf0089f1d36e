"""
Utility functions for the scholarship eligibility service
"""

from .validators import validate_eligibility_criteria

__all__ = [
    "validate_eligibility_criteria"
]
