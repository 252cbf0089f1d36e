"""
API routes for the scholarship eligibility service
"""

from .eligibility import router as eligibility_router
from .conditions import router as conditions_router

__all__ = [
    "eligibility_router",
    "conditions_router"
]
