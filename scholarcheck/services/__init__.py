"""
Services package for the scholarship eligibility service
"""

from .mongo_service import MongoService
from .eligibility_service import EligibilityService

__all__ = [
    "MongoService",
    "EligibilityService"
]
