"""
API routes for listing the registered eligibility conditions
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..models.report import ConditionDescriptor
from ..services.eligibility_service import EligibilityService, get_eligibility_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conditions", tags=["conditions"])


@router.get("", response_model=List[ConditionDescriptor])
async def list_conditions(service: EligibilityService = Depends(get_eligibility_service)):
    """
    Registered conditions in evaluation order, with the fields each one reads
    """
    try:
        return service.list_conditions()
    except Exception as e:
        logger.error(f"Error listing conditions: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")
