"""
API routes for eligibility checking
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from ..models.report import EligibilityReport
from ..models.student import (
    EligibilityCheckRequest,
    QuickCheckResponse,
    ScholarshipFilterRequest,
    ScholarshipFilterResponse
)
from ..services.eligibility_service import EligibilityService, get_eligibility_service
from ..services.mongo_service import MongoService, get_mongo_service
from ..utils.validators import validate_eligibility_criteria

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/eligibility", tags=["eligibility"])


def _validated_criteria(request: EligibilityCheckRequest) -> dict:
    criteria = request.criteria.to_document()
    validation_errors = validate_eligibility_criteria(criteria)
    if validation_errors:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid eligibility criteria: {'; '.join(validation_errors)}"
        )
    return criteria


@router.post("/check", response_model=EligibilityReport)
async def check_eligibility(
    request: EligibilityCheckRequest,
    service: EligibilityService = Depends(get_eligibility_service)
):
    """
    Full eligibility report for one student against one set of criteria
    """
    try:
        criteria = _validated_criteria(request)
        return service.check_eligibility(request.profile.to_document(), criteria)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error checking eligibility: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to check eligibility: {str(e)}"
        )


@router.post("/quick-check", response_model=QuickCheckResponse)
async def quick_check_eligibility(
    request: EligibilityCheckRequest,
    service: EligibilityService = Depends(get_eligibility_service)
):
    """
    Pass/fail only, evaluated on required conditions
    """
    try:
        criteria = _validated_criteria(request)
        return QuickCheckResponse(passed=service.quick_check(request.profile.to_document(), criteria))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error in quick eligibility check: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to check eligibility: {str(e)}"
        )


@router.post("/filter", response_model=ScholarshipFilterResponse)
async def filter_scholarships(
    request: ScholarshipFilterRequest,
    service: EligibilityService = Depends(get_eligibility_service)
):
    """
    Scholarships (by id) that the student passes
    """
    try:
        for scholarship in request.scholarships:
            validation_errors = validate_eligibility_criteria(scholarship.eligibility_criteria.to_document())
            if validation_errors:
                raise HTTPException(
                    status_code=400,
                    detail=f"Invalid eligibility criteria for {scholarship.id}: {'; '.join(validation_errors)}"
                )

        return service.filter_scholarships(request.profile.to_document(), request.scholarships)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error filtering scholarships: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to filter scholarships: {str(e)}"
        )


@router.get("/students/{student_id}/scholarships/{scholarship_id}", response_model=EligibilityReport)
async def check_stored_eligibility(
    student_id: str,
    scholarship_id: str,
    service: EligibilityService = Depends(get_eligibility_service),
    mongo: MongoService = Depends(get_mongo_service)
):
    """
    Eligibility report for a stored student and a stored scholarship
    """
    try:
        student = await mongo.get_student_profile(student_id)
        if not student:
            raise HTTPException(status_code=404, detail=f"Student not found: {student_id}")

        scholarship = await mongo.get_scholarship(scholarship_id)
        if not scholarship:
            raise HTTPException(status_code=404, detail=f"Scholarship not found: {scholarship_id}")

        return service.check_eligibility(
            student,
            scholarship.eligibility_criteria,
            scholarship_id=scholarship.id
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error checking {student_id} against {scholarship_id}: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to check eligibility: {str(e)}"
        )
