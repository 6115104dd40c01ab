# gradebook/api/routes/grades.py
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gradebook.api.dependencies import db as provider
from gradebook.api.dependencies.owner import get_owner_id
from gradebook.database import get_db
from gradebook.exceptions import NotFoundError
from gradebook.logging_config import app_logger
from gradebook.schema.grading import (
    FinalGradeRequest,
    FinalGradeResponse,
    FinalGradeResult,
    TrendRequest,
    TrendResponse,
)
from gradebook.services import grading

router = APIRouter(tags=["grades"])


def _final_grade_response(result: FinalGradeResult) -> FinalGradeResponse:
    # No data is an informational state, not a failing grade
    return FinalGradeResponse(
        data=result,
        message=result.message if result.no_data else "Success",
    )


@router.post("/grades/final", response_model=FinalGradeResponse)
async def compute_final_grade(request: FinalGradeRequest) -> FinalGradeResponse:
    """
    Compute a final grade from categories, assessments and scores posted
    by the caller.
    """
    result = grading.compute_final_grade(
        request.categories,
        grading.group_assessments(request.assessments),
        grading.index_scores(request.scores),
    )
    return _final_grade_response(result)


@router.post("/grades/trend", response_model=TrendResponse)
async def compute_trend(request: TrendRequest) -> TrendResponse:
    return TrendResponse(data=grading.compute_trend(request.percentages))


@router.get(
    "/classes/{class_id}/students/{student_id}/final-grade",
    response_model=FinalGradeResponse,
)
async def get_final_grade(
    class_id: uuid.UUID,
    student_id: uuid.UUID,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> FinalGradeResponse:
    if not provider.select_class(db, owner_id, class_id):
        raise NotFoundError("Class not found", {"class_id": str(class_id)})
    if not provider.select_student(db, owner_id, student_id):
        raise NotFoundError("Student not found", {"student_id": str(student_id)})

    categories, assessments_by_category, scores_by_assessment = provider.load_grade_inputs(
        db, owner_id, class_id, student_id
    )
    result = grading.compute_final_grade(
        categories, assessments_by_category, scores_by_assessment
    )
    app_logger.info(
        f"Final grade for student {student_id} in class {class_id}: "
        f"{result.final_percentage} ({result.letter_grade}), complete={result.is_complete}"
    )
    return _final_grade_response(result)
