# gradebook/api/routes/reports.py
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gradebook.api.dependencies import db as provider
from gradebook.api.dependencies.owner import get_owner_id
from gradebook.database import get_db
from gradebook.exceptions import NotFoundError
from gradebook.schema.report import ClassSummaryResponse, StudentReportResponse
from gradebook.services import analytics

router = APIRouter(prefix="/classes", tags=["reports"])


@router.get("/{class_id}/students/{student_id}/report", response_model=StudentReportResponse)
async def get_student_report(
    class_id: uuid.UUID,
    student_id: uuid.UUID,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> StudentReportResponse:
    school_class = provider.select_class(db, owner_id, class_id)
    if not school_class:
        raise NotFoundError("Class not found", {"class_id": str(class_id)})
    student = provider.select_student(db, owner_id, student_id)
    if not student:
        raise NotFoundError("Student not found", {"student_id": str(student_id)})

    report = analytics.build_student_report(
        student_id=student.id,
        student_name=student.full_name,
        class_name=school_class.name,
        subject=school_class.subject_name,
        categories=provider.select_active_categories(db, owner_id),
        assessments=provider.select_class_assessments(db, owner_id, class_id),
        scores=provider.select_class_scores(db, owner_id, class_id, student_id),
    )
    return StudentReportResponse(data=report)


@router.get("/{class_id}/summary", response_model=ClassSummaryResponse)
async def get_class_summary(
    class_id: uuid.UUID,
    owner_id: uuid.UUID = Depends(get_owner_id),
    db: Session = Depends(get_db),
) -> ClassSummaryResponse:
    """
    Class average, spread, completion and the students to watch.
    """
    school_class = provider.select_class(db, owner_id, class_id)
    if not school_class:
        raise NotFoundError("Class not found", {"class_id": str(class_id)})

    students = provider.select_class_students(db, owner_id, class_id)
    summary = analytics.summarize_class(
        class_name=school_class.name,
        subject=school_class.subject_name,
        students=[(student.id, student.full_name) for student in students],
        assessments=provider.select_class_assessments(db, owner_id, class_id),
        scores=provider.select_class_scores(db, owner_id, class_id),
    )
    return ClassSummaryResponse(data=summary)
