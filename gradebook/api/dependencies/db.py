# gradebook/api/dependencies/db.py
import logging
import uuid

from typing import Dict, List, Optional, Tuple
from sqlalchemy import select
from sqlalchemy.orm import Session

from gradebook.models.gradebook import (
    Assessment as ORMAssessment,
    AssessmentType as ORMAssessmentType,
    Enrollment as ORMEnrollment,
    SchoolClass as ORMSchoolClass,
    Score as ORMScore,
    Student as ORMStudent,
)
from gradebook.schema.grading import (
    Assessment,
    AssessmentCategory,
    ScoreRecord,
)
from gradebook.services.grading import group_assessments, index_scores

logger = logging.getLogger(__name__)


def select_class(
    db: Session, owner_id: uuid.UUID, class_id: uuid.UUID
) -> Optional[ORMSchoolClass]:
    """
    Fetch a class owned by the given teacher.

    Returns:
        The ORM SchoolClass, or None when it does not exist in the owner's scope
    """
    query = select(ORMSchoolClass).where(
        ORMSchoolClass.id == class_id,
        ORMSchoolClass.owner_id == owner_id,
    )
    return db.execute(query).scalars().first()


def select_student(
    db: Session, owner_id: uuid.UUID, student_id: uuid.UUID
) -> Optional[ORMStudent]:
    query = select(ORMStudent).where(
        ORMStudent.id == student_id,
        ORMStudent.owner_id == owner_id,
    )
    return db.execute(query).scalars().first()


def select_class_students(
    db: Session, owner_id: uuid.UUID, class_id: uuid.UUID
) -> List[ORMStudent]:
    query = (
        select(ORMStudent)
        .join(ORMEnrollment, ORMEnrollment.student_id == ORMStudent.id)
        .where(
            ORMEnrollment.class_id == class_id,
            ORMEnrollment.owner_id == owner_id,
            ORMStudent.owner_id == owner_id,
        )
        .order_by(ORMStudent.family_name, ORMStudent.first_name)
    )
    return list(db.execute(query).scalars().all())


def select_active_categories(
    db: Session, owner_id: uuid.UUID, to_pydantic: bool = True
) -> List[AssessmentCategory]:
    """
    Fetch the teacher's active assessment types, heaviest first.

    Args:
        db: Database session
        owner_id: The teacher the assessment types belong to
        to_pydantic: If True, returns AssessmentCategory models

    Returns:
        AssessmentCategory models if to_pydantic=True, ORM rows otherwise
    """
    query = (
        select(ORMAssessmentType)
        .where(
            ORMAssessmentType.owner_id == owner_id,
            ORMAssessmentType.is_active.is_(True),
        )
        .order_by(ORMAssessmentType.percentage_weight.desc())
    )
    rows = db.execute(query).scalars().all()

    if not to_pydantic:
        return list(rows)
    return [AssessmentCategory.model_validate(row) for row in rows]


def select_class_assessments(
    db: Session, owner_id: uuid.UUID, class_id: uuid.UUID
) -> List[Assessment]:
    query = (
        select(ORMAssessment)
        .where(
            ORMAssessment.class_id == class_id,
            ORMAssessment.owner_id == owner_id,
        )
        .order_by(ORMAssessment.date)
    )
    return [
        Assessment(
            id=row.id,
            category_id=row.assessment_type_id,
            max_score=row.max_score,
            date=row.date,
            title=row.title,
        )
        for row in db.execute(query).scalars().all()
    ]


def select_class_scores(
    db: Session,
    owner_id: uuid.UUID,
    class_id: uuid.UUID,
    student_id: uuid.UUID = None,
) -> List[ScoreRecord]:
    """
    Fetch scores recorded against a class's assessments, optionally for a
    single student.
    """
    query = (
        select(ORMScore)
        .join(ORMAssessment, ORMScore.assessment_id == ORMAssessment.id)
        .where(
            ORMAssessment.class_id == class_id,
            ORMAssessment.owner_id == owner_id,
            ORMScore.owner_id == owner_id,
        )
    )
    if student_id:
        query = query.where(ORMScore.student_id == student_id)

    return [ScoreRecord.model_validate(row) for row in db.execute(query).scalars().all()]


def load_grade_inputs(
    db: Session, owner_id: uuid.UUID, class_id: uuid.UUID, student_id: uuid.UUID
) -> Tuple[List[AssessmentCategory], Dict, Dict]:
    """
    Resolve everything the grade engine needs for one student in one class.

    Returns:
        (categories, assessments_by_category, scores_by_assessment)
    """
    categories = select_active_categories(db, owner_id)
    assessments = select_class_assessments(db, owner_id, class_id)
    scores = select_class_scores(db, owner_id, class_id, student_id)

    logger.debug(
        f"Loaded {len(categories)} categories, {len(assessments)} assessments "
        f"and {len(scores)} scores for student {student_id} in class {class_id}"
    )

    return categories, group_assessments(assessments), index_scores(scores)
