# scripts/insert_initial_data.py
"""Seed a demo class so the grade endpoints have something to work on."""
import uuid
from datetime import date

from gradebook.database import SessionLocal, init_db
from gradebook.logging_config import app_logger
from gradebook.models.gradebook import (
    Assessment,
    AssessmentType,
    Enrollment,
    SchoolClass,
    Score,
    Student,
)

OWNER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")

init_db()
db = SessionLocal()

# Weighting buckets, summing to 100
quizzes = AssessmentType(owner_id=OWNER_ID, name="Quizzes", percentage_weight=30)
exams = AssessmentType(owner_id=OWNER_ID, name="Exams", percentage_weight=70)
db.add_all([quizzes, exams])

school_class = SchoolClass(owner_id=OWNER_ID, name="Grade 10 Maths", subject_name="Mathematics")
student = Student(owner_id=OWNER_ID, first_name="Ada", family_name="Lovelace")
db.add_all([school_class, student])
db.commit()

db.add(Enrollment(owner_id=OWNER_ID, class_id=school_class.id, student_id=student.id))

# (type, title, max score, date, raw score)
assessments = [
    (quizzes, "Quiz 1", 20, date(2024, 9, 10), 18),
    (quizzes, "Quiz 2", 20, date(2024, 9, 24), 15),
    (exams, "Midterm", 100, date(2024, 10, 15), 85),
    (exams, "Final", 100, date(2024, 12, 10), None),
]
for assessment_type, title, max_score, when, raw_score in assessments:
    assessment = Assessment(
        owner_id=OWNER_ID,
        class_id=school_class.id,
        assessment_type_id=assessment_type.id,
        title=title,
        max_score=max_score,
        date=when,
    )
    db.add(assessment)
    db.flush()
    db.add(
        Score(
            owner_id=OWNER_ID,
            assessment_id=assessment.id,
            student_id=student.id,
            raw_score=raw_score,
        )
    )
db.commit()

app_logger.info(
    f"Seeded class {school_class.id} with student {student.id} for owner {OWNER_ID}"
)
db.close()
