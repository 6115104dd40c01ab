import os
import uuid
from datetime import date

import pytest

os.environ.setdefault("DB_URL", "sqlite://")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gradebook.database import Base, get_db, init_db
from gradebook.main import app
from gradebook.models.gradebook import (
    Assessment,
    AssessmentType,
    Enrollment,
    SchoolClass,
    Score,
    Student,
)
from gradebook.schema.grading import (
    Assessment as AssessmentIn,
    AssessmentCategory,
    ScoreRecord,
)

OWNER_ID = uuid.UUID("00000000-0000-0000-0000-0000000000aa")
OTHER_OWNER_ID = uuid.UUID("00000000-0000-0000-0000-0000000000bb")


@pytest.fixture
def quizzes():
    return AssessmentCategory(id="quizzes", name="Quizzes", percentage_weight=30)


@pytest.fixture
def exams():
    return AssessmentCategory(id="exams", name="Exams", percentage_weight=70)


@pytest.fixture
def example_assessments():
    return [
        AssessmentIn(id="q1", category_id="quizzes", max_score=20, date=date(2024, 9, 10)),
        AssessmentIn(id="q2", category_id="quizzes", max_score=20, date=date(2024, 9, 24)),
        AssessmentIn(id="e1", category_id="exams", max_score=100, date=date(2024, 10, 15)),
    ]


@pytest.fixture
def example_scores():
    return [
        ScoreRecord(assessment_id="q1", student_id="s1", raw_score=18),
        ScoreRecord(assessment_id="q2", student_id="s1", raw_score=15),
        ScoreRecord(assessment_id="e1", student_id="s1", raw_score=85),
    ]


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def seeded(db_session):
    """
    One class with two enrolled students, Quizzes 30% and Exams 70%.
    Ada has the worked example scores, Bob only has one quiz graded.
    """
    db = db_session
    quizzes = AssessmentType(owner_id=OWNER_ID, name="Quizzes", percentage_weight=30)
    exams = AssessmentType(owner_id=OWNER_ID, name="Exams", percentage_weight=70)
    retired = AssessmentType(
        owner_id=OWNER_ID, name="Homework", percentage_weight=10, is_active=False
    )
    school_class = SchoolClass(owner_id=OWNER_ID, name="Grade 10 Maths", subject_name="Mathematics")
    ada = Student(owner_id=OWNER_ID, first_name="Ada", family_name="Lovelace")
    bob = Student(owner_id=OWNER_ID, first_name="Bob", family_name="Brown", display_name="Bobby Brown")
    db.add_all([quizzes, exams, retired, school_class, ada, bob])
    db.commit()

    db.add_all(
        [
            Enrollment(owner_id=OWNER_ID, class_id=school_class.id, student_id=ada.id),
            Enrollment(owner_id=OWNER_ID, class_id=school_class.id, student_id=bob.id),
        ]
    )

    q1 = Assessment(owner_id=OWNER_ID, class_id=school_class.id, assessment_type_id=quizzes.id,
                    title="Quiz 1", max_score=20, date=date(2024, 9, 10))
    q2 = Assessment(owner_id=OWNER_ID, class_id=school_class.id, assessment_type_id=quizzes.id,
                    title="Quiz 2", max_score=20, date=date(2024, 9, 24))
    e1 = Assessment(owner_id=OWNER_ID, class_id=school_class.id, assessment_type_id=exams.id,
                    title="Midterm", max_score=100, date=date(2024, 10, 15))
    hw = Assessment(owner_id=OWNER_ID, class_id=school_class.id, assessment_type_id=retired.id,
                    title="Homework 1", max_score=10, date=date(2024, 9, 12))
    db.add_all([q1, q2, e1, hw])
    db.commit()

    db.add_all(
        [
            Score(owner_id=OWNER_ID, assessment_id=q1.id, student_id=ada.id, raw_score=18),
            Score(owner_id=OWNER_ID, assessment_id=q2.id, student_id=ada.id, raw_score=15),
            Score(owner_id=OWNER_ID, assessment_id=e1.id, student_id=ada.id, raw_score=85),
            Score(owner_id=OWNER_ID, assessment_id=hw.id, student_id=ada.id, raw_score=2),
            Score(owner_id=OWNER_ID, assessment_id=q1.id, student_id=bob.id, raw_score=12),
            Score(owner_id=OWNER_ID, assessment_id=e1.id, student_id=bob.id, raw_score=None),
        ]
    )
    db.commit()

    return {
        "class_id": school_class.id,
        "ada_id": ada.id,
        "bob_id": bob.id,
    }
