# gradebook/models/gradebook.py
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Float,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from gradebook.database import Base
from gradebook.models.base import OwnedMixin


class Student(Base, OwnedMixin):
    __tablename__ = "students"

    first_name = Column(String(155), nullable=False)
    family_name = Column(String(155), nullable=False, index=True)
    display_name = Column(String(155), nullable=True)

    enrollments = relationship("Enrollment", back_populates="student")
    scores = relationship("Score", back_populates="student")

    @property
    def full_name(self) -> str:
        return self.display_name or f"{self.family_name}, {self.first_name}"


class SchoolClass(Base, OwnedMixin):
    __tablename__ = "classes"

    name = Column(String(155), nullable=False)
    subject_name = Column(String(155), nullable=True)

    enrollments = relationship("Enrollment", back_populates="school_class")
    assessments = relationship("Assessment", back_populates="school_class")


class Enrollment(Base, OwnedMixin):
    __tablename__ = "enrollments"
    __table_args__ = (UniqueConstraint("class_id", "student_id"),)

    class_id = Column(UUID(as_uuid=True), ForeignKey("classes.id"), nullable=False)
    student_id = Column(UUID(as_uuid=True), ForeignKey("students.id"), nullable=False)

    school_class = relationship("SchoolClass", back_populates="enrollments")
    student = relationship("Student", back_populates="enrollments")


class AssessmentType(Base, OwnedMixin):
    """Weighting bucket, e.g. Quizzes 30%."""

    __tablename__ = "assessment_types"

    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    percentage_weight = Column(Float, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    assessments = relationship("Assessment", back_populates="assessment_type")


class Assessment(Base, OwnedMixin):
    __tablename__ = "assessments"

    class_id = Column(UUID(as_uuid=True), ForeignKey("classes.id"), nullable=False)
    assessment_type_id = Column(
        UUID(as_uuid=True), ForeignKey("assessment_types.id"), nullable=True
    )
    title = Column(String(200), nullable=False)
    max_score = Column(Float, nullable=False)
    date = Column(Date, nullable=True)

    school_class = relationship("SchoolClass", back_populates="assessments")
    assessment_type = relationship("AssessmentType", back_populates="assessments")
    scores = relationship("Score", back_populates="assessment")


class Score(Base, OwnedMixin):
    __tablename__ = "scores"
    __table_args__ = (UniqueConstraint("assessment_id", "student_id"),)

    assessment_id = Column(
        UUID(as_uuid=True), ForeignKey("assessments.id"), nullable=False
    )
    student_id = Column(UUID(as_uuid=True), ForeignKey("students.id"), nullable=False)
    # NULL means not graded yet
    raw_score = Column(Float, nullable=True)
    comment = Column(Text, nullable=True)

    assessment = relationship("Assessment", back_populates="scores")
    student = relationship("Student", back_populates="scores")
