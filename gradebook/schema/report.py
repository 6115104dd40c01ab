# gradebook/schema/report.py
import datetime
from typing import List, Optional

from pydantic import BaseModel

from gradebook.schema.base import BaseResponse
from gradebook.schema.grading import FinalGradeResult, Identifier, Trend


class ReportScore(BaseModel):
    assessment_id: Identifier
    title: Optional[str] = None
    date: Optional[datetime.date] = None
    raw_score: float
    max_score: float
    percentage: float


class StudentReport(BaseModel):
    student_id: Identifier
    student_name: str
    class_name: str
    subject: Optional[str] = None
    final_grade: FinalGradeResult
    overall_average: float
    overall_letter_grade: str
    trend: Trend
    scores: List[ReportScore] = []


class GradeBucket(BaseModel):
    grade: str
    count: int = 0
    percentage: float = 0.0


class StudentPerformance(BaseModel):
    student_id: Identifier
    student_name: str
    average: float
    improvement_rate: float
    risks_failure: bool


class ClassSummary(BaseModel):
    class_name: str
    subject: Optional[str] = None
    class_average: float
    highest_score: float
    lowest_score: float
    total_assessments: int
    total_students: int
    completion_rate: float
    grade_distribution: List[GradeBucket]
    top_performers: List[StudentPerformance] = []
    struggling_students: List[StudentPerformance] = []


class StudentReportResponse(BaseResponse[StudentReport]):
    pass


class ClassSummaryResponse(BaseResponse[ClassSummary]):
    pass
