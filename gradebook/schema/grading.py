# gradebook/schema/grading.py
import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator

from gradebook.schema.base import BaseResponse

# Ids travel as strings: database UUIDs and posted integers or strings
# all compare equal once normalised.
Identifier = Annotated[str, BeforeValidator(str)]


class AssessmentCategory(BaseModel):
    id: Identifier
    name: str
    percentage_weight: float
    is_active: bool = True

    class Config:
        from_attributes = True


class Assessment(BaseModel):
    id: Identifier
    category_id: Optional[Identifier] = None
    max_score: float
    date: Optional[datetime.date] = None
    title: Optional[str] = None


class ScoreRecord(BaseModel):
    assessment_id: Identifier
    student_id: Optional[Identifier] = None
    raw_score: Optional[float] = None  # None means ungraded

    class Config:
        from_attributes = True


class CategoryAverage(BaseModel):
    category_id: Identifier
    name: str
    weight: float
    average: float
    weighted_contribution: float
    assessment_count: int


class FinalGradeResult(BaseModel):
    final_percentage: float = 0.0
    letter_grade: str = "F"
    total_weight_used: float = 0.0
    breakdown_by_category: List[CategoryAverage] = []
    is_complete: bool = False
    # Set when there is nothing to grade yet; the F above is not a failure then
    no_data: bool = False
    message: Optional[str] = None


class Trend(BaseModel):
    improving: bool = False
    consistent: bool = True
    declining: bool = False


# Request / response models for the API
class FinalGradeRequest(BaseModel):
    categories: List[AssessmentCategory]
    assessments: List[Assessment] = []
    scores: List[ScoreRecord] = []


class TrendRequest(BaseModel):
    percentages: List[float]


class FinalGradeResponse(BaseResponse[FinalGradeResult]):
    pass


class TrendResponse(BaseResponse[Trend]):
    pass
