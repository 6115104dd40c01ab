# gradebook/services/grading.py
"""
Weighted grade aggregation.

Turns one student's raw scores into per-category averages, a weighted final
percentage and a letter grade. Pure computation: callers fetch and scope the
data, this module only does arithmetic on it.
"""
import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from gradebook.exceptions import InvalidInputError
from gradebook.schema.grading import (
    Assessment,
    AssessmentCategory,
    CategoryAverage,
    FinalGradeResult,
    Identifier,
    ScoreRecord,
    Trend,
)

logger = logging.getLogger(__name__)

# Evaluated top down, first threshold the percentage reaches wins
LETTER_GRADES = (
    (97.0, "A+"),
    (93.0, "A"),
    (90.0, "A-"),
    (87.0, "B+"),
    (83.0, "B"),
    (80.0, "B-"),
    (77.0, "C+"),
    (73.0, "C"),
    (70.0, "C-"),
    (67.0, "D+"),
    (65.0, "D"),
)
FAILING_GRADE = "F"

FULL_WEIGHT = 100.0
TREND_THRESHOLD = 5.0
MIN_TREND_POINTS = 3

NO_CATEGORIES_MESSAGE = "No active assessment types configured"
NO_SCORES_MESSAGE = "No graded assessments yet"


def round_half_up(value: float, places: int = 2) -> float:
    """Round like a gradebook does: 84.125 -> 84.13, never banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def letter_grade(percentage: float) -> str:
    for threshold, letter in LETTER_GRADES:
        if percentage >= threshold:
            return letter
    return FAILING_GRADE


def _check_finite(value: float, what: str):
    if value is None or not math.isfinite(value):
        raise InvalidInputError(f"{what} must be a finite number", {"value": str(value)})


def validate_category(category: AssessmentCategory):
    weight = category.percentage_weight
    _check_finite(weight, f"Weight of category {category.id}")
    if not 0 < weight <= FULL_WEIGHT:
        raise InvalidInputError(
            f"Weight of category {category.id} must be in (0, 100], got {weight}",
            {"category_id": str(category.id), "percentage_weight": weight},
        )


def validate_score(assessment: Assessment, score: ScoreRecord):
    _check_finite(assessment.max_score, f"Max score of assessment {assessment.id}")
    if assessment.max_score <= 0:
        raise InvalidInputError(
            f"Max score of assessment {assessment.id} must be positive",
            {"assessment_id": str(assessment.id), "max_score": assessment.max_score},
        )
    if score is None or score.raw_score is None:
        return
    _check_finite(score.raw_score, f"Score for assessment {assessment.id}")
    if not 0 <= score.raw_score <= assessment.max_score:
        raise InvalidInputError(
            f"Score {score.raw_score} for assessment {assessment.id} "
            f"is outside [0, {assessment.max_score}]",
            {
                "assessment_id": str(assessment.id),
                "raw_score": score.raw_score,
                "max_score": assessment.max_score,
            },
        )


def group_assessments(
    assessments: Iterable[Assessment],
) -> Dict[Optional[Identifier], List[Assessment]]:
    grouped: Dict[Optional[Identifier], List[Assessment]] = {}
    for assessment in assessments:
        grouped.setdefault(assessment.category_id, []).append(assessment)
    return grouped


def index_scores(scores: Iterable[ScoreRecord]) -> Dict[Identifier, ScoreRecord]:
    return {score.assessment_id: score for score in scores}


def _no_data(message: str) -> FinalGradeResult:
    return FinalGradeResult(no_data=True, message=message)


def compute_final_grade(
    categories: Sequence[AssessmentCategory],
    assessments_by_category: Mapping[Optional[Identifier], Sequence[Assessment]],
    scores_by_assessment: Mapping[Identifier, Optional[ScoreRecord]],
) -> FinalGradeResult:
    """
    Compute a student's final grade.

    Inactive categories are ignored. Within an active category, assessments
    without a score (or with raw_score None) are left out of the average;
    a category with no scored assessment is left out of the grade altogether.
    The final percentage is re-normalised against the weight actually
    graded, so a student graded only in a 30% category gets that category's
    average as their final grade. `is_complete` reports whether that weight
    is the full 100.

    Raises:
        InvalidInputError: a weight outside (0, 100], a max score <= 0 or a
            raw score outside [0, max_score].
    """
    for category in categories:
        validate_category(category)
    for assessments in assessments_by_category.values():
        for assessment in assessments:
            validate_score(assessment, scores_by_assessment.get(assessment.id))

    active = [category for category in categories if category.is_active]
    if not active:
        return _no_data(NO_CATEGORIES_MESSAGE)

    breakdown: List[CategoryAverage] = []
    weighted_total = 0.0
    total_weight = 0.0

    for category in active:
        percentages = []
        for assessment in assessments_by_category.get(category.id, ()):
            score = scores_by_assessment.get(assessment.id)
            if score is None or score.raw_score is None:
                continue
            percentages.append(score.raw_score / assessment.max_score * 100)

        if not percentages:
            continue

        average = sum(percentages) / len(percentages)
        contribution = average * category.percentage_weight / 100
        weighted_total += contribution
        total_weight += category.percentage_weight

        breakdown.append(
            CategoryAverage(
                category_id=category.id,
                name=category.name,
                weight=category.percentage_weight,
                average=round_half_up(average),
                weighted_contribution=round_half_up(contribution),
                assessment_count=len(percentages),
            )
        )

    if total_weight <= 0:
        return _no_data(NO_SCORES_MESSAGE)

    final_percentage = round_half_up(weighted_total * 100 / total_weight)
    is_complete = math.isclose(total_weight, FULL_WEIGHT, abs_tol=1e-9)
    if not is_complete:
        logger.debug(
            f"Final grade covers {total_weight}% of the weight, re-normalised"
        )

    return FinalGradeResult(
        final_percentage=final_percentage,
        letter_grade=letter_grade(final_percentage),
        total_weight_used=round_half_up(total_weight),
        breakdown_by_category=breakdown,
        is_complete=is_complete,
    )


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def compute_trend(percentages: Sequence[float]) -> Trend:
    """
    Compare the first and last third of chronologically ordered percentages;
    the middle third is ignored. A move of more than 5 points either way is
    a trend, anything less is consistent.
    """
    if len(percentages) < MIN_TREND_POINTS:
        return Trend(improving=False, consistent=True, declining=False)

    third = len(percentages) // 3
    difference = _mean(percentages[-third:]) - _mean(percentages[:third])

    return Trend(
        improving=difference > TREND_THRESHOLD,
        consistent=abs(difference) <= TREND_THRESHOLD,
        declining=difference < -TREND_THRESHOLD,
    )
