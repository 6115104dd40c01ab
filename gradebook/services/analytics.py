# gradebook/services/analytics.py
"""Report and class summary figures built on top of the grade engine."""
import datetime
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from gradebook.schema.grading import (
    Assessment,
    AssessmentCategory,
    Identifier,
    ScoreRecord,
)
from gradebook.schema.report import (
    ClassSummary,
    GradeBucket,
    ReportScore,
    StudentPerformance,
    StudentReport,
)
from gradebook.services.grading import (
    compute_final_grade,
    compute_trend,
    group_assessments,
    index_scores,
    letter_grade,
    round_half_up,
    validate_score,
)

logger = logging.getLogger(__name__)

# Coarse buckets for the class distribution chart
DISTRIBUTION_BUCKETS = (
    (90.0, "A"),
    (80.0, "B"),
    (70.0, "C"),
    (60.0, "D"),
)
FAILING_BUCKET = "F"

RISK_OF_FAILURE = 60.0
STRUGGLING = 70.0
MIN_IMPROVEMENT_POINTS = 4
LEADERBOARD_SIZE = 5


def _by_date(item: Tuple[Assessment, ScoreRecord]):
    assessment = item[0]
    # Undated assessments sort last
    return (assessment.date is None, assessment.date or datetime.date.min)


def graded_scores(
    assessments: Sequence[Assessment], scores: Sequence[ScoreRecord]
) -> List[Tuple[Assessment, ScoreRecord]]:
    """
    Pair each non-null score with its assessment, oldest assessment first.

    Raises:
        InvalidInputError: a score outside [0, max_score] or a max score <= 0.
    """
    by_id = {assessment.id: assessment for assessment in assessments}
    pairs = [
        (by_id[score.assessment_id], score)
        for score in scores
        if score.raw_score is not None and score.assessment_id in by_id
    ]
    for assessment, score in pairs:
        validate_score(assessment, score)
    return sorted(pairs, key=_by_date)


def score_percentages(
    assessments: Sequence[Assessment], scores: Sequence[ScoreRecord]
) -> List[float]:
    return [
        score.raw_score / assessment.max_score * 100
        for assessment, score in graded_scores(assessments, scores)
    ]


def overall_average(percentages: Sequence[float]) -> float:
    if not percentages:
        return 0.0
    return sum(percentages) / len(percentages)


def improvement_rate(percentages: Sequence[float]) -> float:
    """Second half mean minus first half mean, 0 with fewer than 4 points."""
    if len(percentages) < MIN_IMPROVEMENT_POINTS:
        return 0.0
    half = len(percentages) // 2
    return overall_average(percentages[half:]) - overall_average(percentages[:half])


def grade_distribution(percentages: Sequence[float]) -> List[GradeBucket]:
    counts = {letter: 0 for _, letter in DISTRIBUTION_BUCKETS}
    counts[FAILING_BUCKET] = 0

    for percentage in percentages:
        for threshold, letter in DISTRIBUTION_BUCKETS:
            if percentage >= threshold:
                counts[letter] += 1
                break
        else:
            counts[FAILING_BUCKET] += 1

    total = len(percentages)
    return [
        GradeBucket(
            grade=letter,
            count=count,
            percentage=round_half_up(count / total * 100) if total else 0.0,
        )
        for letter, count in counts.items()
    ]


def build_student_report(
    student_id: Identifier,
    student_name: str,
    class_name: str,
    categories: Sequence[AssessmentCategory],
    assessments: Sequence[Assessment],
    scores: Sequence[ScoreRecord],
    subject: Optional[str] = None,
) -> StudentReport:
    """
    Everything a student report card shows: the weighted final grade, the
    plain average of every graded assessment and the score trend.
    """
    final_grade = compute_final_grade(
        categories, group_assessments(assessments), index_scores(scores)
    )

    pairs = graded_scores(assessments, scores)
    percentages = [score.raw_score / assessment.max_score * 100 for assessment, score in pairs]
    average = round_half_up(overall_average(percentages))

    return StudentReport(
        student_id=student_id,
        student_name=student_name,
        class_name=class_name,
        subject=subject,
        final_grade=final_grade,
        overall_average=average,
        overall_letter_grade=letter_grade(average),
        trend=compute_trend(percentages),
        scores=[
            ReportScore(
                assessment_id=assessment.id,
                title=assessment.title,
                date=assessment.date,
                raw_score=score.raw_score,
                max_score=assessment.max_score,
                percentage=round_half_up(score.raw_score / assessment.max_score * 100),
            )
            for assessment, score in pairs
        ],
    )


def student_performance(
    student_id: Identifier,
    student_name: str,
    assessments: Sequence[Assessment],
    scores: Sequence[ScoreRecord],
) -> StudentPerformance:
    percentages = score_percentages(assessments, scores)
    if not percentages:
        return StudentPerformance(
            student_id=student_id,
            student_name=student_name,
            average=0.0,
            improvement_rate=0.0,
            risks_failure=True,
        )

    average = overall_average(percentages)
    return StudentPerformance(
        student_id=student_id,
        student_name=student_name,
        average=round_half_up(average),
        improvement_rate=round_half_up(improvement_rate(percentages)),
        risks_failure=average < RISK_OF_FAILURE,
    )


def summarize_class(
    class_name: str,
    students: Sequence[Tuple[Identifier, str]],
    assessments: Sequence[Assessment],
    scores: Sequence[ScoreRecord],
    subject: Optional[str] = None,
) -> ClassSummary:
    """
    Class-wide figures for the summary report.

    `students` holds (id, display name) pairs of the enrolled students;
    scores of anyone else are ignored.
    """
    students = [(str(student_id), name) for student_id, name in students]
    enrolled = {student_id for student_id, _ in students}
    class_scores = [score for score in scores if score.student_id in enrolled]
    percentages = score_percentages(assessments, class_scores)

    by_student: Dict[Identifier, List[ScoreRecord]] = {}
    for score in class_scores:
        by_student.setdefault(score.student_id, []).append(score)

    performance = [
        student_performance(student_id, name, assessments, by_student.get(student_id, []))
        for student_id, name in students
    ]

    possible = len(students) * len(assessments)
    completion = len(percentages) / possible * 100 if possible else 0.0

    logger.info(
        f"Summarised class {class_name}: {len(students)} students, "
        f"{len(assessments)} assessments, {len(percentages)} graded scores"
    )

    return ClassSummary(
        class_name=class_name,
        subject=subject,
        class_average=round_half_up(overall_average(percentages)),
        highest_score=round_half_up(max(percentages)) if percentages else 0.0,
        lowest_score=round_half_up(min(percentages)) if percentages else 0.0,
        total_assessments=len(assessments),
        total_students=len(students),
        completion_rate=round_half_up(completion),
        grade_distribution=grade_distribution(percentages),
        top_performers=sorted(performance, key=lambda p: p.average, reverse=True)[
            :LEADERBOARD_SIZE
        ],
        struggling_students=sorted(
            [p for p in performance if p.average < STRUGGLING], key=lambda p: p.average
        )[:LEADERBOARD_SIZE],
    )
