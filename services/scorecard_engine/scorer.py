# services/scorecard_engine/scorer.py
# Pure scoring functions: pillar averages, primary/secondary ranking,
# severity bands and the lowest-scoring questions.

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Mapping, Tuple

from services.scorecard_engine.models import (
    ScorecardConfig,
    ScoreResult,
    LowestQuestion,
    Pillar,
    SeverityBand,
    SCORED_PILLARS,
    ALL_PILLARS,
    SCALE_MIN,
    SCALE_MAX,
    IncompleteAnswersError,
    InvalidAnswerError,
)

logger = logging.getLogger(__name__)

Answers = Mapping[str, int]

# Lower bounds, checked from the top band down.
SEVERITY_THRESHOLDS: List[Tuple[float, SeverityBand]] = [
    (4.0, SeverityBand.HEALTHY),
    (3.0, SeverityBand.IMPROVING),
    (2.0, SeverityBand.LEAKING),
]

DEFAULT_LOWEST_COUNT = 3


def round_to_one(value: float) -> float:
    """Rounds half away from zero to one decimal place (3.05 -> 3.1, 3.04 -> 3.0)."""
    # str() gives the shortest repr, so 3.05 stays 3.05 rather than 3.04999...
    quantized = Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return float(quantized)


def missing_answers(answers: Answers, config: ScorecardConfig) -> List[str]:
    """Question IDs without an answer, in configuration order."""
    return [qid for qid in config.question_ids if answers.get(qid) is None]


def all_answered(answers: Answers, config: ScorecardConfig) -> bool:
    return not missing_answers(answers, config)


def validate_answers(answers: Answers, config: ScorecardConfig) -> None:
    """
    Checks the answer map is complete and every score is on the 1-5 scale.

    Raises:
        IncompleteAnswersError: If any configured question has no answer.
        InvalidAnswerError: For unknown question IDs or out-of-range scores.
    """
    known_ids = set(config.question_ids)
    unknown = sorted(qid for qid in answers if qid not in known_ids)
    if unknown:
        raise InvalidAnswerError(f"Unknown question IDs for scorecard '{config.slug}': {unknown}")

    missing = missing_answers(answers, config)
    if missing:
        raise IncompleteAnswersError(missing)

    for qid in config.question_ids:
        score = answers[qid]
        # bool is an int subclass; reject it explicitly
        if isinstance(score, bool) or not isinstance(score, int):
            raise InvalidAnswerError(f"Invalid score {score!r} for question '{qid}'. Expected an integer.")
        if not SCALE_MIN <= score <= SCALE_MAX:
            raise InvalidAnswerError(
                f"Invalid score {score} for question '{qid}'. Expected {SCALE_MIN}-{SCALE_MAX}."
            )


def calculate_pillar_averages(answers: Answers, config: ScorecardConfig) -> Dict[Pillar, float]:
    """
    Mean score per pillar (including Alignment), rounded to one decimal.

    Args:
        answers: Question ID -> score (1-5). Must be complete.
        config: The scorecard the answers belong to.

    Returns:
        A dictionary of Pillar -> rounded average.
    """
    validate_answers(answers, config)

    averages = {}
    for pillar in ALL_PILLARS:
        scores = [answers[q.id] for q in config.questions_for(pillar)]
        averages[pillar] = round_to_one(sum(scores) / len(scores))
    return averages


def rank_scored_pillars(averages: Mapping[Pillar, float]) -> List[Tuple[Pillar, float]]:
    """Scored pillars from lowest to highest average; ties keep Soul, Heart, Hands order."""
    # sorted() is stable and SCORED_PILLARS is already in canonical order
    return sorted(
        ((pillar, averages[pillar]) for pillar in SCORED_PILLARS),
        key=lambda item: item[1],
    )


def calculate_scores(config: ScorecardConfig, answers: Answers) -> ScoreResult:
    """
    Computes the pillar averages and the primary/secondary diagnosis.

    Raises:
        IncompleteAnswersError: If invoked before every question has an answer.
        InvalidAnswerError: For out-of-range scores or unknown question IDs.
    """
    averages = calculate_pillar_averages(answers, config)
    ranked = rank_scored_pillars(averages)

    result = ScoreResult(
        soul_avg=averages[Pillar.SOUL],
        heart_avg=averages[Pillar.HEART],
        hands_avg=averages[Pillar.HANDS],
        align_avg=averages[Pillar.ALIGNMENT],
        primary=ranked[0][0],
        secondary=ranked[1][0],
    )
    logger.debug(f"Scored '{config.slug}': primary={result.primary.value}, secondary={result.secondary.value}")
    return result


def get_severity_band(score: float) -> SeverityBand:
    """Maps an average to its band. Lower bounds are inclusive."""
    for threshold, band in SEVERITY_THRESHOLDS:
        if score >= threshold:
            return band
    return SeverityBand.CRITICAL


def get_lowest_questions(
    answers: Answers,
    config: ScorecardConfig,
    count: int = DEFAULT_LOWEST_COUNT,
) -> List[LowestQuestion]:
    """
    The ``count`` lowest-scored questions. Equal scores keep configuration order.
    """
    validate_answers(answers, config)
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    numbered = list(enumerate(config.questions, start=1))
    ordered = sorted(numbered, key=lambda item: answers[item[1].id])
    return [
        LowestQuestion(
            id=question.id,
            number=number,
            pillar=question.pillar,
            text=question.text,
            score=answers[question.id],
        )
        for number, question in ordered[:count]
    ]


def overall_average(scores: ScoreResult) -> float:
    """Mean of the four rounded pillar averages, rounded again to one decimal."""
    values = [scores.average_for(pillar) for pillar in ALL_PILLARS]
    return round_to_one(sum(values) / len(values))


def lowest_pillars(scores: ScoreResult, count: int = 2) -> List[Pillar]:
    ranked = sorted(SCORED_PILLARS, key=scores.average_for)
    return ranked[:count]


def highest_pillars(scores: ScoreResult, count: int = 2) -> List[Pillar]:
    # reverse=True keeps ties in canonical order
    ranked = sorted(SCORED_PILLARS, key=scores.average_for, reverse=True)
    return ranked[:count]
