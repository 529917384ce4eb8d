import logging
from typing import Mapping

from services.scorecard_engine import insights, scorer
from services.scorecard_engine.models import ScorecardConfig, ScorecardReport, ScoreResult

logger = logging.getLogger(__name__)


class ScorecardEngine:
    """
    Scores answers for a single scorecard and assembles the result bundle
    a results page renders. Holds no state besides the immutable config,
    so one instance can serve any number of respondents concurrently.
    """
    def __init__(self, config: ScorecardConfig):
        self.config = config

    @property
    def slug(self) -> str:
        return self.config.slug

    def calculate_scores(self, answers: Mapping[str, int]) -> ScoreResult:
        return scorer.calculate_scores(self.config, answers)

    def build_report(self, answers: Mapping[str, int], lowest_count: int = scorer.DEFAULT_LOWEST_COUNT) -> ScorecardReport:
        """
        Calculates the final assessment result based on user answers.

        Args:
            answers: A dictionary where keys are question IDs (e.g., 'q1') and
                     values are the selected scores (1-5).
            lowest_count: How many of the lowest-scoring questions to include.

        Returns:
            A ScorecardReport with averages, diagnosis, severity and copy.

        Raises:
            IncompleteAnswersError: If any question is unanswered.
            InvalidAnswerError: If a score is out of range or a question ID is unknown.
        """
        config = self.config
        scores = scorer.calculate_scores(config, answers)
        primary_score = scores.primary_score
        severity = scorer.get_severity_band(primary_score)

        report = ScorecardReport(
            slug=config.slug,
            scores=scores,
            overall_avg=scorer.overall_average(scores),
            primary_score=primary_score,
            severity=severity,
            pattern=insights.pattern(config, scores.primary, severity),
            diagnosis=insights.diagnosis_insight(config, scores.primary),
            thirty_day_rule=insights.thirty_day_rule(config, scores.primary),
            severity_copy=insights.severity_copy(config, severity),
            severity_warning=insights.severity_warning(severity),
            lowest_questions=scorer.get_lowest_questions(answers, config, lowest_count),
            alignment_note=insights.alignment_note(config, scores.primary, scores.align_avg),
            packages=insights.package_recommendation(config, scores.primary),
        )
        logger.info(
            f"Built report for '{config.slug}': primary={scores.primary.value} "
            f"({primary_score}), severity={severity.value}"
        )
        return report
