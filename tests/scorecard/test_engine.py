import pytest

from services.scorecard_engine.engine import ScorecardEngine
from services.scorecard_engine.insights import ALIGNMENT_WEAK_LEAD, SEVERITY_WARNING
from services.scorecard_engine.loader import load_scorecard_data
from services.scorecard_engine.models import (
    IncompleteAnswersError,
    InvalidAnswerError,
    Pillar,
    ScorecardReport,
    SeverityBand,
)


@pytest.fixture
def engine(scorecard_config):
    return ScorecardEngine(scorecard_config)


def test_build_report_critical_heart(engine, scenario_a_answers):
    report = engine.build_report(scenario_a_answers)

    assert isinstance(report, ScorecardReport)
    assert report.slug == "test-scorecard"
    assert report.scores.primary == Pillar.HEART
    assert report.scores.secondary == Pillar.HANDS
    assert report.primary_score == 1.0
    assert report.overall_avg == 3.3
    assert report.severity == SeverityBand.CRITICAL
    assert report.pattern == "Heart critical pattern"
    assert report.diagnosis.title == "Your primary issue: HEART"
    assert report.thirty_day_rule == "Heart rule"
    assert report.severity_copy == "Critical copy"
    assert report.severity_warning == SEVERITY_WARNING
    assert [q.id for q in report.lowest_questions] == ["q4", "q5", "q6"]
    assert report.alignment_note.status == "strong"
    assert report.packages.recommended.title == "Heart recommended"


def test_build_report_improving_all_neutral(engine, answers_factory):
    answers = answers_factory([3, 3, 3], [3, 3, 3], [3, 3, 3, 3], [3, 3])
    report = engine.build_report(answers)

    assert report.scores.primary == Pillar.SOUL
    assert report.severity == SeverityBand.IMPROVING
    assert report.pattern == "Soul improving pattern"
    assert report.severity_warning is None
    assert report.alignment_note is None


def test_build_report_weak_alignment(engine, answers_factory):
    answers = answers_factory([2, 2, 3], [4, 4, 4], [4, 4, 4, 4], [2, 3])
    report = engine.build_report(answers)

    assert report.scores.primary == Pillar.SOUL
    assert report.scores.soul_avg == 2.3
    assert report.severity == SeverityBand.LEAKING
    assert report.pattern == "Soul critical pattern"
    assert report.scores.align_avg == 2.5
    assert report.alignment_note.status == "weak"
    assert report.alignment_note.message == f"{ALIGNMENT_WEAK_LEAD} Soul alignment note."


def test_build_report_healthy(engine, answers_factory):
    answers = answers_factory([5, 5, 5], [4, 4, 5], [4, 4, 4, 4], [5, 5])
    report = engine.build_report(answers)

    assert report.scores.primary == Pillar.HANDS
    assert report.severity == SeverityBand.HEALTHY
    assert report.severity_copy == "Healthy copy"
    assert report.pattern == "Hands improving pattern"


def test_build_report_lowest_count(engine, scenario_a_answers):
    report = engine.build_report(scenario_a_answers, lowest_count=5)
    assert [q.id for q in report.lowest_questions] == ["q4", "q5", "q6", "q7", "q8"]


def test_build_report_without_packages(minimal_scorecard_data, scenario_a_answers):
    del minimal_scorecard_data["package_recommendations"]
    engine = ScorecardEngine(load_scorecard_data(minimal_scorecard_data))
    report = engine.build_report(scenario_a_answers)
    assert report.packages is None


def test_build_report_incomplete(engine, scenario_a_answers):
    del scenario_a_answers["q7"]
    with pytest.raises(IncompleteAnswersError) as excinfo:
        engine.build_report(scenario_a_answers)
    assert excinfo.value.missing == ["q7"]


def test_build_report_invalid(engine, scenario_a_answers):
    scenario_a_answers["q7"] = 9
    with pytest.raises(InvalidAnswerError):
        engine.build_report(scenario_a_answers)


def test_engine_is_reusable(engine, scenario_a_answers, answers_factory):
    first = engine.build_report(scenario_a_answers)
    engine.build_report(answers_factory([1, 1, 1], [5, 5, 5], [5, 5, 5, 5], [1, 1]))
    assert engine.build_report(scenario_a_answers) == first
    assert engine.slug == "test-scorecard"
