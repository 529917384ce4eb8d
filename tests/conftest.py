import copy

import pytest

from services.scorecard_engine.loader import load_scorecard_data
from services.scorecard_engine.models import ScorecardConfig

PILLAR_LAYOUT = [
    ("Soul", ["q1", "q2", "q3"]),
    ("Heart", ["q4", "q5", "q6"]),
    ("Hands", ["q7", "q8", "q9", "q10"]),
    ("Alignment", ["q11", "q12"]),
]

# Minimal valid scorecard for testing; mirrors the 3/3/4/2 layout of the bundled scorecards
MINIMAL_SCORECARD = {
    "slug": "test-scorecard",
    "title": "Test Scorecard",
    "subtitle": "12 questions.",
    "intro": {"heading": "How it works", "body": "Answer honestly."},
    "pillars": [
        {"id": pillar, "title": pillar, "subtitle": f"{pillar} subtitle", "question_range": f"{ids[0]}-{ids[-1]}"}
        for pillar, ids in PILLAR_LAYOUT
    ],
    "questions": [
        {"id": qid, "pillar": pillar, "text": f"Question {qid} about {pillar}."}
        for pillar, ids in PILLAR_LAYOUT
        for qid in ids
    ],
    "scale_labels": ["Strongly Disagree", "Disagree", "Neutral", "Agree", "Strongly Agree"],
    "theme": {"brand_name": "Test Brand", "accent": "#000000", "accent_hover": "#111111"},
    "handoff": {"source": "testsource", "route_tag": "test_route"},
    "results_cta": {"label": "Get the plan", "description": "We'll send it.", "button_text": "Send"},
    "diagnosis_insights": {
        pillar: {
            "title": f"Your primary issue: {pillar.upper()}",
            "pattern": f"{pillar} pattern",
            "consequence": f"{pillar} consequence",
        }
        for pillar in ("Soul", "Heart", "Hands")
    },
    "package_recommendations": {
        pillar: {
            kind: {
                "title": f"{pillar} {kind}",
                "audience": "Teams",
                "bullets": ["one", "two"],
                "outcome": "Better",
                "cta": {"label": "Go", "href": "/contact"},
            }
            for kind in ("recommended", "alternative")
        }
        for pillar in ("Soul", "Heart", "Hands")
    },
    "severity_copy": {
        "Critical": "Critical copy",
        "Leaking": "Leaking copy",
        "Improving": "Improving copy",
        "Healthy": "Healthy copy",
    },
    "thirty_day_rules": {pillar: f"{pillar} rule" for pillar in ("Soul", "Heart", "Hands")},
    "patterns": {
        pillar: {"critical": f"{pillar} critical pattern", "improving": f"{pillar} improving pattern"}
        for pillar in ("Soul", "Heart", "Hands")
    },
    "alignment_notes": {pillar: f"{pillar} alignment note." for pillar in ("Soul", "Heart", "Hands")},
}


def build_answers(soul, heart, hands, alignment):
    """Answer map from per-pillar score lists in the 3/3/4/2 layout."""
    scores = list(soul) + list(heart) + list(hands) + list(alignment)
    assert len(scores) == 12
    return {f"q{i}": score for i, score in enumerate(scores, start=1)}


@pytest.fixture
def minimal_scorecard_data() -> dict:
    # Return a deep copy to prevent modification across tests
    return copy.deepcopy(MINIMAL_SCORECARD)


@pytest.fixture
def scorecard_config(minimal_scorecard_data) -> ScorecardConfig:
    return load_scorecard_data(minimal_scorecard_data)


@pytest.fixture
def answers_factory():
    return build_answers


@pytest.fixture
def scenario_a_answers():
    """Soul 5s, Heart 1s, Hands 3s, Alignment 4s."""
    return build_answers([5, 5, 5], [1, 1, 1], [3, 3, 3, 3], [4, 4])
