# services/scorecard_engine/insights.py
# Copy and recommendation lookups keyed by primary pillar and severity band.

import logging
from typing import Any, Mapping, Optional

from services.scorecard_engine.models import (
    ScorecardConfig,
    DiagnosisInsight,
    PackageRecommendation,
    AlignmentNote,
    MissingConfigEntry,
    Pillar,
    SeverityBand,
)

logger = logging.getLogger(__name__)

ALIGNMENT_WEAK_THRESHOLD = 2.5
ALIGNMENT_STRONG_THRESHOLD = 4.0

ALIGNMENT_WEAK_LEAD = (
    "Alignment is currently weak. Strategy and output are not reinforcing each other, "
    "so results stall quickly."
)
ALIGNMENT_STRONG_MESSAGE = (
    "Alignment looks strong. Strategy is showing up in the work, so keep it tight and consistent."
)
SEVERITY_WARNING = "Left unchecked, this usually stalls growth even if spend increases."

CRITICAL_LEANING = (SeverityBand.CRITICAL, SeverityBand.LEAKING)


def _lookup(config: ScorecardConfig, table_name: str, table: Mapping, key) -> Any:
    try:
        return table[key]
    except KeyError:
        logger.error(f"Scorecard '{config.slug}' has no '{key.value}' entry in {table_name}")
        raise MissingConfigEntry(table_name, key.value, config.slug)


def is_critical_leaning(severity: SeverityBand) -> bool:
    return severity in CRITICAL_LEANING


def diagnosis_insight(config: ScorecardConfig, primary: Pillar) -> DiagnosisInsight:
    return _lookup(config, "diagnosis_insights", config.diagnosis_insights, primary)


def thirty_day_rule(config: ScorecardConfig, primary: Pillar) -> str:
    return _lookup(config, "thirty_day_rules", config.thirty_day_rules, primary)


def severity_copy(config: ScorecardConfig, severity: SeverityBand) -> str:
    return _lookup(config, "severity_copy", config.severity_copy, severity)


def pattern(config: ScorecardConfig, primary: Pillar, severity: SeverityBand) -> str:
    """
    Pattern label for the primary pillar. Critical and Leaking use the
    ``critical`` copy; Improving and Healthy use the ``improving`` copy.
    """
    copy = _lookup(config, "patterns", config.patterns, primary)
    return copy.critical if is_critical_leaning(severity) else copy.improving


def package_recommendation(config: ScorecardConfig, primary: Pillar) -> Optional[PackageRecommendation]:
    """Recommended/alternative packages, or None when the scorecard offers none."""
    if config.package_recommendations is None:
        return None
    return _lookup(config, "package_recommendations", config.package_recommendations, primary)


def alignment_note(config: ScorecardConfig, primary: Pillar, align_avg: float) -> Optional[AlignmentNote]:
    """
    Supplementary note when the Alignment average is low (<= 2.5) or high (>= 4.0).
    The weak note is tailored to the primary pillar.
    """
    if align_avg <= ALIGNMENT_WEAK_THRESHOLD:
        note = _lookup(config, "alignment_notes", config.alignment_notes, primary)
        return AlignmentNote(status="weak", message=f"{ALIGNMENT_WEAK_LEAD} {note}")
    if align_avg >= ALIGNMENT_STRONG_THRESHOLD:
        return AlignmentNote(status="strong", message=ALIGNMENT_STRONG_MESSAGE)
    return None


def severity_warning(severity: SeverityBand) -> Optional[str]:
    return SEVERITY_WARNING if is_critical_leaning(severity) else None
