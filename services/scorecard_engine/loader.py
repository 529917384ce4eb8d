import logging
from pathlib import Path
from typing import Dict, Any, Union

import yaml
from pydantic import ValidationError

from services.scorecard_engine.models import (
    ScorecardConfig,
    ScorecardValidationError,
    MissingConfigEntry,
    SCORED_PILLARS,
    ALL_PILLARS,
    SeverityBand,
)

logger = logging.getLogger(__name__)


def load_scorecard_data(data: Dict[str, Any]) -> ScorecardConfig:
    """
    Validates the raw dictionary data against the ScorecardConfig model
    and performs the cross-field checks Pydantic cannot express.

    Raises:
        ValidationError: For schema issues (missing fields, wrong types, bad enums).
        ScorecardValidationError: For duplicate IDs or pillar mismatches.
        MissingConfigEntry: When a copy table is missing a pillar or severity band.
    """
    try:
        config = ScorecardConfig.model_validate(data)
    except ValidationError as e:
        # Re-raise Pydantic's validation error for schema issues
        raise e

    _validate_pillars_and_questions(config)
    _validate_copy_tables(config)
    logger.debug(f"Scorecard '{config.slug}' validated: {len(config.questions)} questions")
    return config


def _validate_pillars_and_questions(config: ScorecardConfig) -> None:
    pillar_ids = set()
    for section in config.pillars:
        if section.id in pillar_ids:
            raise ScorecardValidationError(f"Duplicate pillar ID found: {section.id.value}")
        pillar_ids.add(section.id)

    question_ids = set()
    for question in config.questions:
        if question.id in question_ids:
            raise ScorecardValidationError(f"Duplicate question ID found: {question.id}")
        question_ids.add(question.id)
        if question.pillar not in pillar_ids:
            raise ScorecardValidationError(
                f"Question '{question.id}' references pillar '{question.pillar.value}' "
                f"which is not declared in pillars"
            )

    # Every pillar average is reported, so every pillar needs at least one question.
    for pillar in ALL_PILLARS:
        if not config.questions_for(pillar):
            raise ScorecardValidationError(f"No questions defined for pillar '{pillar.value}'")


def _validate_copy_tables(config: ScorecardConfig) -> None:
    pillar_tables = {
        "diagnosis_insights": config.diagnosis_insights,
        "thirty_day_rules": config.thirty_day_rules,
        "patterns": config.patterns,
        "alignment_notes": config.alignment_notes,
    }
    if config.package_recommendations is not None:
        pillar_tables["package_recommendations"] = config.package_recommendations

    for table_name, table in pillar_tables.items():
        for pillar in SCORED_PILLARS:
            if pillar not in table:
                raise MissingConfigEntry(table_name, pillar.value, config.slug)

    for band in SeverityBand:
        if band not in config.severity_copy:
            raise MissingConfigEntry("severity_copy", band.value, config.slug)


def load_scorecard_from_file(file_path: Union[str, Path]) -> ScorecardConfig:
    """
    Loads a scorecard from a YAML file, validates it,
    and returns a ScorecardConfig object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ScorecardValidationError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise ScorecardValidationError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise ScorecardValidationError(f"YAML file is empty or invalid: {file_path}")

    return load_scorecard_data(data)
