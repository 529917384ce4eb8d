import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from services.scorecard_engine.loader import load_scorecard_from_file
from services.scorecard_engine.models import ScorecardConfig, ScorecardValidationError

logger = logging.getLogger(__name__)

SCORECARD_PATTERNS = ("*.yml", "*.yaml")


class ScorecardRegistry:
    """
    Resolves URL slugs to validated scorecard configurations.
    Scorecards are loaded once and never mutated afterwards.
    """
    def __init__(self, scorecards: Iterable[ScorecardConfig] = ()):
        self._scorecards: Dict[str, ScorecardConfig] = {}
        for config in scorecards:
            self.register(config)

    @classmethod
    def from_directory(cls, directory: Union[str, Path]) -> "ScorecardRegistry":
        """
        Loads every YAML scorecard in ``directory`` (sorted by file name).

        Raises:
            ScorecardValidationError: If the directory is missing or a scorecard is invalid.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise ScorecardValidationError(f"Scorecard directory not found: {directory}")

        paths = sorted(p for pattern in SCORECARD_PATTERNS for p in directory.glob(pattern))
        registry = cls(load_scorecard_from_file(path) for path in paths)
        logger.info(f"Loaded {len(registry)} scorecards from {directory}: {registry.list_slugs()}")
        return registry

    def register(self, config: ScorecardConfig) -> None:
        if config.slug in self._scorecards:
            raise ScorecardValidationError(f"Duplicate scorecard slug found: {config.slug}")
        self._scorecards[config.slug] = config

    def get(self, slug: str) -> Optional[ScorecardConfig]:
        """Exact-match lookup. An unknown slug returns None, not an error."""
        return self._scorecards.get(slug)

    def list_slugs(self) -> List[str]:
        return list(self._scorecards)

    def __iter__(self):
        return iter(self._scorecards.values())

    def __len__(self) -> int:
        return len(self._scorecards)

    def __contains__(self, slug: object) -> bool:
        return slug in self._scorecards
