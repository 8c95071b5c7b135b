"""CV store collaborators: source of the candidate pool for ranking.

The ranking pipeline only needs ``fetch_pool``; persistence and storage
details belong to the concrete store.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from models.requests import RankFilters
from models.schemas.candidate import CandidateRecord
from services.errors import CandidateStoreError
from services.gpa import normalize_gpa
from services.keywords import substring_match

logger = logging.getLogger(__name__)

LANGUAGE_FILTERS: dict[str, tuple[str, ...]] = {
    "en": ("english",),
    "ar": ("arabic",),
    "both": ("english", "arabic"),
}


def _error_locations(error: ValidationError) -> str:
    """Field locations and error types only; never the offending values."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or '<record>'}: {err['type']}"
        for err in error.errors(include_input=False, include_url=False)
    )


def _same(a: str, b: str) -> bool:
    return a.strip().casefold() == b.strip().casefold()


def _graduation_years(candidate: CandidateRecord) -> set[int]:
    years: set[int] = set()
    for entry in candidate.cv.education:
        for raw in (entry.graduation_year, entry.end_date[:4]):
            try:
                years.add(int(raw))
            except (TypeError, ValueError):
                continue
    return years


def matches_filters(candidate: CandidateRecord, filters: RankFilters | None) -> bool:
    if filters is None:
        return True
    if filters.field_of_study and not _same(candidate.field_of_study, filters.field_of_study):
        return False
    if filters.area_of_interest and not _same(candidate.area_of_interest, filters.area_of_interest):
        return False
    if filters.graduation_year is not None and filters.graduation_year not in _graduation_years(candidate):
        return False
    if filters.min_gpa is not None:
        gpas = [g for g in (normalize_gpa(e.gpa) for e in candidate.cv.education) if g is not None]
        if not gpas or gpas[0] < filters.min_gpa:
            return False
    if filters.language:
        spoken = " ".join(candidate.cv.all_languages)
        if not all(substring_match(lang, spoken) for lang in LANGUAGE_FILTERS[filters.language]):
            return False
    return True


class CandidateStore(ABC):
    """Read access to the candidate pool."""

    name: str = ""

    @abstractmethod
    def fetch_pool(self, filters: RankFilters | None = None) -> list[CandidateRecord]:
        """Return candidates matching ``filters`` in the store's natural order."""


class InMemoryCandidateStore(CandidateStore):
    name = "memory"

    def __init__(self, records: list[CandidateRecord] | None = None) -> None:
        self._records = list(records or [])

    def fetch_pool(self, filters: RankFilters | None = None) -> list[CandidateRecord]:
        return [c for c in self._records if matches_filters(c, filters)]


class JsonFileCandidateStore(CandidateStore):
    """Candidates from a JSON file holding a list of records.

    The file is re-read on every fetch so edits show up without a restart.
    """

    name = "json_file"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> list[CandidateRecord]:
        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CandidateStoreError(f"Could not read candidate store {self.path}: {e}") from e
        if not isinstance(raw, list):
            raise CandidateStoreError(f"Candidate store {self.path} must hold a JSON list")
        records = []
        for index, item in enumerate(raw):
            try:
                records.append(CandidateRecord.model_validate(item))
            except ValidationError as e:
                raise CandidateStoreError(
                    f"Invalid candidate record #{index} in {self.path}: {_error_locations(e)}"
                ) from e
        return records

    def fetch_pool(self, filters: RankFilters | None = None) -> list[CandidateRecord]:
        records = self._load()
        logger.debug("Loaded %d candidate records from %s", len(records), self.path)
        return [c for c in records if matches_filters(c, filters)]
