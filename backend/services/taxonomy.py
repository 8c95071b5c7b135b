"""Career taxonomy: field of study -> area of interest -> vacancy titles.

Static, read-only lookup data shipped as ``data/career_map.yaml``.
"""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict

from config import settings

logger = logging.getLogger(__name__)

DEFAULT_TAXONOMY_PATH = Path(__file__).parent / "data" / "career_map.yaml"
VACANCY_SEPARATOR = "/"


class TaxonomyRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    area: str
    vacancies: str  # "/"-separated vacancy titles

    @property
    def vacancy_titles(self) -> list[str]:
        return [v.strip() for v in self.vacancies.split(VACANCY_SEPARATOR) if v.strip()]


def _key(text: str) -> str:
    return text.strip().casefold()


class CareerTaxonomy:
    def __init__(self, rows: list[TaxonomyRow], version: str = "unversioned") -> None:
        self.rows = rows
        self.version = version

    def vacancies_by_area(self, field: str) -> dict[str, list[str]]:
        return {
            r.area: r.vacancy_titles for r in self.rows if _key(r.field) == _key(field)
        }

    def field_offers_vacancy(self, field: str, word: str) -> bool:
        """True if any vacancy under ``field`` contains ``word`` (case-insensitive)."""
        word = word.strip().lower()
        if not word or not field:
            return False
        return any(
            word in vacancy.lower()
            for titles in self.vacancies_by_area(field).values()
            for vacancy in titles
        )

    def as_mapping(self) -> dict[str, dict[str, list[str]]]:
        mapping: dict[str, dict[str, list[str]]] = {}
        for row in self.rows:
            mapping.setdefault(row.field, {})[row.area] = row.vacancy_titles
        return mapping


def load_taxonomy(path: str | Path | None = None) -> CareerTaxonomy:
    path = Path(path) if path else DEFAULT_TAXONOMY_PATH
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    rows = [TaxonomyRow.model_validate(r) for r in raw.get("rows", [])]
    logger.info("Loaded career taxonomy %s (%d rows) from %s", raw.get("version"), len(rows), path)
    return CareerTaxonomy(rows, version=str(raw.get("version", "unversioned")))


@lru_cache(maxsize=1)
def get_taxonomy() -> CareerTaxonomy:
    return load_taxonomy(settings.taxonomy_path or None)
