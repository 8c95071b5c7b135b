"""Keyword capability set and match predicates.

The keyword lists are data, not code: they ship as ``data/keywords.yaml`` and
can be replaced through the ``KEYWORDS_PATH`` setting without touching the
scorer. Matching goes through a ``MatchPredicate`` so substring matching can
be swapped for a fuzzier strategy.
"""

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Callable, Iterable

import yaml
from pydantic import BaseModel, ConfigDict
from rapidfuzz import fuzz

from config import settings

logger = logging.getLogger(__name__)

DEFAULT_KEYWORDS_PATH = Path(__file__).parent / "data" / "keywords.yaml"

# (needle, haystack) -> bool
MatchPredicate = Callable[[str, str], bool]

FUZZY_THRESHOLD = 90


def substring_match(needle: str, haystack: str) -> bool:
    """Case-insensitive containment. Empty needles never match."""
    needle = needle.strip().lower()
    return bool(needle) and needle in haystack.lower()


def fuzzy_match(needle: str, haystack: str) -> bool:
    """Substring match, falling back to Levenshtein partial-ratio for typos."""
    if substring_match(needle, haystack):
        return True
    needle = needle.strip().lower()
    if len(needle) < 4:  # short terms: exact containment only
        return False
    return fuzz.partial_ratio(needle, haystack.lower()) >= FUZZY_THRESHOLD


def contains_any(
    text: str, keywords: Iterable[str], predicate: MatchPredicate = substring_match
) -> bool:
    return any(predicate(kw, text) for kw in keywords)


@lru_cache(maxsize=32)
def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


class KeywordConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    version: str = "unversioned"
    quantified_pattern: str = r"(\b\d+(?:[.,]\d+)?\b|\b\d+(?:k|m)\b|%)"
    deployment_url_pattern: str = r"https?://"
    leadership: tuple[str, ...] = ()
    technology: tuple[str, ...] = ()
    skill_cert_markers: tuple[str, ...] = ()
    cert_markers: tuple[str, ...] = ()
    award_markers: tuple[str, ...] = ()
    extracurricular_markers: tuple[str, ...] = ()
    honors_markers: tuple[str, ...] = ()
    natural_languages: tuple[str, ...] = ()

    def is_quantified(self, text: str) -> bool:
        return bool(_compile(self.quantified_pattern).search(text))

    def is_deployment_url(self, text: str) -> bool:
        return bool(text) and bool(_compile(self.deployment_url_pattern).search(text))


def load_keyword_config(path: str | Path | None = None) -> KeywordConfig:
    """Read a keyword capability set from YAML."""
    path = Path(path) if path else DEFAULT_KEYWORDS_PATH
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    config = KeywordConfig.model_validate(raw)
    logger.info("Loaded keyword config %s from %s", config.version, path)
    return config


@lru_cache(maxsize=1)
def get_keyword_config() -> KeywordConfig:
    return load_keyword_config(settings.keywords_path or None)


MATCH_PREDICATES: dict[str, MatchPredicate] = {
    "substring": substring_match,
    "fuzzy": fuzzy_match,
}


def get_match_predicate(strategy: str = "substring") -> MatchPredicate:
    try:
        return MATCH_PREDICATES[strategy]
    except KeyError:
        raise ValueError(f"Unknown match strategy: {strategy}") from None
