"""Query enhancement: tokenization, typo correction and synonym expansion."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import orjson
import structlog

from shared.constants import DEFAULT_SYNONYMS, DEFAULT_TYPO_VARIANTS

logger = structlog.get_logger()

_WHITESPACE = re.compile(r"\s+")


def normalize_query(raw: str | None) -> str:
    """Lowercase, trim and collapse internal whitespace."""
    if not raw:
        return ""
    return _WHITESPACE.sub(" ", raw.strip().lower())


@dataclass(frozen=True)
class EnhancedQuery:
    """Deduplicated search terms derived from a raw query, in discovery order."""

    original: str
    terms: list[str] = field(default_factory=list)


class QueryEnhancer:
    """Expands raw user text into the set of terms used for matching.

    Dictionaries map a canonical term to its variants. Typo correction is
    bidirectional and exact: a query (or one of its tokens) equal to a known
    misspelling adds the canonical term, and a query containing the
    canonical term adds all of its misspellings. Synonyms are added when the
    query contains the canonical term as a substring.
    """

    def __init__(
        self,
        typo_variants: Mapping[str, list[str]] | None = None,
        synonyms: Mapping[str, list[str]] | None = None,
    ):
        self.typo_variants = self._normalize_mapping(
            DEFAULT_TYPO_VARIANTS if typo_variants is None else typo_variants
        )
        self.synonyms = self._normalize_mapping(
            DEFAULT_SYNONYMS if synonyms is None else synonyms
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "QueryEnhancer":
        """
        Load dictionaries from a JSON file.

        The file holds ``{"typos": {canonical: [variants]}, "synonyms": {...}}``;
        a missing section falls back to the built-in dictionary.
        """
        data = orjson.loads(Path(path).read_bytes())
        enhancer = cls(typo_variants=data.get("typos"), synonyms=data.get("synonyms"))
        logger.info(
            "Loaded query dictionaries",
            path=str(path),
            typo_entries=len(enhancer.typo_variants),
            synonym_entries=len(enhancer.synonyms),
        )
        return enhancer

    def enhance(self, raw_query: str | None) -> EnhancedQuery:
        original = normalize_query(raw_query)
        if not original:
            return EnhancedQuery(original="")

        words = original.split(" ")
        terms: list[str] = list(words)
        if len(words) > 1:
            terms.append(original)

        terms.extend(self.typo_corrections(original, words))
        terms.extend(self.synonyms_for(original))

        return EnhancedQuery(original=original, terms=list(dict.fromkeys(terms)))

    def typo_corrections(self, query: str, words: list[str] | None = None) -> list[str]:
        tokens = set(words if words is not None else query.split(" "))
        corrections: list[str] = []
        for canonical, variants in self.typo_variants.items():
            if query in variants or not tokens.isdisjoint(variants):
                corrections.append(canonical)
            if canonical in query:
                corrections.extend(variants)
        return corrections

    def synonyms_for(self, query: str) -> list[str]:
        found: list[str] = []
        for word, synonyms in self.synonyms.items():
            if word in query:
                found.extend(synonyms)
        return found

    @staticmethod
    def _normalize_mapping(mapping: Mapping[str, list[str]]) -> dict[str, list[str]]:
        normalized: dict[str, list[str]] = {}
        for key, values in mapping.items():
            canonical = normalize_query(key)
            if not canonical:
                continue
            normalized[canonical] = [v for v in (normalize_query(x) for x in values) if v]
        return normalized
