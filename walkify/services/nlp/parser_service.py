"""Rule-based conversion of Ukrainian walk requests into RouteRequest models."""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from walkify.config.place_types import Category, iter_lemmas
from walkify.models.request import RouteRequest

from .morphology import category_for_word, matches
from .preprocessor import PreprocessedQuery, QueryPreprocessor
from .validator import RouteRequestValidator

logger = logging.getLogger(__name__)

_WITH_THROUGH = frozenset({"з", "із", "зі", "через"})
# Words that close a "with/through" clause
_CLAUSE_BREAKERS = frozenset({"до", "а", "потім", "після", ".", ";", "!", "?"})

# A span ends before a stop word, a number, punctuation or the end of text
_STOP = r"(?=\s+(?:та|і|й|а|через|з|із|зі|до|на|біля|повз|потім)\b|\s+\d|\s*[,.;!?]|\s*$)"
# Same, but conjunctions and commas stay inside the span (lists of stops)
_CLAUSE_STOP = r"(?=\s+(?:а|через|з|із|зі|до|на|біля|повз|потім)\b|\s+\d|\s*[.;!?]|\s*$)"
_SPAN = r"([^\W\d_].*?)"

_DESTINATION_NAME_PATTERNS = (
    re.compile(
        r"(?:прогулянк\w*|прогуля\w*|погуля\w*|пройти\w*|пройду\w*|маршрут\w*|піти|піду|йти|іти|дійти)\s+до\s+"
        + _SPAN
        + _STOP,
        re.IGNORECASE,
    ),
    re.compile(r"\bдо\s+" + _SPAN + _STOP, re.IGNORECASE),
)
_DESTINATION_WORD_PATTERNS = (
    re.compile(r"(?:прогулянк\w*|маршрут\w*)\s+до\s+([\w'-]+)"),
    re.compile(r"\bдо\s+([\w'-]+)"),
)
_WAYPOINT_CLAUSE_PATTERNS = (
    re.compile(r"\bчерез\s+" + _SPAN + _CLAUSE_STOP, re.IGNORECASE),
    re.compile(r"\b(?:з|із|зі)\s+" + _SPAN + _CLAUSE_STOP, re.IGNORECASE),
)
_CLAUSE_ITEM_SPLIT = re.compile(r"\s*,\s*|\s+(?:та|і|й)\s+")

_ADJECTIVE_NOUN = re.compile(
    r"^[\w'-]+(?:ий|ій|ого|ього|ому|ьому|им|ім|а|я|ої|ьої|ою|у|е)\s+[\w'-]+$", re.IGNORECASE
)
_DISTANCE = re.compile(r"(\d+(?:[.,]\d+)?)\s*(?:км|кілометр\w*|km|kilomet\w*)(?!\w)", re.IGNORECASE)
_STOP_COUNT = re.compile(r"(\d+)\s*(?:зупин\w*|місц\w*|точ\w*|пункт\w*|локаці\w*)", re.IGNORECASE)
_WALK_VERB = re.compile(r"прогулян|прогуля|погуля|гуля|пройти|пройтис|пройдус|пройдем|walk", re.IGNORECASE)

# Stems that reliably identify a category inside plural or rare case forms
_STEM_HINTS: Tuple[Tuple[str, Category], ...] = (
    ("кав'ярн", Category.CAFE),
    ("парк", Category.PARK),
    ("магазин", Category.SHOP),
)

_NAME_LENGTH_THRESHOLD = 10


class RouteRequestParser:
    """Deterministic pipeline: preprocess → extract slots → validate/repair."""

    def __init__(
        self,
        *,
        preprocessor: Optional[QueryPreprocessor] = None,
        validator: Optional[RouteRequestValidator] = None,
        lemmas: Optional[Sequence[Tuple[str, Category]]] = None,
    ) -> None:
        self._preprocessor = preprocessor or QueryPreprocessor()
        self._validator = validator or RouteRequestValidator()
        self._lemmas = tuple(lemmas or iter_lemmas())

    def parse(self, text: str) -> RouteRequest:
        query = self._preprocessor.process(text)
        raw_payload = self._extract(query)
        request = self._validator.validate(raw_payload)
        logger.debug("Parsed %r into %s", query.normalized_text, request.model_dump())
        return request

    def _extract(self, query: PreprocessedQuery) -> Dict[str, object]:
        destination_name = self._extract_destination_name(query.normalized_text)
        destination_category = None
        if destination_name is None:
            destination_category = self._extract_destination_category(query)

        waypoint_names, named_categories = self._extract_waypoint_names(query.normalized_text)
        waypoint_categories = self._extract_waypoint_categories(query, named_categories, destination_category)

        is_exploration = (
            destination_name is None
            and destination_category is None
            and bool(_WALK_VERB.search(query.lower_text))
            and bool(waypoint_names or waypoint_categories)
        )

        return {
            "destination_name": destination_name,
            "destination_category": destination_category,
            "waypoint_names": waypoint_names,
            "waypoint_categories": waypoint_categories,
            "target_distance_km": self._extract_distance(query.lower_text),
            "is_exploration": is_exploration,
            "desired_stop_count": self._extract_stop_count(query.lower_text),
        }

    # Step 1: "до Західного автовокзалу"
    def _extract_destination_name(self, text: str) -> Optional[str]:
        for pattern in _DESTINATION_NAME_PATTERNS:
            match = pattern.search(text)
            if not match:
                continue
            span = match.group(1).strip(" ,.;!?")
            if not span:
                continue
            if self._looks_like_name(span):
                return span
            if self._category_for(span.lower()) is not None:
                # Bare category word, left for category extraction
                return None
            return span
        return None

    # Step 2: "до парку", or a category word outside any with/through clause
    def _extract_destination_category(self, query: PreprocessedQuery) -> Optional[Category]:
        for pattern in _DESTINATION_WORD_PATTERNS:
            for match in pattern.finditer(query.lower_text):
                category = self._category_for(match.group(1))
                if category is not None:
                    return category

        in_clause = self._waypoint_clause_mask(query.tokens)
        for lemma, category in self._lemmas:
            for token, is_waypoint in zip(query.tokens, in_clause):
                if is_waypoint or token in _WITH_THROUGH:
                    continue
                if matches(token, lemma):
                    return category
        return None

    # Step 3: "через парк Шевченка", "з кав'ярнею"
    def _extract_waypoint_names(self, text: str) -> Tuple[List[str], List[Category]]:
        names: List[str] = []
        categories: List[Category] = []
        for pattern in _WAYPOINT_CLAUSE_PATTERNS:
            for match in pattern.finditer(text):
                for item in _CLAUSE_ITEM_SPLIT.split(match.group(1)):
                    item = item.strip(" ,.;!?")
                    if not item:
                        continue
                    category = None
                    if " " not in item:
                        category = self._category_for(item.lower())
                    if category is not None:
                        if category not in categories:
                            categories.append(category)
                    elif self._looks_like_name(item) and item not in names:
                        names.append(item)
        return names, categories

    # Step 4: every category word inside with/through clauses plus explicit phrases
    def _extract_waypoint_categories(
        self,
        query: PreprocessedQuery,
        named_categories: Sequence[Category],
        destination_category: Optional[Category],
    ) -> List[Category]:
        collected: List[Category] = list(named_categories)

        in_clause = self._waypoint_clause_mask(query.tokens)
        for token, is_waypoint in zip(query.tokens, in_clause):
            if not is_waypoint:
                continue
            category = self._category_for(token) or self._stem_hint(token)
            if category is not None and category not in collected:
                collected.append(category)

        for lemma, category in self._lemmas:
            if category in collected:
                continue
            if re.search(rf"\b(?:з|через)\s+{re.escape(lemma)}", query.lower_text):
                collected.append(category)

        return [category for category in collected if category != destination_category]

    @staticmethod
    def _extract_distance(text: str) -> Optional[float]:
        match = _DISTANCE.search(text)
        if not match:
            return None
        return float(match.group(1).replace(",", "."))

    @staticmethod
    def _extract_stop_count(text: str) -> Optional[int]:
        match = _STOP_COUNT.search(text)
        if not match:
            return None
        return int(match.group(1))

    def _category_for(self, word: str) -> Optional[Category]:
        return category_for_word(word, self._lemmas)

    @staticmethod
    def _stem_hint(token: str) -> Optional[Category]:
        for stem, category in _STEM_HINTS:
            if stem in token:
                return category
        return None

    @staticmethod
    def _looks_like_name(span: str) -> bool:
        return (
            any(ch.isspace() for ch in span)
            or span[:1].isupper()
            or len(span) > _NAME_LENGTH_THRESHOLD
            or bool(_ADJECTIVE_NOUN.match(span))
        )

    @staticmethod
    def _waypoint_clause_mask(tokens: Sequence[str]) -> List[bool]:
        """Flag tokens that follow "з"/"через" until the clause is closed."""
        mask: List[bool] = []
        in_clause = False
        for token in tokens:
            if token in _WITH_THROUGH:
                in_clause = True
                mask.append(False)
            elif token in _CLAUSE_BREAKERS:
                in_clause = False
                mask.append(False)
            else:
                mask.append(in_clause)
        return mask

    # Exposed for testing hooks
    @property
    def preprocessor(self) -> QueryPreprocessor:  # pragma: no cover - simple proxy
        return self._preprocessor

    @property
    def validator(self) -> RouteRequestValidator:  # pragma: no cover - simple proxy
        return self._validator
