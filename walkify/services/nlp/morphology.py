"""Suffix-based inflection heuristics for Ukrainian category words and place names.

This is not a morphological analyser. It generates the common case endings of a
lemma (or strips them from an inflected name) so that "парком", "кав'ярнею" or
"Західного автовокзалу" can be related to "парк", "кав'ярня" and
"Західний автовокзал". False positives on very short stems are accepted.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from walkify.config.place_types import Category, iter_lemmas

MIN_VARIANT_LENGTH = 3
MAX_NAME_VARIANTS = 8

_VOWELS = set("аеєиіїоуюя")

# lemma ending -> endings that replace it
_ADJECTIVE_SUFFIXES = {
    "ий": ("ого", "ому", "им", "ім", "ої", "ою"),
    "ій": ("ього", "ьому", "ім", "ьої", "ьою"),
}
_FEMININE_SUFFIXES = ("и", "і", "ою", "ею", "у", "ю")
_NEUTER_SUFFIXES = ("а", "у", "ом", "і", "ах")
_SOFT_MASCULINE_SUFFIXES = ("ю", "я", "еві", "єві", "ем", "єм", "і", "ї", "ів", "їв", "ей")
_HARD_MASCULINE_SUFFIXES = ("у", "а", "ові", "ом", "і", "ів")

# inflected ending -> possible nominative endings, longest endings first
_NOUN_RESTORE: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("ові", ("",)),
    ("еві", ("ь",)),
    ("єві", ("й",)),
    ("ою", ("а",)),
    ("ею", ("а", "я", "ь")),
    ("єю", ("я",)),
    ("ом", ("",)),
    ("ем", ("ь",)),
    ("єм", ("й",)),
    ("ів", ("",)),
    ("ці", ("ка",)),
    ("зі", ("га",)),
    ("ї", ("я", "й")),
    ("у", ("", "а")),
    ("ю", ("ь", "й", "я")),
    ("и", ("а",)),
    ("і", ("а", "я", "")),
    ("а", ("", "о")),
    ("я", ("ь", "й")),
)
_ADJECTIVE_RESTORE: Tuple[Tuple[str, str], ...] = (
    ("ього", "ій"),
    ("ьому", "ій"),
    ("ьої", "я"),
    ("ьою", "я"),
    ("ого", "ий"),
    ("ому", "ий"),
    ("ої", "а"),
    ("ою", "а"),
    ("им", "ий"),
    ("ім", "ий"),
    ("ій", "а"),
    ("у", "а"),
)


def inflection_variants(lemma: str) -> List[str]:
    """Generate case forms of a lemma (only forms of at least three letters)."""
    word = lemma.strip().lower()
    if not word:
        return []

    variants: List[str] = []
    for ending, suffixes in _ADJECTIVE_SUFFIXES.items():
        if word.endswith(ending):
            stem = word[: -len(ending)]
            variants = [stem + suffix for suffix in suffixes]
            break
    else:
        last = word[-1]
        if last in ("а", "я"):
            stem = word[:-1]
            variants = [stem + suffix for suffix in _FEMININE_SUFFIXES]
            # к/г alternate in the locative: річка -> річці
            if stem.endswith("к"):
                variants.append(stem[:-1] + "ці")
            elif stem.endswith("г"):
                variants.append(stem[:-1] + "зі")
        elif last == "о":
            variants = [word[:-1] + suffix for suffix in _NEUTER_SUFFIXES]
        elif last in ("й", "ь"):
            variants = [word[:-1] + suffix for suffix in _SOFT_MASCULINE_SUFFIXES]
        elif last not in _VOWELS and last.isalpha():
            variants = [word + suffix for suffix in _HARD_MASCULINE_SUFFIXES]

    return [variant for variant in variants if len(variant) >= MIN_VARIANT_LENGTH]


def matches(observed_word: str, canonical_lemma: str) -> bool:
    """Return True if ``observed_word`` looks like a form of ``canonical_lemma``."""
    observed = observed_word.strip().lower()
    lemma = canonical_lemma.strip().lower()
    if not observed or not lemma:
        return False
    if observed == lemma or lemma in observed:
        return True
    return any(variant in observed for variant in inflection_variants(lemma))


def category_for_word(word: str, lemmas: Optional[Sequence[Tuple[str, Category]]] = None) -> Optional[Category]:
    """First category whose lemma matches ``word``, in lemma table order."""
    for lemma, category in lemmas or iter_lemmas():
        if matches(word, lemma):
            return category
    return None


def name_variants(name: str) -> List[str]:
    """Spelling variants of a place name to try against geocoders, original first.

    One-word names get their nominative candidates; two-word names are treated
    as adjective + noun (keeping gender agreement) or noun + genitive complement.
    """
    cleaned = " ".join(name.split())
    if not cleaned:
        return []

    candidates = [cleaned]
    words = cleaned.split(" ")
    if len(words) == 1:
        candidates.extend(_restore_noun(words[0]))
        candidates.extend(form for form, _ in _restore_adjective(words[0]))
    elif len(words) == 2:
        first, second = words
        pairs = [
            f"{adjective} {noun}"
            for adjective, gender in _restore_adjective(first)
            for noun in _restore_noun(second) or [second]
            if _noun_gender(noun) == gender
        ]
        if pairs:
            candidates.extend(pairs)
        else:
            # "парку Шевченка" only looks adjectival; read it as noun + genitive
            candidates.extend(f"{noun} {second}" for noun in _restore_noun(first))

    unique: List[str] = []
    seen = set()
    for candidate in candidates:
        key = candidate.lower()
        if key not in seen:
            seen.add(key)
            unique.append(candidate)
    return unique[:MAX_NAME_VARIANTS]


def _restore_noun(word: str) -> List[str]:
    lower = word.lower()
    for ending, replacements in _NOUN_RESTORE:
        if lower.endswith(ending) and len(word) - len(ending) >= MIN_VARIANT_LENGTH:
            stem = word[: -len(ending)]
            return [stem + replacement for replacement in replacements]
    return []


def _restore_adjective(word: str) -> List[Tuple[str, str]]:
    lower = word.lower()
    for ending, nominative in _ADJECTIVE_RESTORE:
        if lower.endswith(ending) and len(word) - len(ending) >= MIN_VARIANT_LENGTH:
            gender = "f" if nominative in ("а", "я") else "m"
            return [(word[: -len(ending)] + nominative, gender)]
    return []


def _noun_gender(noun: str) -> str:
    return "f" if noun.lower().endswith(("а", "я")) else "m"
