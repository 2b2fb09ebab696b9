#!/usr/bin/env python3
"""
Rule-based inference over ingredient names.
Allergens, diets, cuisines and taste tags are derived by keyword matching
against tables supplied by the caller.
"""

from typing import Iterable, List, Mapping, Sequence, Tuple


def ingredient_text(items: Iterable[str]) -> str:
    """Concatenate item names into one lower-cased search text."""
    return " ".join(item.lower() for item in items)


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    seen: List[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return tuple(seen)


class AllergenDetector:
    """Flags an allergen when any of its keywords occurs in the ingredients."""

    def __init__(self, allergen_keywords: Mapping[str, Sequence[str]]):
        self.allergen_keywords = {
            code: tuple(k.lower() for k in keywords)
            for code, keywords in allergen_keywords.items()
        }

    def detect(self, items: Iterable[str]) -> Tuple[str, ...]:
        text = ingredient_text(items)
        return tuple(
            code for code, keywords in self.allergen_keywords.items()
            if any(keyword in text for keyword in keywords)
        )


class DietInferencer:
    """
    Exclusion rules: a diet fits unless one of its excluded keywords occurs.

    Each rule is independent, so a recipe can fit several diets or none.
    A recipe without ingredients fits no diet.
    """

    def __init__(self, diet_exclusions: Mapping[str, Sequence[str]]):
        self.diet_exclusions = {
            diet: tuple(k.lower() for k in keywords)
            for diet, keywords in diet_exclusions.items()
        }

    def infer(self, items: Iterable[str]) -> Tuple[str, ...]:
        items = list(items)
        if not items:
            return ()
        text = ingredient_text(items)
        return tuple(
            diet for diet, excluded in self.diet_exclusions.items()
            if not any(keyword in text for keyword in excluded)
        )


class KeywordTagger:
    """Unions the tags of every keyword found in each ingredient name."""

    def __init__(self, keyword_tags: Mapping[str, Sequence[str]]):
        self.keyword_tags = {
            keyword.lower(): tuple(tags) for keyword, tags in keyword_tags.items()
        }

    def tags(self, items: Iterable[str]) -> Tuple[str, ...]:
        found: List[str] = []
        for item in items:
            name = item.lower()
            for keyword, tags in self.keyword_tags.items():
                if keyword in name:
                    found.extend(tags)
        return _unique(found)


class TasteProfiler(KeywordTagger):
    """Taste tags (spicy, cooling, umami, ...) from the taste table."""

    def profile(self, items: Iterable[str]) -> Tuple[str, ...]:
        return self.tags(items)


class CuisineInferencer(KeywordTagger):
    """Cuisine tags from signature ingredients."""

    def infer(self, items: Iterable[str]) -> Tuple[str, ...]:
        return self.tags(items)
