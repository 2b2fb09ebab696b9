#!/usr/bin/env python3
"""
Recipe Text Segmenter
Splits free-form recipe text into title, servings, ingredient lines and
step lines using a small section state machine.
"""

import re
from enum import Enum
from typing import List

import structlog

from .models import ParsedRecipe

logger = structlog.get_logger(__name__)


class Section(Enum):
    TITLE = "title"
    UNKNOWN = "unknown"
    INGREDIENTS = "ingredients"
    STEPS = "steps"


DEFAULT_TITLE = "Untitled"

SERVINGS_PATTERNS = [
    re.compile(r'serv(?:es|ings?)\s*[:\-]?\s*(\d+)', re.IGNORECASE),
    re.compile(r'makes\s+(\d+)', re.IGNORECASE),
]
INGREDIENTS_HEADER = re.compile(r'^ingredients?\s*:?$', re.IGNORECASE)
STEPS_HEADER = re.compile(r'^(?:instructions?|steps?|directions?|method)\s*:?$', re.IGNORECASE)
NUMBERED_STEP = re.compile(r'^\d+[\).]\s+')
BULLET = re.compile(r'^[-*]\s*')
BULLET_MARKER = re.compile(r'^[-*]\s+')
MEASUREMENT_WORD = re.compile(r'\b(?:cups?|tsp|tbsp|oz|lbs?|g|kg|ml|l)\b', re.IGNORECASE)


class RecipeTextSegmenter:
    """Segmenter for raw recipe text."""

    def segment(self, text: str) -> ParsedRecipe:
        """
        Segment raw recipe text.

        Args:
            text: Multi-line recipe text

        Returns:
            ParsedRecipe with servings of at least 1
        """
        lines = [line.strip() for line in (text or "").replace("\r", "").split("\n")]
        title = next((line for line in lines if line), DEFAULT_TITLE)

        servings = 1
        ingredients: List[str] = []
        steps: List[str] = []
        section = Section.TITLE

        for line in lines:
            if not line:
                continue

            found = self._servings(line)
            if found is not None:
                servings = found
                if section is Section.TITLE:
                    section = Section.UNKNOWN
                continue

            if INGREDIENTS_HEADER.match(line):
                section = Section.INGREDIENTS
                continue
            if STEPS_HEADER.match(line):
                section = Section.STEPS
                continue

            if section is Section.TITLE:
                section = Section.UNKNOWN
                continue

            if NUMBERED_STEP.match(line):
                section = Section.STEPS
                step = NUMBERED_STEP.sub('', line)
                if step:
                    steps.append(step)
                continue

            # Ingredient-shaped lines win over the steps section
            if section is Section.INGREDIENTS or self.looks_like_ingredient(line):
                ingredient = BULLET.sub('', line)
                if ingredient:
                    ingredients.append(ingredient)
            elif section is Section.STEPS:
                steps.append(line)

        logger.debug("recipe_segmented", servings=servings,
                     ingredients=len(ingredients), steps=len(steps))

        return ParsedRecipe(
            title=title,
            servings=max(1, servings),
            ingredient_lines=tuple(ingredients),
            step_lines=tuple(steps),
        )

    @staticmethod
    def looks_like_ingredient(line: str) -> bool:
        """Structural ingredient check used outside an ingredients section."""
        return bool(
            line[:1].isdigit()
            or MEASUREMENT_WORD.search(line)
            or BULLET_MARKER.match(line)
        )

    @staticmethod
    def _servings(line: str):
        for pattern in SERVINGS_PATTERNS:
            match = pattern.search(line)
            if match:
                return int(match.group(1))
        return None
