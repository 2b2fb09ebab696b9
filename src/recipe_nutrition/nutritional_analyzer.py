#!/usr/bin/env python3
"""
Nutritional Analysis
Scales knowledge base nutrient values (per 100g) by ingredient weight and
sums them into per-serving totals.
"""

import math
from typing import Iterable, Optional, Tuple

import structlog

from .models import (
    IngredientRecord, NutrientTotals, ParsedIngredientLine, TRACKED_NUTRIENTS, empty_totals,
)
from .unit_converter import UnitConverter

logger = structlog.get_logger(__name__)

MatchedLine = Tuple[ParsedIngredientLine, Optional[IngredientRecord]]


def round_half_up(value: float, digits: int = 1) -> float:
    """Round halves away from zero for non-negative values (1.25 -> 1.3)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


class NutritionAggregator:
    """Per-serving nutrition estimate from matched ingredient lines."""

    def __init__(self, unit_converter: UnitConverter):
        self.unit_converter = unit_converter

    def totals(self, lines: Iterable[MatchedLine]) -> NutrientTotals:
        """
        Sum nutrient contributions for a whole recipe.

        Unmatched ingredients contribute zero to every nutrient.

        Args:
            lines: Parsed ingredient lines paired with their matched records

        Returns:
            Unrounded recipe totals for every tracked nutrient
        """
        totals = empty_totals()
        matched = 0

        for ingredient, record in lines:
            if record is None:
                continue
            matched += 1

            grams = self.unit_converter.to_grams(
                ingredient.quantity or 0, ingredient.unit or "g", ingredient.item
            )
            multiplier = grams / 100

            for nutrient in TRACKED_NUTRIENTS:
                totals[nutrient] += record.nutrient(nutrient) * multiplier

        logger.debug("nutrition_totals", matched=matched)
        return totals

    def aggregate(self, lines: Iterable[MatchedLine], servings: int) -> NutrientTotals:
        """
        Per-serving nutrition, rounded half-up to one decimal place.

        Args:
            lines: Parsed ingredient lines paired with their matched records
            servings: Recipe servings; values below 1 count as 1

        Returns:
            Per-serving nutrient values
        """
        per = max(1, servings or 1)
        return {
            nutrient: round_half_up(max(0.0, value) / per)
            for nutrient, value in self.totals(lines).items()
        }
