#!/usr/bin/env python3
"""
Summary and suggestion text for analyzed recipes.
"""

from typing import List, Tuple

from .config import AnalyzerConfig
from .models import AnalyzeResult

HIGH_CALORIE = "⚠️ High calories per serving - consider smaller portions."
HIGH_SODIUM = "⚠️ High sodium - reduce salt or processed ingredients."
ADD_PROTEIN = "💡 Add protein sources like beans, yogurt, or nuts."
BALANCE_SPICE = "💡 Balance spice with yogurt or cucumber."


class SummaryGenerator:
    """Builds the summary paragraph and advisory suggestions."""

    def __init__(self, calorie_limit: float = 800.0, sodium_limit: float = 1000.0,
                 protein_minimum: float = 10.0):
        self.calorie_limit = calorie_limit
        self.sodium_limit = sodium_limit
        self.protein_minimum = protein_minimum

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> "SummaryGenerator":
        return cls(
            calorie_limit=config.calorie_limit,
            sodium_limit=config.sodium_limit,
            protein_minimum=config.protein_minimum,
        )

    def summary(self, result: AnalyzeResult) -> str:
        """
        One-paragraph description, e.g.
        '“Pancakes” • serves 4 • 5 ingredients. Fits: vegetarian.'
        """
        parts = [
            f"“{result.title}”" if result.title else "Recipe",
            f"serves {result.servings}" if result.servings else "",
            f"{len(result.ingredients)} ingredients" if result.ingredients else "",
        ]
        text = " • ".join(part for part in parts if part) + "."

        diets = ", ".join(diet.replace("_", " ") for diet in result.inferred.diets)
        if diets:
            text += f" Fits: {diets}."
        return text

    def suggestions(self, result: AnalyzeResult) -> Tuple[str, ...]:
        """Independent threshold checks, always evaluated in the same order."""
        nutrition = result.nutrition_per_serving
        taste = result.inferred.taste
        tips: List[str] = []

        if nutrition.get("calories", 0) > self.calorie_limit:
            tips.append(HIGH_CALORIE)
        if nutrition.get("sodium", 0) > self.sodium_limit:
            tips.append(HIGH_SODIUM)
        if nutrition.get("protein", 0) < self.protein_minimum:
            tips.append(ADD_PROTEIN)
        if "spicy" in taste and "cooling" not in taste:
            tips.append(BALANCE_SPICE)

        return tuple(tips)
