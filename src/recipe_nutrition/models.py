#!/usr/bin/env python3
"""
Recipe Analysis Data Model
Immutable value types shared by every stage of the analysis pipeline,
plus the adapter that turns remote JSON payloads into AnalyzeResult.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import MalformedResponseError


TRACKED_NUTRIENTS: Tuple[str, ...] = (
    "calories", "protein", "carbs", "fat", "sodium", "sugars",
    "fiber", "potassium", "iron", "calcium", "vitaminD",
)

# Alternate spellings seen in external payloads and reference files
NUTRIENT_ALIASES: Dict[str, str] = {
    "kcal": "calories",
    "energy": "calories",
    "carbohydrates": "carbs",
    "carbohydrate": "carbs",
    "sugar": "sugars",
    "fibre": "fiber",
    "vitamin_d": "vitaminD",
    "vitamind": "vitaminD",
    "vitamin d": "vitaminD",
}

NutrientTotals = Dict[str, float]


def canonical_nutrient(name: str) -> Optional[str]:
    """Map a nutrient key onto a tracked nutrient name, or None."""
    if name in TRACKED_NUTRIENTS:
        return name
    key = name.strip().lower()
    for nutrient in TRACKED_NUTRIENTS:
        if nutrient.lower() == key:
            return nutrient
    return NUTRIENT_ALIASES.get(key)


def empty_totals() -> NutrientTotals:
    return {nutrient: 0.0 for nutrient in TRACKED_NUTRIENTS}


@dataclass(frozen=True)
class ParsedRecipe:
    """Raw recipe text split into its sections."""
    title: str
    servings: int
    ingredient_lines: Tuple[str, ...] = ()
    step_lines: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ParsedIngredientLine:
    """One ingredient line broken into quantity, unit and item name."""
    item: str
    quantity: Optional[float] = None
    unit: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"quantity": self.quantity, "unit": self.unit, "item": self.item}


@dataclass(frozen=True)
class IngredientRecord:
    """Knowledge base entry with nutrient content per 100g."""
    name: str
    aliases: Tuple[str, ...] = ()
    nutrients_per_100g: Mapping[str, float] = field(default_factory=dict)

    def nutrient(self, name: str) -> float:
        return float(self.nutrients_per_100g.get(name) or 0.0)


@dataclass(frozen=True)
class InferredAttributes:
    """Rule-based tags inferred from ingredient names."""
    allergens: Tuple[str, ...] = ()
    diets: Tuple[str, ...] = ()
    cuisines: Tuple[str, ...] = ()
    taste: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "allergens": list(self.allergens),
            "diets": list(self.diets),
            "cuisines": list(self.cuisines),
            "taste": list(self.taste),
        }


@dataclass(frozen=True)
class AnalyzeResult:
    """Complete recipe analysis result."""
    title: str
    servings: int
    ingredients: Tuple[ParsedIngredientLine, ...] = ()
    steps: Tuple[str, ...] = ()
    inferred: InferredAttributes = field(default_factory=InferredAttributes)
    nutrition_per_serving: NutrientTotals = field(default_factory=empty_totals)
    summary: str = ""
    suggestions: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON wire shape."""
        return {
            "title": self.title,
            "servings": self.servings,
            "ingredients": [ingredient.to_dict() for ingredient in self.ingredients],
            "steps": list(self.steps),
            "inferred": self.inferred.to_dict(),
            "nutritionPerServing": dict(self.nutrition_per_serving),
            "summary": self.summary,
            "suggestions": list(self.suggestions),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "AnalyzeResult":
        """
        Build a result from an external payload.

        Accepts the aliased field names the analysis service has used over
        time and fills optional fields with empty values.

        Raises:
            MalformedResponseError: If the payload does not have the expected shape
        """
        if not isinstance(data, dict):
            raise MalformedResponseError("Analysis payload is not an object")

        title = _optional_str(data.get("title"), "title") or "Untitled"
        servings = _servings(data.get("servings"))

        ingredients = tuple(
            _ingredient(entry) for entry in _list(data.get("ingredients"), "ingredients")
        )
        steps = tuple(
            _str(step, "steps") for step in _list(data.get("steps"), "steps")
        )

        raw_inferred = data.get("inferred") or {}
        if not isinstance(raw_inferred, dict):
            raise MalformedResponseError("inferred must be an object", field="inferred")
        inferred = InferredAttributes(**{
            key: tuple(_str(tag, key) for tag in _list(raw_inferred.get(key), key))
            for key in ("allergens", "diets", "cuisines", "taste")
        })

        raw_nutrition = data.get("nutritionPerServing")
        if raw_nutrition is None:
            raw_nutrition = data.get("nutrition")
        nutrition = _nutrition(raw_nutrition)

        summary = _optional_str(data.get("summary"), "summary") or ""
        suggestions = tuple(
            _str(s, "suggestions") for s in _list(data.get("suggestions"), "suggestions")
        )

        return cls(
            title=title,
            servings=servings,
            ingredients=ingredients,
            steps=steps,
            inferred=inferred,
            nutrition_per_serving=nutrition,
            summary=summary,
            suggestions=suggestions,
        )


@dataclass(frozen=True)
class RemoteOutcome:
    """Result of a single remote analysis attempt."""
    ok: bool
    result: Optional[AnalyzeResult] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, result: AnalyzeResult) -> "RemoteOutcome":
        return cls(ok=True, result=result)

    @classmethod
    def failure(cls, error: str) -> "RemoteOutcome":
        return cls(ok=False, error=error)


def _list(value: Any, name: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedResponseError(f"{name} must be a list", field=name)
    return value


def _str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise MalformedResponseError(f"{name} entries must be strings", field=name)
    return value


def _optional_str(value: Any, name: str) -> Optional[str]:
    if value is None:
        return None
    return _str(value, name)


def _number(value: Any, name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(f"{name} must be a number", field=name)
    return float(value)


def _servings(value: Any) -> int:
    number = _number(value, "servings")
    if number is None:
        return 1
    return max(1, int(number))


def _ingredient(entry: Any) -> ParsedIngredientLine:
    if isinstance(entry, str):
        return ParsedIngredientLine(item=entry.strip())
    if not isinstance(entry, dict):
        raise MalformedResponseError("ingredients entries must be objects", field="ingredients")

    quantity = entry.get("quantity", entry.get("qty"))
    unit = _optional_str(entry.get("unit"), "unit")
    item = entry.get("item", entry.get("name"))
    return ParsedIngredientLine(
        item=(_optional_str(item, "item") or "").strip(),
        quantity=_number(quantity, "quantity"),
        unit=unit.lower() if unit else None,
    )


def _nutrition(raw: Any) -> NutrientTotals:
    totals = empty_totals()
    if raw is None:
        return totals
    if not isinstance(raw, dict):
        raise MalformedResponseError("nutrition must be an object", field="nutritionPerServing")
    for key, value in raw.items():
        nutrient = canonical_nutrient(str(key))
        if nutrient is None:
            continue
        totals[nutrient] = _number(value, nutrient) or 0.0
    return totals
