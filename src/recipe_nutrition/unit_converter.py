#!/usr/bin/env python3
"""
Unit conversion to grams.
Weight units convert directly; volume units go through milliliters and an
approximate ingredient density. Anything else is taken to already be grams.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

import structlog

logger = structlog.get_logger(__name__)


WEIGHT_TO_G: Dict[str, float] = {
    "g": 1.0,
    "kg": 1000.0,
    "mg": 0.001,
    "lb": 453.592,
    "lbs": 453.592,
    "oz": 28.3495,
}

VOLUME_TO_ML: Dict[str, float] = {
    "ml": 1.0,
    "tsp": 4.93,
    "tbsp": 14.79,
    "cup": 236.59,
    "fl oz": 29.57,
    "pint": 473.18,
    "quart": 946.35,
    "liter": 1000.0,
    "l": 1000.0,
}

# g/ml, checked in order against the item name
DENSITY_KEYWORDS: Tuple[Tuple[str, float], ...] = (
    ("oil", 0.91),
    ("milk", 1.03),
    ("sugar", 0.85),
    ("flour", 0.53),
    ("rice", 0.85),
)

DEFAULT_DENSITY = 0.8

_PLURALS = {"cups": "cup", "tsps": "tsp", "tbsps": "tbsp", "liters": "liter", "pints": "pint",
            "quarts": "quart"}


class UnitConverter(ABC):
    """Converts a quantity in some unit into grams."""

    @abstractmethod
    def to_grams(self, quantity: float, unit: str, item_hint: str = "") -> float:
        """
        Convert a quantity to grams.

        Args:
            quantity: Amount in the given unit (may be zero)
            unit: Unit name; empty or unknown units must not raise
            item_hint: Ingredient name used to pick a density

        Returns:
            Weight in grams
        """


class DensityUnitConverter(UnitConverter):
    """Table-driven converter with per-ingredient densities for volumes."""

    def __init__(self, weight_to_g: Optional[Dict[str, float]] = None,
                 volume_to_ml: Optional[Dict[str, float]] = None,
                 densities: Optional[Tuple[Tuple[str, float], ...]] = None,
                 default_density: float = DEFAULT_DENSITY):
        self.weight_to_g = dict(weight_to_g or WEIGHT_TO_G)
        self.volume_to_ml = dict(volume_to_ml or VOLUME_TO_ML)
        self.densities = tuple(densities or DENSITY_KEYWORDS)
        self.default_density = default_density

    def density_for(self, item_hint: str) -> float:
        hint = (item_hint or "").lower()
        for keyword, density in self.densities:
            if keyword in hint:
                return density
        return self.default_density

    def to_grams(self, quantity: float, unit: str, item_hint: str = "") -> float:
        if not quantity:
            return 0.0

        u = (unit or "").lower().strip()
        u = _PLURALS.get(u, u)

        if u in self.weight_to_g:
            return quantity * self.weight_to_g[u]

        if u in self.volume_to_ml:
            ml = quantity * self.volume_to_ml[u]
            return ml * self.density_for(item_hint)

        # Unknown or missing unit: treat as grams
        if u:
            logger.debug("unknown_unit", unit=u, item=item_hint)
        return float(quantity)
