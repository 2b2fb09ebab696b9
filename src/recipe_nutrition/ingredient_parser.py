#!/usr/bin/env python3
"""
Ingredient line parser for extracting structured data from recipe text.
Parses quantities, units, and ingredient names from a single line.
"""

import re
from typing import Dict, Optional

import structlog

from .models import ParsedIngredientLine

logger = structlog.get_logger(__name__)


def parse_quantity(text: Optional[str]) -> Optional[float]:
    """
    Convert a quantity string into a number.

    Handles mixed numbers ("1 1/2"), simple fractions ("3/4") and decimals.

    Args:
        text: Quantity text

    Returns:
        Numeric quantity, or None when the text is not a usable quantity
    """
    if not text:
        return None
    t = text.strip()

    mixed = re.fullmatch(r'(\d+)\s+(\d+)/(\d+)', t)
    if mixed:
        whole, numerator, denominator = (int(g) for g in mixed.groups())
        if denominator == 0:
            return None
        return whole + numerator / denominator

    fraction = re.fullmatch(r'(\d+)/(\d+)', t)
    if fraction:
        numerator, denominator = (int(g) for g in fraction.groups())
        if denominator == 0:
            return None
        return numerator / denominator

    try:
        return float(t)
    except ValueError:
        return None


class IngredientLineParser:
    """Parser for `[quantity] [unit] item` ingredient lines."""

    def __init__(self, unit_variations: Optional[Dict[str, str]] = None):
        """
        Initialize ingredient line parser.

        Args:
            unit_variations: Mapping of accepted unit spelling to normalized unit
        """
        self.unit_lookup = dict(unit_variations or self._default_units())
        self._compile_patterns()

    @staticmethod
    def _default_units() -> Dict[str, str]:
        """Accepted unit tokens and their normalized form."""
        variations = {
            "cup": ["cup", "cups"],
            "tbsp": ["tbsp", "tbsps"],
            "tsp": ["tsp", "tsps"],
            "g": ["g"],
            "kg": ["kg"],
            "ml": ["ml"],
            "l": ["l"],
            "oz": ["oz"],
            "lb": ["lb", "lbs"],
        }
        return {
            variation: standard
            for standard, spellings in variations.items()
            for variation in spellings
        }

    def _compile_patterns(self):
        """Compile regex patterns for parsing."""
        # Mixed numbers first so "1 1/2" is not read as "1"
        quantity_pattern = r'\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d+)?'

        unit_pattern = '|'.join(
            re.escape(unit) for unit in sorted(self.unit_lookup, key=len, reverse=True)
        )

        self.main_pattern = re.compile(
            rf'^(?P<quantity>{quantity_pattern})?\s*(?:(?P<unit>{unit_pattern})\b)?\s*(?P<item>.*)$',
            re.IGNORECASE
        )

    def parse(self, line: str) -> ParsedIngredientLine:
        """
        Parse one ingredient line.

        Args:
            line: Ingredient text such as "1 1/2 tbsp sugar"

        Returns:
            ParsedIngredientLine; quantity is None when none could be read
        """
        text = (line or "").strip()
        match = self.main_pattern.match(text)
        if not match:
            return ParsedIngredientLine(item=text)

        raw_quantity = match.group("quantity")
        raw_unit = match.group("unit")

        quantity = parse_quantity(raw_quantity)
        if raw_quantity and quantity is None:
            logger.debug("unparseable_quantity", line=text, quantity=raw_quantity)
            return ParsedIngredientLine(item=text)

        unit = self.unit_lookup.get(raw_unit.lower()) if raw_unit else None
        item = match.group("item").strip()
        if not item and quantity is None:
            item = text

        return ParsedIngredientLine(item=item, quantity=quantity, unit=unit)
