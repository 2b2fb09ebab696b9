#!/usr/bin/env python3
"""
Ingredient matching against the ingredient knowledge base.
"""

from typing import Callable, Optional, Sequence

from .models import IngredientRecord

MatchRule = Callable[[IngredientRecord, str], bool]


def exact_name(record: IngredientRecord, query: str) -> bool:
    return record.name == query


def name_overlap(record: IngredientRecord, query: str) -> bool:
    return record.name in query or query in record.name


def alias_in_query(record: IngredientRecord, query: str) -> bool:
    return any(alias and alias in query for alias in record.aliases)


# Highest priority first
MATCH_RULES = (exact_name, name_overlap, alias_in_query)


class IngredientMatcher:
    """Resolves an ingredient name to a knowledge base record."""

    def __init__(self, records: Sequence[IngredientRecord],
                 rules: Sequence[MatchRule] = MATCH_RULES):
        self.records = tuple(records)
        self.rules = tuple(rules)

    def match(self, name: str) -> Optional[IngredientRecord]:
        """
        Find the knowledge base record for an ingredient name.

        Rules are tried in priority order: exact name, then a name that
        contains or is contained in the query, then an alias that appears in
        the query. Each rule scans the knowledge base in order and the first
        record it accepts is returned. Over-matching is accepted.

        Args:
            name: Parsed ingredient item name

        Returns:
            Matching record or None
        """
        query = (name or "").strip().lower()
        if not query:
            return None

        for rule in self.rules:
            for record in self.records:
                if rule(record, query):
                    return record

        return None
