#!/usr/bin/env python3
"""
Reference data loading
Loads the ingredient knowledge base, taste table and inference keyword rules,
normalizing the loosely shaped source files into strict model types.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import structlog
import yaml

from .errors import ReferenceDataError
from .models import IngredientRecord, canonical_nutrient

logger = structlog.get_logger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent / "data"

INGREDIENTS_FILE = "ingredients_db.json"
TASTE_FILE = "taste_profiles.json"
RULES_FILE = "inference_rules.yaml"

KeywordTable = Mapping[str, Tuple[str, ...]]


@dataclass(frozen=True)
class ReferenceData:
    """Read-only snapshot of every table the local pipeline consults."""
    ingredients: Tuple[IngredientRecord, ...] = ()
    taste_table: KeywordTable = field(default_factory=dict)
    allergen_keywords: KeywordTable = field(default_factory=dict)
    diet_exclusions: KeywordTable = field(default_factory=dict)
    cuisine_keywords: KeywordTable = field(default_factory=dict)

    @classmethod
    def load(cls, directory: Optional[Union[str, Path]] = None) -> "ReferenceData":
        """
        Load reference data from a directory.

        Args:
            directory: Directory holding the data files; defaults to the packaged data

        Returns:
            ReferenceData snapshot

        Raises:
            ReferenceDataError: If a file is missing or cannot be parsed
        """
        base = Path(directory) if directory else DEFAULT_DATA_DIR

        raw_ingredients = _read_file(base / INGREDIENTS_FILE)
        if not isinstance(raw_ingredients, list):
            raise ReferenceDataError("Ingredient knowledge base must be a list",
                                     path=str(base / INGREDIENTS_FILE))
        ingredients = tuple(normalize_ingredient_record(raw) for raw in raw_ingredients)

        taste_table = normalize_keyword_table(_read_file(base / TASTE_FILE), TASTE_FILE)

        rules = _read_file(base / RULES_FILE)
        if not isinstance(rules, dict):
            raise ReferenceDataError("Inference rules must be a mapping", path=str(base / RULES_FILE))

        data = cls(
            ingredients=ingredients,
            taste_table=taste_table,
            allergen_keywords=normalize_keyword_table(rules.get("allergens") or {}, "allergens"),
            diet_exclusions=normalize_keyword_table(rules.get("diets") or {}, "diets"),
            cuisine_keywords=normalize_keyword_table(rules.get("cuisines") or {}, "cuisines"),
        )
        logger.info("reference_data_loaded", directory=str(base),
                    ingredients=len(data.ingredients), taste_keywords=len(data.taste_table))
        return data


def _read_file(path: Path) -> Any:
    """Read a JSON or YAML file."""
    if not path.exists():
        raise ReferenceDataError(f"Reference data file not found: {path}", path=str(path))
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix in ('.yaml', '.yml'):
                return yaml.safe_load(f)
            return json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ReferenceDataError(f"Failed to parse {path}: {e}", path=str(path)) from e


def _as_tuple(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def normalize_keyword_table(raw: Any, name: str) -> Dict[str, Tuple[str, ...]]:
    """Normalize a keyword -> values mapping; single strings become 1-tuples."""
    if not isinstance(raw, dict):
        raise ReferenceDataError(f"{name} must be a mapping")
    return {str(key): _as_tuple(values) for key, values in raw.items()}


def _amount(value: Any, field_name: str, record_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ReferenceDataError(f"Invalid {field_name} for {record_name}: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ReferenceDataError(f"Invalid {field_name} for {record_name}: {value!r}") from e


def normalize_ingredient_record(raw: Any) -> IngredientRecord:
    """
    Convert a knowledge base entry into an IngredientRecord.

    Accepts flat nutrient fields ({"name": ..., "calories": 52}) as well as a
    nested nutrient mapping, alias fields under "aliases", "alias" or
    "synonyms", and alternate nutrient spellings such as "sugar".

    Raises:
        ReferenceDataError: If the entry has no name or a non-numeric nutrient
    """
    if isinstance(raw, IngredientRecord):
        return raw
    if not isinstance(raw, dict):
        raise ReferenceDataError(f"Knowledge base entry is not an object: {raw!r}")

    name = raw.get("name") or raw.get("ingredient")
    if not isinstance(name, str) or not name.strip():
        raise ReferenceDataError(f"Knowledge base entry without a name: {raw!r}")
    name = name.strip().lower()

    aliases = raw.get("aliases", raw.get("alias", raw.get("synonyms")))
    aliases = tuple(a.strip().lower() for a in _as_tuple(aliases) if a.strip())

    nutrients: Dict[str, float] = {}
    sources = [raw]
    for nested_key in ("nutrients", "nutrientsPer100g", "per_100g"):
        if isinstance(raw.get(nested_key), dict):
            sources.append(raw[nested_key])

    for source in sources:
        for key, value in source.items():
            nutrient = canonical_nutrient(str(key))
            if nutrient is None:
                continue
            amount = _amount(value, nutrient, name)
            if amount is not None:
                nutrients[nutrient] = amount

    return IngredientRecord(name=name, aliases=aliases, nutrients_per_100g=nutrients)
