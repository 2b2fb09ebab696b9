"""
Recipe Nutrition AI
Turns unstructured recipe text into a structured recipe, per-serving
nutrition, inferred tags and suggestions.
"""

from .config import AnalyzerConfig
from .errors import (
    MalformedResponseError, RecipeProcessingError, ReferenceDataError, RemoteAnalysisError,
)
from .models import (
    AnalyzeResult, IngredientRecord, InferredAttributes, ParsedIngredientLine, ParsedRecipe,
    RemoteOutcome, TRACKED_NUTRIENTS,
)
from .recipe_analyzer import RecipeAnalyzer
from .reference_data import ReferenceData
from .remote_client import RemoteAnalysisClient
from .unit_converter import DensityUnitConverter, UnitConverter

__version__ = "1.0.0"

__all__ = [
    "AnalyzerConfig",
    "AnalyzeResult",
    "DensityUnitConverter",
    "IngredientRecord",
    "InferredAttributes",
    "MalformedResponseError",
    "ParsedIngredientLine",
    "ParsedRecipe",
    "RecipeAnalyzer",
    "RecipeProcessingError",
    "ReferenceData",
    "ReferenceDataError",
    "RemoteAnalysisClient",
    "RemoteAnalysisError",
    "RemoteOutcome",
    "TRACKED_NUTRIENTS",
    "UnitConverter",
]
