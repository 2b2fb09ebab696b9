#!/usr/bin/env python3
"""
Complete Recipe Analysis Engine
Tries the remote analysis service once and falls back to the local pipeline:
segmentation, ingredient parsing, knowledge base matching, nutrition
aggregation, rule-based inference and summary generation.
"""

import argparse
import dataclasses
import json
import sys
from pathlib import Path
from typing import Callable, Iterable, Optional

import structlog

from .config import AnalyzerConfig
from .errors import ReferenceDataError
from .inference import AllergenDetector, CuisineInferencer, DietInferencer, TasteProfiler
from .ingredient_matcher import IngredientMatcher
from .ingredient_parser import IngredientLineParser
from .logging_config import configure_logging
from .models import AnalyzeResult, InferredAttributes, ParsedRecipe, RemoteOutcome
from .nutritional_analyzer import NutritionAggregator
from .reference_data import ReferenceData
from .remote_client import RemoteAnalysisClient
from .summary_generator import SummaryGenerator
from .text_segmenter import DEFAULT_TITLE, RecipeTextSegmenter
from .unit_converter import DensityUnitConverter, UnitConverter

logger = structlog.get_logger(__name__)


class RecipeAnalyzer:
    """Recipe analysis with remote-first, local-fallback behaviour."""

    def __init__(self, reference_data: ReferenceData,
                 remote_client: Optional[RemoteAnalysisClient] = None,
                 unit_converter: Optional[UnitConverter] = None,
                 summary_generator: Optional[SummaryGenerator] = None):
        """
        Initialize recipe analyzer.

        Args:
            reference_data: Knowledge base and keyword tables
            remote_client: Remote analysis service; None analyzes locally only
            unit_converter: Converter to grams, defaults to the density table
            summary_generator: Summary and suggestion text builder
        """
        self.reference_data = reference_data
        self.remote_client = remote_client

        self.segmenter = RecipeTextSegmenter()
        self.line_parser = IngredientLineParser()
        self.aggregator = NutritionAggregator(unit_converter or DensityUnitConverter())
        self.summary_generator = summary_generator or SummaryGenerator()

    @classmethod
    def from_config(cls, config: Optional[AnalyzerConfig] = None) -> "RecipeAnalyzer":
        """
        Build an analyzer from configuration.

        Raises:
            ReferenceDataError: If the reference data cannot be loaded
        """
        config = config or AnalyzerConfig.from_env()
        return cls(
            reference_data=ReferenceData.load(config.data_dir),
            remote_client=RemoteAnalysisClient.from_config(config),
            summary_generator=SummaryGenerator.from_config(config),
        )

    def swap_reference_data(self, reference_data: ReferenceData):
        """Replace reference data; analyses in flight keep their snapshot."""
        self.reference_data = reference_data
        logger.info("reference_data_swapped", ingredients=len(reference_data.ingredients))

    def analyze(self, text: str, member_id: Optional[str] = None) -> AnalyzeResult:
        """
        Analyze recipe text, preferring the remote service.

        The remote service is tried at most once. Any failure falls through
        to the local pipeline, which always produces a result.

        Args:
            text: Raw recipe text
            member_id: Optional member/context identifier for the remote service

        Returns:
            AnalyzeResult
        """
        return self._remote_first("analyze", text, member_id,
                                  fallback=lambda: self.analyze_local(text))

    def analyze_url(self, url: str, ingredient_lines: Iterable[str] = (),
                    title: Optional[str] = None, servings: int = 1,
                    member_id: Optional[str] = None) -> AnalyzeResult:
        """
        Analyze a recipe page through the remote service.

        Falls back to the local pipeline over ``ingredient_lines``, the
        ingredient list the caller already extracted from the page.
        """
        lines = tuple(ingredient_lines)
        return self._remote_first(
            "analyze_url", url, member_id,
            fallback=lambda: self.analyze_ingredients(lines, title=title, servings=servings),
        )

    def analyze_barcode(self, barcode: str, ingredient_lines: Iterable[str] = (),
                        title: Optional[str] = None,
                        member_id: Optional[str] = None) -> AnalyzeResult:
        """
        Analyze a packaged product through the remote service.

        Falls back to the local pipeline over the product's ingredient list
        as supplied by the caller's barcode lookup.
        """
        lines = tuple(ingredient_lines)
        return self._remote_first(
            "analyze_barcode", barcode, member_id,
            fallback=lambda: self.analyze_ingredients(lines, title=title),
        )

    def _remote_first(self, method: str, subject: str, member_id: Optional[str],
                      fallback: Callable[[], AnalyzeResult]) -> AnalyzeResult:
        if self.remote_client is not None:
            outcome = self._remote_attempt(method, subject, member_id)
            if outcome.ok:
                logger.info("remote_analysis_succeeded", method=method,
                            ingredients=len(outcome.result.ingredients))
                return outcome.result
            logger.warning("falling_back_to_local_analysis", method=method, reason=outcome.error)

        return fallback()

    def _remote_attempt(self, method: str, subject: str,
                        member_id: Optional[str]) -> RemoteOutcome:
        try:
            return getattr(self.remote_client, method)(subject, member_id)
        except Exception as e:
            return RemoteOutcome.failure(f"{type(e).__name__}: {e}")

    def analyze_local(self, text: str) -> AnalyzeResult:
        """Run the fully local pipeline on raw recipe text."""
        return self._analyze_parsed(self.segmenter.segment(text))

    def analyze_ingredients(self, lines: Iterable[str], title: Optional[str] = None,
                            servings: int = 1) -> AnalyzeResult:
        """
        Run the local pipeline on an already separated ingredient list,
        such as one derived from a barcode lookup or a recipe page.
        """
        parsed = ParsedRecipe(
            title=(title or "").strip() or DEFAULT_TITLE,
            servings=max(1, servings or 1),
            ingredient_lines=tuple(line.strip() for line in lines if line and line.strip()),
        )
        return self._analyze_parsed(parsed)

    def _analyze_parsed(self, parsed: ParsedRecipe) -> AnalyzeResult:
        data = self.reference_data
        matcher = IngredientMatcher(data.ingredients)

        ingredients = tuple(self.line_parser.parse(line) for line in parsed.ingredient_lines)
        items = [ingredient.item for ingredient in ingredients]

        inferred = InferredAttributes(
            allergens=AllergenDetector(data.allergen_keywords).detect(items),
            diets=DietInferencer(data.diet_exclusions).infer(items),
            cuisines=CuisineInferencer(data.cuisine_keywords).infer(items),
            taste=TasteProfiler(data.taste_table).profile(items),
        )

        nutrition = self.aggregator.aggregate(
            [(ingredient, matcher.match(ingredient.item)) for ingredient in ingredients],
            parsed.servings,
        )

        result = AnalyzeResult(
            title=parsed.title,
            servings=parsed.servings,
            ingredients=ingredients,
            steps=parsed.step_lines,
            inferred=inferred,
            nutrition_per_serving=nutrition,
        )
        result = dataclasses.replace(
            result,
            summary=self.summary_generator.summary(result),
            suggestions=self.summary_generator.suggestions(result),
        )

        logger.debug("local_analysis_completed", ingredients=len(ingredients),
                     steps=len(result.steps))
        return result


def main(argv=None):
    """Analyze a recipe text file and print the result as JSON."""
    parser = argparse.ArgumentParser(description='Recipe text nutrition analysis')
    parser.add_argument('input', help='Recipe text file, or - for stdin')
    parser.add_argument('--member-id', help='Member identifier passed to the remote service')
    parser.add_argument('--local-only', action='store_true', help='Skip the remote service')
    parser.add_argument('--data-dir', help='Reference data directory')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    args = parser.parse_args(argv)

    config = AnalyzerConfig.from_env()
    if args.data_dir:
        config.data_dir = args.data_dir
    if args.verbose:
        config.log_level = "DEBUG"
    configure_logging(config)

    try:
        text = sys.stdin.read() if args.input == '-' else Path(args.input).read_text(encoding='utf-8')
    except OSError as e:
        print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
        return 1

    try:
        analyzer = RecipeAnalyzer.from_config(config)
    except ReferenceDataError as e:
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 1

    if args.local_only:
        result = analyzer.analyze_local(text)
    else:
        result = analyzer.analyze(text, args.member_id)

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
