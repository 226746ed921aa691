# ==============================================
# Structure Analyzer
# ==============================================
#
# PURPOSE:
#   Public entry point of the analysis package. Runs the pieces
#   in order and packs the result into a StructureAnalysis:
#
#     value ─┬─ calculate_depth ──────────┐
#            └─ StructureWalker.walk ─────┴─ synthesize ─ Classifier.recommend
#
# FUNCTIONS:
# ----------
# - analyze_structure(value) -> StructureAnalysis
#     Pure: no I/O, no shared state, input never modified.
#     Never raises for a JSON value (None, [], {}, scalars included).
#
# - get_analysis_summary(analysis) -> str
#     Multi-line report for logs and the CLI.
#
# ==============================================

from typing import Any

from .classifier import Classifier
from .decision import StructureAnalysis
from .depth import calculate_depth
from .metrics import synthesize
from .structure_stats import StructureWalker

_walker = StructureWalker()
_classifier = Classifier()


def analyze_structure(value: Any) -> StructureAnalysis:
    """
    Analyze a parsed JSON value and recommend a store for it.

    Args:
        value: Result of json.loads() (dict, list, str, number, bool, None)

    Returns:
        An immutable StructureAnalysis
    """
    depth = calculate_depth(value)
    metrics = synthesize(_walker.walk(value), depth)
    recommendation = _classifier.recommend(metrics)

    return StructureAnalysis(
        nesting_depth=metrics.nesting_depth,
        schema_consistency=metrics.schema_consistency,
        field_variance=metrics.field_variance,
        data_sparseity=metrics.data_sparseity,
        mixed_types=metrics.mixed_types,
        is_tabular=metrics.is_tabular,
        is_flat=metrics.is_flat,
        is_deeply_nested=metrics.is_deeply_nested,
        has_arrays=metrics.has_arrays,
        has_nested_arrays=metrics.has_nested_arrays,
        total_fields=metrics.total_fields,
        unique_field_names=metrics.unique_field_names,
        array_count=metrics.array_count,
        object_count=metrics.object_count,
        recommended_storage=recommendation.backend,
        confidence=recommendation.confidence,
        reasoning=recommendation.reasoning,
    )


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def get_analysis_summary(analysis: StructureAnalysis) -> str:
    """Human-readable report of an analysis."""
    lines = [
        "📊 JSON Structure Analysis",
        "",
        "Structure Metrics:",
        f"  • Nesting depth: {analysis.nesting_depth} level(s)",
        f"  • Schema consistency: {analysis.schema_consistency:.1f}%",
        f"  • Field variance: {analysis.field_variance:.1f}%",
        f"  • Data sparseity: {analysis.data_sparseity:.1f}%",
        f"  • Complexity: {analysis.object_count} objects, {analysis.array_count} arrays",
        "",
        "Characteristics:",
        f"  • Tabular: {_yes_no(analysis.is_tabular)}",
        f"  • Flat structure: {_yes_no(analysis.is_flat)}",
        f"  • Deeply nested: {_yes_no(analysis.is_deeply_nested)}",
        f"  • Mixed types: {_yes_no(analysis.mixed_types)}",
        f"  • Nested arrays: {_yes_no(analysis.has_nested_arrays)}",
        "",
        f"📍 Recommendation: {analysis.recommended_storage.value.upper()}",
        f"   Confidence: {analysis.confidence:.1f}%",
        "",
        "Reasoning:",
    ]
    lines.extend(f"  • {reason}" for reason in analysis.reasoning)
    return "\n".join(lines)
