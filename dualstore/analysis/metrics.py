# ==============================================
# Metric Synthesizer
# ==============================================
#
# PURPOSE:
#   Turn the walker's raw counters into the normalized 0-100
#   metrics and boolean characteristics the classifier reads.
#
# FORMULAS (n = rows in the tabular array):
# -----------------------------------------
#   schema_consistency = (n - unique_schemas + 1) / n * 100
#   field_variance     = fields_missing_from_some_row / unique_fields * 100
#   data_sparseity     = null_slots / total_slots * 100
#   mixed_types        = some field seen with more than one kind
#   is_tabular         = schema_consistency > 80
#   is_flat            = depth <= 2
#   is_deeply_nested   = depth > 3
#
#   Without a tabular array every tabular metric stays 0 / False.
#   Any empty denominator yields 0.
#
# ==============================================

from dataclasses import dataclass

from .structure_stats import RawTally


TABULAR_CONSISTENCY = 80  # schema_consistency above this counts as tabular
FLAT_MAX_DEPTH = 2
DEEP_MIN_DEPTH = 3  # strictly greater than this is deeply nested


@dataclass(frozen=True)
class StructureMetrics:
    """Everything in a StructureAnalysis except the recommendation."""
    nesting_depth: int = 0
    schema_consistency: float = 0.0
    field_variance: float = 0.0
    data_sparseity: float = 0.0
    mixed_types: bool = False
    is_tabular: bool = False
    is_flat: bool = False
    is_deeply_nested: bool = False
    has_arrays: bool = False
    has_nested_arrays: bool = False
    total_fields: int = 0
    unique_field_names: int = 0
    array_count: int = 0
    object_count: int = 0


def percentage(part: float, whole: float) -> float:
    """part / whole * 100, or 0 when whole is 0."""
    if whole == 0:
        return 0.0
    return (part / whole) * 100


def synthesize(tally: RawTally, nesting_depth: int) -> StructureMetrics:
    """
    Compute metrics from a RawTally.

    Args:
        tally: Counters from StructureWalker.walk()
        nesting_depth: Result of calculate_depth() for the same value

    Returns:
        A StructureMetrics record
    """
    schema_consistency = 0.0
    field_variance = 0.0
    data_sparseity = 0.0
    mixed_types = False
    total_fields = 0
    unique_field_names = tally.root_key_count

    tabular = tally.tabular
    if tabular is not None and tabular.row_count > 0:
        n = tabular.row_count
        schema_consistency = percentage(n - tabular.unique_schema_count + 1, n)
        field_variance = percentage(tabular.partial_field_count, tabular.unique_field_names)
        data_sparseity = percentage(tabular.null_slots, tabular.total_scalar_slots)
        mixed_types = tabular.has_mixed_types
        total_fields = tabular.total_fields
        unique_field_names = tabular.unique_field_names

    return StructureMetrics(
        nesting_depth=nesting_depth,
        schema_consistency=schema_consistency,
        field_variance=field_variance,
        data_sparseity=data_sparseity,
        mixed_types=mixed_types,
        is_tabular=schema_consistency > TABULAR_CONSISTENCY,
        is_flat=nesting_depth <= FLAT_MAX_DEPTH,
        is_deeply_nested=nesting_depth > DEEP_MIN_DEPTH,
        has_arrays=tally.array_count > 0,
        has_nested_arrays=tally.has_nested_arrays,
        total_fields=total_fields,
        unique_field_names=unique_field_names,
        array_count=tally.array_count,
        object_count=tally.object_count,
    )
