# ==============================================
# Classifier
# ==============================================
#
# PURPOSE:
#   Takes the synthesized StructureMetrics of a JSON document and
#   applies threshold rules to decide relational vs document store.
#   Produces a confidence score and the reasons behind the choice.
#
# CLASS: Classifier
# -----------------
#   Stateless: metrics in, Recommendation out.
#
#   Methods:
#   --------
#   - recommend(metrics: StructureMetrics) -> Recommendation
#       Applies rules in order, first match wins:
#
#       RULE 1: HIGH CONSISTENCY → RELATIONAL
#         schema_consistency >= 90
#         confidence = schema_consistency
#
#       RULE 2: CLEAN BUT IMPERFECT → RELATIONAL
#         data_sparseity <= 15 AND field_variance < 50
#         (never for an empty root array or object)
#         confidence = min(100 - sparseity, 100 - variance / 2)
#
#       RULE 3: EVERYTHING ELSE → DOCUMENT
#         confidence = 100 - schema_consistency
#
#   The thresholds are fixed. Changing them changes which store
#   existing uploads would have been routed to.
#
# ==============================================

from dataclasses import dataclass
from typing import List, Tuple

from .decision import StorageBackend
from .metrics import StructureMetrics


@dataclass(frozen=True)
class Recommendation:
    """Classifier output: target store, confidence (0-100) and reasons."""
    backend: StorageBackend
    confidence: float
    reasoning: Tuple[str, ...]


class Classifier:
    """
    Applies the storage routing rules to structure metrics.

    Consistency is the dominant signal; the second rule keeps mostly
    uniform data with a few optional fields in the relational store.
    """

    # --- RULE 1 ---
    HIGH_CONSISTENCY = 90
    LOW_VARIANCE = 20

    # --- RULE 2 ---
    MAX_CLEAN_SPARSEITY = 15
    MAX_CLEAN_VARIANCE = 50

    # --- RULE 3 extras ---
    EXTREME_VARIANCE = 70
    HIGH_VARIANCE = 40
    VERY_LOW_CONSISTENCY = 30
    SPARSE_DATA = 30

    def recommend(self, metrics: StructureMetrics) -> Recommendation:
        """
        Pick a store for a document described by its metrics.

        Args:
            metrics: Output of the metric synthesizer

        Returns:
            A Recommendation whose reasoning is never empty
        """
        # RULE 1: HIGH CONSISTENCY
        if metrics.schema_consistency >= self.HIGH_CONSISTENCY:
            return Recommendation(
                backend=StorageBackend.RELATIONAL,
                confidence=metrics.schema_consistency,
                reasoning=tuple(self._high_consistency_reasons(metrics)),
            )

        # RULE 2: CLEAN BUT IMPERFECT
        # An empty [] or {} has nothing to put in columns
        if (
            not self._is_empty_container(metrics)
            and metrics.data_sparseity <= self.MAX_CLEAN_SPARSEITY
            and metrics.field_variance < self.MAX_CLEAN_VARIANCE
        ):
            confidence = min(
                100 - metrics.data_sparseity,
                100 - metrics.field_variance / 2,
            )
            return Recommendation(
                backend=StorageBackend.RELATIONAL,
                confidence=confidence,
                reasoning=tuple(self._clean_tabular_reasons(metrics)),
            )

        # RULE 3: EVERYTHING ELSE
        return Recommendation(
            backend=StorageBackend.DOCUMENT,
            confidence=100 - metrics.schema_consistency,
            reasoning=tuple(self._inconsistent_reasons(metrics)),
        )

    @staticmethod
    def _is_empty_container(metrics: StructureMetrics) -> bool:
        """Root is an array or object with no children at all."""
        return metrics.nesting_depth == 0 and (metrics.array_count + metrics.object_count) > 0

    def _high_consistency_reasons(self, metrics: StructureMetrics) -> List[str]:
        reasons = [
            f"✅ High schema consistency ({metrics.schema_consistency:.1f}%) - relational store selected",
            f"Consistent structure with {metrics.total_fields} fields is ideal for a relational database",
        ]
        if metrics.is_flat:
            reasons.append(
                f"Flat structure ({metrics.nesting_depth} levels) enhances relational efficiency"
            )
        if metrics.is_tabular:
            reasons.append("Tabular data format is perfect for SQL queries")
        if metrics.field_variance < self.LOW_VARIANCE:
            reasons.append(
                f"Low field variance ({metrics.field_variance:.1f}%) supports strong schema"
            )
        return reasons

    def _clean_tabular_reasons(self, metrics: StructureMetrics) -> List[str]:
        reasons = [
            f"✅ Very few missing values ({metrics.data_sparseity:.1f}% sparseity) and "
            f"moderate field variance ({metrics.field_variance:.1f}%) - relational store selected",
            f"Clean tabular data with optional fields is manageable in a relational database "
            f"(schema consistency: {metrics.schema_consistency:.1f}%)",
        ]
        if metrics.is_tabular:
            reasons.append("Tabular data format is perfect for SQL queries")
        if metrics.is_flat:
            reasons.append(
                f"Flat structure ({metrics.nesting_depth} levels) suits the relational store"
            )
        reasons.append("Optional fields map efficiently to nullable columns")
        return reasons

    def _inconsistent_reasons(self, metrics: StructureMetrics) -> List[str]:
        reasons = [
            f"❌ High inconsistency detected (schema: {metrics.schema_consistency:.1f}%, "
            f"field variance: {metrics.field_variance:.1f}%) - document store selected",
            "Flexible/inconsistent schema requires a document model",
        ]

        if metrics.field_variance > self.EXTREME_VARIANCE:
            reasons.append(
                f"Extremely high field variance ({metrics.field_variance:.1f}%) - "
                f"objects have very different structures"
            )
        elif metrics.field_variance > self.HIGH_VARIANCE:
            reasons.append(
                f"High field variance ({metrics.field_variance:.1f}%) benefits from flexible schema"
            )

        if metrics.schema_consistency < self.VERY_LOW_CONSISTENCY:
            reasons.append(
                f"Very low schema consistency ({metrics.schema_consistency:.1f}%) - "
                f"objects share few common fields"
            )
        if metrics.is_deeply_nested:
            reasons.append(
                f"Deep nesting ({metrics.nesting_depth} levels) suits a document database"
            )
        if metrics.has_nested_arrays:
            reasons.append("Nested arrays are naturally handled by the document store")
        if metrics.data_sparseity > self.SPARSE_DATA:
            reasons.append(
                f"Sparse data ({metrics.data_sparseity:.1f}% null values) saves space in the document store"
            )
        if metrics.mixed_types:
            reasons.append("Mixed field types leverage the document store's schema-less nature")
        return reasons
