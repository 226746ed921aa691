# ==============================================
# Decision (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of structure analysis:
#   which store a JSON document should go to, how sure we are,
#   and the metrics the decision was made from.
#
# WHY THIS FILE EXISTS:
#   The selector, the file router and the stores all need these
#   types; keeping them apart from the analysis logic avoids
#   circular imports. The router persists StructureAnalysis.to_dict()
#   next to the file metadata as an audit trail.
#
# ENUMS:
# ------
# - StorageBackend(str, Enum): RELATIONAL, DOCUMENT
#     Compares equal to "relational" / "document".
#
# CLASSES:
# --------
# - StructureAnalysis (frozen dataclass)
#     Immutable result of analyze_structure().
#
#     Methods:
#     --------
#     - to_dict() -> dict            → Serialize for persistence
#     - from_dict(data: dict) -> StructureAnalysis  (classmethod)
#
# ==============================================

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, Tuple


class StorageBackend(str, Enum):
    """
    The two persistence targets.

    - RELATIONAL: schema-oriented store with fixed columns (MySQL)
    - DOCUMENT: schema-flexible store with nested records (MongoDB)
    """
    RELATIONAL = "relational"
    DOCUMENT = "document"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class StructureAnalysis:
    """
    Quantified, explainable storage recommendation for one JSON value.

    Percentages are floats in [0, 100]. The reasoning tuple is in the
    order the classification rules produced it.
    """

    # --- Core metrics ---
    nesting_depth: int = 0
    schema_consistency: float = 0.0  # higher = rows share one key-set
    field_variance: float = 0.0  # higher = more optional fields
    data_sparseity: float = 0.0  # higher = more null / absent slots
    mixed_types: bool = False

    # --- Data characteristics ---
    is_tabular: bool = False  # schema_consistency > 80
    is_flat: bool = False  # nesting_depth <= 2
    is_deeply_nested: bool = False  # nesting_depth > 3
    has_arrays: bool = False
    has_nested_arrays: bool = False

    # --- Counts ---
    total_fields: int = 0
    unique_field_names: int = 0
    array_count: int = 0
    object_count: int = 0

    # --- Recommendation ---
    recommended_storage: StorageBackend = StorageBackend.DOCUMENT
    confidence: float = 0.0
    reasoning: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the analysis to a dictionary for persistence.

        Returns:
            A JSON-serializable dictionary representation
        """
        return {
            "nesting_depth": self.nesting_depth,
            "schema_consistency": self.schema_consistency,
            "field_variance": self.field_variance,
            "data_sparseity": self.data_sparseity,
            "mixed_types": self.mixed_types,
            "is_tabular": self.is_tabular,
            "is_flat": self.is_flat,
            "is_deeply_nested": self.is_deeply_nested,
            "has_arrays": self.has_arrays,
            "has_nested_arrays": self.has_nested_arrays,
            "total_fields": self.total_fields,
            "unique_field_names": self.unique_field_names,
            "array_count": self.array_count,
            "object_count": self.object_count,
            "recommended_storage": self.recommended_storage.value,  # Convert enum to string
            "confidence": self.confidence,
            "reasoning": list(self.reasoning),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StructureAnalysis":
        """
        Reconstruct a StructureAnalysis from a stored audit record.

        Args:
            data: Dictionary produced by to_dict()

        Returns:
            A StructureAnalysis instance
        """
        return cls(
            nesting_depth=data.get("nesting_depth", 0),
            schema_consistency=data.get("schema_consistency", 0.0),
            field_variance=data.get("field_variance", 0.0),
            data_sparseity=data.get("data_sparseity", 0.0),
            mixed_types=data.get("mixed_types", False),
            is_tabular=data.get("is_tabular", False),
            is_flat=data.get("is_flat", False),
            is_deeply_nested=data.get("is_deeply_nested", False),
            has_arrays=data.get("has_arrays", False),
            has_nested_arrays=data.get("has_nested_arrays", False),
            total_fields=data.get("total_fields", 0),
            unique_field_names=data.get("unique_field_names", 0),
            array_count=data.get("array_count", 0),
            object_count=data.get("object_count", 0),
            recommended_storage=StorageBackend(data["recommended_storage"]),  # Convert string back to enum
            confidence=data.get("confidence", 0.0),
            reasoning=tuple(data.get("reasoning", ())),
        )
