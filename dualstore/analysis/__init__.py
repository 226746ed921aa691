# ==============================================
# ANALYSIS: JSON STRUCTURE → STORE RECOMMENDATION
# ==============================================
#
# This package decides whether a parsed JSON document belongs in
# the relational store or the document store, and explains why.
#
# Modules:
# --------
# - value_kind.py       → Kind of a JSON value (array, object, string, ...)
# - depth.py            → Maximum nesting depth
# - structure_stats.py  → Walk the tree, tally objects/arrays/rows/fields
# - metrics.py          → Raw tallies → 0-100 metrics and flags
# - classifier.py       → Threshold rules → store, confidence, reasons
# - decision.py         → StorageBackend and StructureAnalysis data classes
# - analyzer.py         → analyze_structure() and the text summary
#
# ==============================================

from .analyzer import analyze_structure, get_analysis_summary
from .classifier import Classifier, Recommendation
from .decision import StorageBackend, StructureAnalysis
from .depth import calculate_depth
from .metrics import StructureMetrics, synthesize
from .structure_stats import RawTally, StructureWalker, TabularTally
from .value_kind import ValueKind

__all__ = [
    "analyze_structure",
    "get_analysis_summary",
    "Classifier",
    "Recommendation",
    "StorageBackend",
    "StructureAnalysis",
    "calculate_depth",
    "StructureMetrics",
    "synthesize",
    "RawTally",
    "StructureWalker",
    "TabularTally",
    "ValueKind",
]
