# ==============================================
# Structure Stats + Structural Walker
# ==============================================
#
# PURPOSE:
#   Walk a JSON value once and collect the raw evidence the
#   metric synthesizer turns into percentages.
#
# CLASSES:
# --------
# - TabularTally (dataclass)
#     Evidence for one array whose elements are all objects
#     ("rows"). Updated row by row, like a running counter.
#
#     Attributes:
#     -----------
#     - row_count: int                       → number of elements
#     - schema_signatures: list[str]         → sorted, comma-joined keys per row
#     - field_presence_counts: dict[str, int] → rows containing the field
#     - field_type_sets: dict[str, set[str]]  → value kinds seen per field
#     - explicit_null_count: int             → present keys whose value is null
#
#     Computed Properties:
#     --------------------
#     - total_scalar_slots → row_count * distinct fields
#     - null_slots         → explicit nulls + absent (row, field) pairs
#     - unique_schema_count, unique_field_names, total_fields
#
# - RawTally (dataclass)
#     Whole-tree counters plus the tabular tally in force.
#
#     - object_count, array_count: int
#     - has_nested_arrays: bool
#     - tabular: TabularTally | None
#     - root_key_count: int   → keys of a root object (0 otherwise)
#
# - StructureWalker
#     walk(value) -> RawTally
#
#     Qualifying arrays are the "first level" ones: the root when
#     it is an array, or each array directly under a root object.
#     A later qualifying array replaces an earlier one's tally.
#     Empty arrays and arrays holding anything but objects never
#     qualify. Counters cover the whole tree regardless.
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from .value_kind import ValueKind


@dataclass
class TabularTally:
    """Per-field evidence for an array of objects."""

    row_count: int = 0
    schema_signatures: List[str] = field(default_factory=list)
    field_presence_counts: Dict[str, int] = field(default_factory=dict)
    field_type_sets: Dict[str, Set[str]] = field(default_factory=dict)
    explicit_null_count: int = 0

    def observe_row(self, row: Dict[str, Any]) -> None:
        """
        Update the tally with one element of the array.

        Args:
            row: A JSON object (dict) from the tabular array
        """
        self.row_count += 1
        self.schema_signatures.append(",".join(sorted(row.keys())))

        for name, value in row.items():
            self.field_presence_counts[name] = self.field_presence_counts.get(name, 0) + 1
            self.field_type_sets.setdefault(name, set()).add(ValueKind.detect(value))
            if value is None:
                self.explicit_null_count += 1

    @classmethod
    def from_rows(cls, rows: List[Dict[str, Any]]) -> "TabularTally":
        tally = cls()
        for row in rows:
            tally.observe_row(row)
        return tally

    # ======================================
    # Computed properties
    # ======================================
    @property
    def unique_schema_count(self) -> int:
        return len(set(self.schema_signatures))

    @property
    def unique_field_names(self) -> int:
        return len(self.field_presence_counts)

    @property
    def total_fields(self) -> int:
        """Sum of presence counts: every (row, present key) pair."""
        return sum(self.field_presence_counts.values())

    @property
    def total_scalar_slots(self) -> int:
        """Every (row, field) pair over the distinct fields of the array."""
        return self.row_count * self.unique_field_names

    @property
    def null_slots(self) -> int:
        """Slots holding null plus slots where the row lacks the field."""
        absent = self.total_scalar_slots - self.total_fields
        return self.explicit_null_count + absent

    @property
    def partial_field_count(self) -> int:
        """Fields not present in every row."""
        return sum(
            1 for count in self.field_presence_counts.values()
            if count < self.row_count
        )

    @property
    def has_mixed_types(self) -> bool:
        return any(len(kinds) > 1 for kinds in self.field_type_sets.values())


@dataclass
class RawTally:
    """Raw counters for a whole JSON value."""
    object_count: int = 0
    array_count: int = 0
    has_nested_arrays: bool = False
    tabular: Optional[TabularTally] = None
    root_key_count: int = 0


class StructureWalker:
    """
    Visits every node of a JSON value without recursion.

    Stateless between calls; every walk() starts a fresh RawTally.
    """

    def walk(self, value: Any) -> RawTally:
        """
        Collect counters and the tabular tally for a JSON value.

        Args:
            value: Any JSON value; it is only read, never modified

        Returns:
            A RawTally for the value
        """
        tally = RawTally()
        self._count_structures(value, tally)

        root_kind = ValueKind.detect(value)
        if root_kind == ValueKind.ARRAY:
            self._consider_tabular(value, tally)
        elif root_kind == ValueKind.OBJECT:
            tally.root_key_count = len(value)
            for child in value.values():
                if ValueKind.detect(child) == ValueKind.ARRAY:
                    self._consider_tabular(child, tally)

        return tally

    def _count_structures(self, value: Any, tally: RawTally) -> None:
        """
        Count objects and arrays over the whole tree and flag arrays
        that sit somewhere below another array.
        """
        # (node, has an array ancestor)
        stack = [(value, False)]

        while stack:
            node, inside_array = stack.pop()
            kind = ValueKind.detect(node)

            if kind == ValueKind.OBJECT:
                tally.object_count += 1
                for child in node.values():
                    stack.append((child, inside_array))
            elif kind == ValueKind.ARRAY:
                tally.array_count += 1
                if inside_array:
                    tally.has_nested_arrays = True
                for child in node:
                    stack.append((child, True))

    def _consider_tabular(self, array: List[Any], tally: RawTally) -> None:
        """Replace the tabular tally if this array is a non-empty array of objects."""
        if not array:
            return
        if not all(ValueKind.is_record(item) for item in array):
            return
        tally.tabular = TabularTally.from_rows(array)
