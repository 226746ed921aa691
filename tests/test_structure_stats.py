# ==============================================
# Tests for StructureWalker / TabularTally
# ==============================================
#
# class TestTabularTally:
#     signatures, presence counts, null and absent slots,
#     partial fields, mixed types
#
# class TestStructureWalker:
#     object / array counts, nested array detection,
#     which array supplies the tabular tally
# ==============================================

from dualstore.analysis.structure_stats import StructureWalker, TabularTally


class TestTabularTally:
    def test_signatures_are_sorted_key_lists(self):
        tally = TabularTally.from_rows([{"b": 1, "a": 2}, {"a": 3, "b": 4}])
        assert tally.schema_signatures == ["a,b", "a,b"]
        assert tally.unique_schema_count == 1

    def test_presence_and_total_fields(self):
        tally = TabularTally.from_rows([{"a": 1, "b": 2}, {"a": 3}])
        assert tally.field_presence_counts == {"a": 2, "b": 1}
        assert tally.total_fields == 3
        assert tally.unique_field_names == 2
        assert tally.partial_field_count == 1

    def test_absent_keys_count_as_null_slots(self):
        """Two rows × two fields; one absent key, one explicit null."""
        tally = TabularTally.from_rows([{"a": 1, "b": None}, {"a": 2}])
        assert tally.total_scalar_slots == 4
        assert tally.explicit_null_count == 1
        assert tally.null_slots == 2

    def test_null_is_its_own_kind(self):
        tally = TabularTally.from_rows([{"a": None}, {"a": "x"}])
        assert tally.field_type_sets["a"] == {"null", "string"}
        assert tally.has_mixed_types

    def test_absent_key_does_not_add_a_kind(self):
        tally = TabularTally.from_rows([{"a": 1, "b": "x"}, {"a": 2}])
        assert tally.field_type_sets["b"] == {"string"}
        assert not tally.has_mixed_types

    def test_bool_and_number_are_different_kinds(self):
        tally = TabularTally.from_rows([{"flag": True}, {"flag": 1}])
        assert tally.has_mixed_types


class TestStructureWalker:
    def setup_method(self):
        self.walker = StructureWalker()

    def test_counts_every_container_once(self):
        value = {"users": [{"id": 1}, {"id": 2}], "meta": {"v": 1}}
        tally = self.walker.walk(value)
        assert tally.object_count == 4
        assert tally.array_count == 1
        assert tally.root_key_count == 2

    def test_scalar_root(self):
        tally = self.walker.walk("just text")
        assert tally.object_count == 0
        assert tally.array_count == 0
        assert tally.tabular is None

    def test_nested_arrays_directly(self):
        assert self.walker.walk([[1, 2], [3]]).has_nested_arrays

    def test_nested_arrays_through_objects(self):
        """An array inside an object inside an array still counts."""
        assert self.walker.walk([{"tags": [1]}]).has_nested_arrays

    def test_array_in_object_is_not_nested(self):
        assert not self.walker.walk({"a": [1, 2], "b": {"c": [3]}}).has_nested_arrays

    def test_root_array_of_objects_is_tabular(self, uniform_rows):
        tally = self.walker.walk(uniform_rows)
        assert tally.tabular is not None
        assert tally.tabular.row_count == 3

    def test_array_with_a_scalar_is_not_tabular(self):
        assert self.walker.walk([{"a": 1}, 2]).tabular is None

    def test_empty_array_is_not_tabular(self):
        assert self.walker.walk([]).tabular is None

    def test_last_qualifying_array_wins(self):
        value = {"first": [{"x": 1}, {"y": 2}], "second": [{"z": 1}, {"z": 2}]}
        tally = self.walker.walk(value)
        assert tally.tabular.field_presence_counts == {"z": 2}

    def test_non_qualifying_array_keeps_earlier_tally(self):
        value = {"rows": [{"x": 1}, {"x": 2}], "ids": [1, 2]}
        tally = self.walker.walk(value)
        assert tally.tabular.field_presence_counts == {"x": 2}

    def test_only_first_level_arrays_are_considered(self):
        value = {"outer": {"rows": [{"x": 1}]}}
        assert self.walker.walk(value).tabular is None

    def test_walk_does_not_modify_input(self, uniform_rows):
        before = [dict(row) for row in uniform_rows]
        self.walker.walk(uniform_rows)
        assert uniform_rows == before
