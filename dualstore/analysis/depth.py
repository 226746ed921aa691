# ==============================================
# Depth Calculator
# ==============================================
#
# calculate_depth(value) -> int
#
#   scalar / null          → 0
#   [] or {}               → 0
#   {"a": 1}               → 1
#   [{"a": 1}]             → 2
#   {"a": {"b": {"c": 1}}} → 3
#
# Each container adds one level above its deepest child.
# Walks with an explicit stack, so very deep documents do not
# hit the interpreter recursion limit.
# ==============================================

from typing import Any, Iterable

from .value_kind import ValueKind


def iter_children(value: Any) -> Iterable[Any]:
    """Yield the direct children of an array or object (nothing for scalars)."""
    kind = ValueKind.detect(value)
    if kind == ValueKind.OBJECT:
        return value.values()
    if kind == ValueKind.ARRAY:
        return value
    return ()


def calculate_depth(value: Any) -> int:
    """
    Maximum nesting depth of a JSON value.

    Args:
        value: Any JSON value (dict, list, str, number, bool, None)

    Returns:
        0 for scalars and empty containers, otherwise the number of
        container levels down to the deepest child
    """
    max_depth = 0
    stack = [(value, 0)]

    while stack:
        node, depth = stack.pop()
        max_depth = max(max_depth, depth)
        for child in iter_children(node):
            stack.append((child, depth + 1))

    return max_depth
