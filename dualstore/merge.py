# ==============================================
# JSON Merge
# ==============================================
#
# PURPOSE:
#   Combine the parsed content of two JSON files. The file router
#   writes the result back into the first file's metadata.
#
# STRATEGIES:
# -----------
#   shallow   {**first, **second}             (objects only)
#   deep      recursive merge; arrays concatenate, objects merge
#             key by key, anything else takes the second value
#   override  the second value replaces the first
#   combine   {"file1": first, "file2": second}
#
# ==============================================

from enum import Enum
from typing import Any


class MergeStrategy(str, Enum):
    SHALLOW = "shallow"
    DEEP = "deep"
    OVERRIDE = "override"
    COMBINE = "combine"


def deep_merge(first: Any, second: Any) -> Any:
    """Merge two JSON values without modifying either input."""
    if isinstance(first, list) and isinstance(second, list):
        return first + second

    if isinstance(first, dict) and isinstance(second, dict):
        result = dict(first)
        for key, value in second.items():
            if key in result:
                result[key] = deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    return second


def merge_json(first: Any, second: Any, strategy) -> Any:
    """
    Merge two parsed JSON documents.

    Args:
        first: Content of the file that receives the merge
        second: Content merged into it
        strategy: MergeStrategy or its string value

    Returns:
        The merged JSON value

    Raises:
        ValueError: unknown strategy, or shallow merge of non-objects
    """
    strategy = MergeStrategy(strategy)

    if strategy is MergeStrategy.SHALLOW:
        if not isinstance(first, dict) or not isinstance(second, dict):
            raise ValueError("Shallow merge needs two JSON objects")
        return {**first, **second}
    if strategy is MergeStrategy.DEEP:
        return deep_merge(first, second)
    if strategy is MergeStrategy.OVERRIDE:
        return second
    return {"file1": first, "file2": second}
