# ==============================================
# Value Kinds
# ==============================================
#
# PURPOSE:
#   Names the kind of a parsed JSON value (the result of json.loads)
#   so the depth calculator and the structure walker can branch on
#   it without repeating isinstance chains.
#
# KINDS:
# ------
#   array, object, string, number, boolean, null
#
#   A key that a row does not have is not a value, so it has no
#   kind; the walker only records kinds for keys that are present.
#
# ==============================================

import numbers
from typing import Any


class ValueKind:
    """Kind constants plus detection helpers for JSON values."""

    ARRAY = "array"
    OBJECT = "object"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"

    CONTAINERS = frozenset({ARRAY, OBJECT})

    @classmethod
    def detect(cls, value: Any) -> str:
        """
        Kind of a single JSON value.

        Args:
            value: dict, list/tuple, str, number, bool or None

        Returns:
            One of the kind constants; unknown types count as string
        """
        if value is None:
            return cls.NULL

        # bool is a subclass of int
        if isinstance(value, bool):
            return cls.BOOLEAN

        # int, float, and Decimal from json.loads(parse_float=Decimal)
        if isinstance(value, numbers.Number):
            return cls.NUMBER

        if isinstance(value, (list, tuple)):
            return cls.ARRAY

        if isinstance(value, dict):
            return cls.OBJECT

        return cls.STRING

    @classmethod
    def is_container(cls, value: Any) -> bool:
        return cls.detect(value) in cls.CONTAINERS

    @classmethod
    def is_record(cls, value: Any) -> bool:
        """True for a non-array object, i.e. a row of a tabular array."""
        return cls.detect(value) == cls.OBJECT
