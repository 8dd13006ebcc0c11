"""
Attribute filtering over raw board object records.

The Miro runtime only filters by type, id and tags. Anything else (a frame
title, a sticky note shape) is matched here against the returned records.
"""
from numbers import Number
from typing import Any, Dict, List, Mapping, Optional

AttributeFilter = Mapping[str, Any]


def values_equal(actual: Any, expected: Any) -> bool:
    """
    Strict equality: `True` does not equal `1` and `0` does not equal `False`.

    Numbers of different types (int and float) still compare by value.
    """
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected
    if isinstance(actual, Number) and isinstance(expected, Number):
        return actual == expected
    return type(actual) is type(expected) and actual == expected


def object_filter_matches(filter: AttributeFilter, record: Mapping[str, Any]) -> bool:
    """
    Checks a single record against an attribute filter.

    Every key of `filter` must exist on the record. A list value matches when
    the record's value is one of its members; any other value must be equal.
    """
    for key, expected in filter.items():
        if key not in record:
            return False
        actual = record[key]
        if isinstance(expected, (list, tuple)):
            if not any(values_equal(actual, member) for member in expected):
                return False
        elif not values_equal(actual, expected):
            return False
    return True


def apply_filter(records: List[Dict[str, Any]],
                 filter: Optional[AttributeFilter] = None) -> List[Dict[str, Any]]:
    """Returns the records matching `filter`, in their original order."""
    if not filter:
        return records
    return [record for record in records if object_filter_matches(filter, record)]
