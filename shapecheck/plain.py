"""Plain-object detection."""

from __future__ import annotations


def is_plain_object(value) -> bool:
    """
    True only for values built as ordinary ``dict`` records.

    Subclasses of dict (OrderedDict, defaultdict, user mappings) carry
    their own class identity and are not plain. Neither are None,
    sequences, datetimes or arbitrary class instances.
    """
    return type(value) is dict
