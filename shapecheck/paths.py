"""
Access Paths and Message Rendering

Builds the human-readable accessor chain reported with a mismatch
(``foo[1].bar``, ``["return"]``, ``[1231]``) and renders values and
categories for failure messages.

Paths are plain strings. Every recursive step computes a new one; none
is shared or mutated.
"""

from __future__ import annotations

import json
import keyword
import re
from collections.abc import Sequence

from shapecheck.patterns import Undefined


_NUMERIC_KEY = re.compile(r"[0-9]+")
_IDENTIFIER_KEY = re.compile(r"[a-z_$][0-9a-z_$]*", re.IGNORECASE | re.ASCII)


# ============================================================
# CATEGORIES
# ============================================================

def is_array_like(value) -> bool:
    """Lists, tuples and other sequences with indexable elements; not strings or bytes."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def category_of(value) -> str:
    """
    Primitive category of a value, as named in failure messages.

    Only exact str/int/float/bool instances are primitives; a subclass
    instance wraps the primitive in its own class and counts as "object".
    """
    if value is Undefined:
        return "undefined"
    if value is None:
        return "null"
    value_type = type(value)
    if value_type is bool:
        return "boolean"
    if value_type is int or value_type is float:
        return "number"
    if value_type is str:
        return "string"
    if is_array_like(value):
        return "array"
    if callable(value):
        return "function"
    return "object"


# ============================================================
# RENDERING
# ============================================================

def render_value(value) -> str:
    """JSON-like rendering of an actual value; falls back to its category."""
    if value is Undefined:
        return "undefined"
    if value is None:
        return "null"
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        # cyclic, too deeply nested, or not JSON-encodable
        return category_of(value)


def render_literal(value) -> str:
    """Render an expected literal: strings bare, everything else JSON-like."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


# ============================================================
# PATHS
# ============================================================

def format_key(key) -> str:
    """
    Render one accessor.

    Returns ``[n]`` for indices and all-digit keys, the bare key for
    identifiers that are not Python keywords, and ``["<escaped>"]`` for
    everything else.
    """
    if isinstance(key, int) and not isinstance(key, bool):
        return f"[{key}]"
    key = str(key)
    if _NUMERIC_KEY.fullmatch(key):
        return f"[{key}]"
    if not _IDENTIFIER_KEY.fullmatch(key) or keyword.iskeyword(key):
        return json.dumps([key], ensure_ascii=False)
    return key


def join_path(path: str, key) -> str:
    """Extend `path` with one field name or index."""
    return concat_paths(path, format_key(key))


def concat_paths(base: str, tail: str) -> str:
    """Append an already rendered path to `base`."""
    if not base:
        return tail
    if not tail:
        return base
    if tail.startswith("["):
        return base + tail
    return f"{base}.{tail}"
