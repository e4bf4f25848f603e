"""
shapecheck: Structural Runtime Type Checking

Checks that values crossing a trust boundary (request bodies, RPC
arguments, deserialized documents) have the shape the caller expects,
and reports the first place they diverge.

Public API:
  - check:    Raise StructuralMismatch unless the value conforms
  - matches:  Boolean form of check; absorbs StructuralMismatch only
  - explain:  MatchReport describing the verdict
  - match_engine: The stateless MatchEngine singleton behind all three
  - Any, Integer, Function, Undefined: Marker patterns
  - Optional, Maybe, OneOf, Where: Combinators
  - ObjectIncluding, ObjectWithValues, ArrayOf: Structural combinators
  - StructuralMismatch, PatternError: Failure types

Usage:
    from shapecheck import check, matches, Optional, Integer

    check({"name": "ada", "age": 36}, {"name": str, "age": Integer})
    matches([1, 2, "3"], [Integer])    # False
"""

__version__ = "1.0.0"

from shapecheck.errors import StructuralMismatch, PatternError
from shapecheck.patterns import (
    Any,
    Integer,
    Function,
    Undefined,
    Optional,
    Maybe,
    OneOf,
    Where,
    ObjectShape,
    ObjectIncluding,
    ObjectWithValues,
    ArrayOf,
    ClassRef,
    Literal,
    TypeTag,
    Pattern,
    to_pattern,
)
from shapecheck.plain import is_plain_object
from shapecheck.matcher import MatchEngine, match_engine, check, matches, explain
from shapecheck.schemas.report import MatchReport

__all__ = [
    "check",
    "matches",
    "explain",
    "match_engine",
    "MatchEngine",
    "MatchReport",
    "Any",
    "Integer",
    "Function",
    "Undefined",
    "Optional",
    "Maybe",
    "OneOf",
    "Where",
    "ObjectShape",
    "ObjectIncluding",
    "ObjectWithValues",
    "ArrayOf",
    "ClassRef",
    "Literal",
    "TypeTag",
    "Pattern",
    "to_pattern",
    "is_plain_object",
    "StructuralMismatch",
    "PatternError",
]
