"""
Pattern Model: Declarative Shape Descriptors

Every pattern is a frozen dataclass. Once built it never changes, holds
no per-match state, and can be shared by any number of concurrent
callers. The matcher (matcher.py) dispatches on the variant type; it
never inspects a pattern's ambient shape.

Raw Python values are accepted wherever a pattern is expected and are
normalized by to_pattern():

    str                -> TypeTag("string")
    float              -> TypeTag("number")
    bool               -> TypeTag("boolean")
    int                -> Integer
    None               -> TypeTag("null")
    Undefined          -> TypeTag("undefined")
    object             -> ObjectTag
    list               -> ArrayTag
    datetime.datetime  -> DateTag
    re.Pattern         -> RegExpTag
    any other class    -> ClassRef(cls)
    "foo", 3, True     -> Literal(value)
    [p]                -> ArrayOf(p)
    {"k": p}           -> ObjectShape({"k": p})
"""

from __future__ import annotations

import datetime
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from shapecheck.errors import PatternError


# ============================================================
# UNDEFINED
# ============================================================

class _UndefinedType:
    """Marks a value that was never supplied, as distinct from None."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_UndefinedType, ())


Undefined = _UndefinedType()


# ============================================================
# VARIANTS
# ============================================================

TYPE_KINDS = ("string", "number", "boolean", "function", "undefined", "null")


class Pattern:
    """Base of every pattern variant."""

    kind = "pattern"


@dataclass(frozen=True)
class AnyPattern(Pattern):
    kind = "any"


@dataclass(frozen=True)
class Literal(Pattern):
    """Matches a value of the same category that compares equal."""
    value: str | int | float | bool
    kind = "literal"


@dataclass(frozen=True)
class TypeTag(Pattern):
    """Matches values whose primitive category is `name`."""
    name: str
    kind = "type"

    def __post_init__(self):
        if self.name not in TYPE_KINDS:
            raise PatternError(f"unknown type tag {self.name!r}")


@dataclass(frozen=True)
class IntegerPattern(Pattern):
    kind = "integer"


@dataclass(frozen=True)
class ObjectTag(Pattern):
    kind = "object"


@dataclass(frozen=True)
class ArrayTag(Pattern):
    kind = "array"


@dataclass(frozen=True)
class FunctionTag(Pattern):
    kind = "function"


@dataclass(frozen=True)
class DateTag(Pattern):
    kind = "date"
    cls = datetime.datetime


@dataclass(frozen=True)
class RegExpTag(Pattern):
    kind = "regexp"
    cls = re.Pattern


@dataclass(frozen=True)
class ClassRef(Pattern):
    """Nominal match: the value must be an instance of `cls`."""
    cls: type
    kind = "class"


@dataclass(frozen=True)
class ArrayOf(Pattern):
    element: object
    kind = "array_of"

    def __post_init__(self):
        object.__setattr__(self, "element", to_pattern(self.element))


def _freeze_fields(fields) -> tuple:
    # already frozen, e.g. via dataclasses.replace()
    if isinstance(fields, tuple):
        fields = dict(fields)
    if not isinstance(fields, Mapping):
        raise PatternError(f"expected a mapping of field patterns, got {type(fields).__name__}")
    frozen = []
    for name, sub in fields.items():
        if not isinstance(name, str):
            raise PatternError(f"field names must be strings, got {name!r}")
        frozen.append((name, to_pattern(sub)))
    return tuple(frozen)


@dataclass(frozen=True)
class ObjectShape(Pattern):
    """
    A plain dict with exactly the declared keys.

    `fields` accepts a mapping and is stored as an ordered tuple of
    (name, pattern) pairs so the pattern stays immutable and hashable.
    """
    fields: tuple = field(default=())
    kind = "object_shape"

    def __post_init__(self):
        object.__setattr__(self, "fields", _freeze_fields(self.fields))


@dataclass(frozen=True)
class ObjectIncluding(Pattern):
    """A plain dict holding at least the declared keys."""
    fields: tuple = field(default=())
    kind = "object_including"

    def __post_init__(self):
        object.__setattr__(self, "fields", _freeze_fields(self.fields))


@dataclass(frozen=True)
class ObjectWithValues(Pattern):
    """A plain dict whose every value matches `values`."""
    values: object
    kind = "object_with_values"

    def __post_init__(self):
        object.__setattr__(self, "values", to_pattern(self.values))


@dataclass(frozen=True)
class Optional(Pattern):
    """
    Undefined, or a value matching `inner`.

    As an object field it also lets the key be absent. It does not
    accept None unless `inner` does.
    """
    inner: object
    kind = "optional"

    def __post_init__(self):
        object.__setattr__(self, "inner", to_pattern(self.inner))


@dataclass(frozen=True)
class Maybe(Pattern):
    """Undefined, None, or a value matching `inner`."""
    inner: object
    kind = "maybe"

    def __post_init__(self):
        object.__setattr__(self, "inner", to_pattern(self.inner))


@dataclass(frozen=True, init=False)
class OneOf(Pattern):
    """At least one alternative must match; tried in declaration order."""
    choices: tuple
    kind = "one_of"

    def __init__(self, *choices):
        if not choices:
            raise PatternError("OneOf needs at least one choice")
        object.__setattr__(self, "choices", tuple(to_pattern(c) for c in choices))


@dataclass(frozen=True)
class Where(Pattern):
    """
    Arbitrary predicate. A truthy return is a match; a falsy return or a
    raised StructuralMismatch is a mismatch. Other exceptions propagate.
    """
    predicate: object
    kind = "where"

    def __post_init__(self):
        if not callable(self.predicate):
            raise PatternError("Where needs a callable predicate")


# --- Singletons for the stateless variants ---

Any = AnyPattern()
Integer = IntegerPattern()
Function = FunctionTag()


# ============================================================
# NORMALIZATION
# ============================================================

_TYPE_SHORTHANDS: dict[type, Pattern] = {
    str: TypeTag("string"),
    float: TypeTag("number"),
    bool: TypeTag("boolean"),
    int: Integer,
    object: ObjectTag(),
    list: ArrayTag(),
    datetime.datetime: DateTag(),
    re.Pattern: RegExpTag(),
}

_NULL = TypeTag("null")
_UNDEFINED = TypeTag("undefined")


def to_pattern(raw) -> Pattern:
    """Normalize a raw pattern literal into a Pattern variant."""
    if isinstance(raw, Pattern):
        return raw
    if raw is None:
        return _NULL
    if raw is Undefined:
        return _UNDEFINED
    if isinstance(raw, type):
        return _TYPE_SHORTHANDS.get(raw) or ClassRef(raw)
    if isinstance(raw, (str, bool, int, float)):
        return Literal(raw)
    if isinstance(raw, list):
        if len(raw) != 1:
            raise PatternError(f"arrays must have one type element {raw!r}")
        return ArrayOf(raw[0])
    if isinstance(raw, dict):
        return ObjectShape(raw)
    raise PatternError(f"unknown pattern type {type(raw).__name__}")
