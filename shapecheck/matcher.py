"""
Matcher: The Conformance Engine

Recursive descent over a (value, pattern) pair. Dispatch is on the
pattern variant only; each variant has exactly one handler. The first
divergence raises StructuralMismatch immediately. There is no retry and
no accumulation of multiple violations.

Public surface:
  - check(value, pattern):   raises StructuralMismatch, returns None on success
  - matches(value, pattern): True/False; absorbs StructuralMismatch only
  - explain(value, pattern): MatchReport for callers that serialize verdicts

The engine holds no mutable state. A single instance (match_engine)
serves every caller.
"""

from __future__ import annotations

import logging
import math

from shapecheck.config import settings
from shapecheck.errors import PatternError, StructuralMismatch
from shapecheck.paths import (
    category_of,
    concat_paths,
    is_array_like,
    join_path,
    render_literal,
    render_value,
)
from shapecheck.patterns import (
    AnyPattern,
    ArrayOf,
    ArrayTag,
    ClassRef,
    DateTag,
    FunctionTag,
    IntegerPattern,
    Literal,
    Maybe,
    ObjectIncluding,
    ObjectShape,
    ObjectTag,
    ObjectWithValues,
    OneOf,
    Optional,
    Pattern,
    RegExpTag,
    TypeTag,
    Undefined,
    Where,
    to_pattern,
)
from shapecheck.plain import is_plain_object
from shapecheck.schemas.report import MatchReport

logger = logging.getLogger(__name__)


ONE_OF_FAILED = "Failed OneOf validation"
WHERE_FAILED = "Failed Where validation"


class MatchEngine:
    """
    Stateless structural matcher.

    Every call allocates its own path strings; patterns are frozen, so
    one engine and one pattern may be used from any number of threads.
    """

    def __init__(self):
        self._handlers = {
            AnyPattern: self._match_any,
            Literal: self._match_literal,
            TypeTag: self._match_type,
            IntegerPattern: self._match_integer,
            ObjectTag: self._match_object_tag,
            ArrayTag: self._match_array_tag,
            FunctionTag: self._match_function,
            DateTag: self._match_builtin_class,
            RegExpTag: self._match_builtin_class,
            ClassRef: self._match_class,
            ArrayOf: self._match_array_of,
            ObjectShape: self._match_shape,
            ObjectIncluding: self._match_including,
            ObjectWithValues: self._match_with_values,
            Optional: self._match_optional,
            Maybe: self._match_maybe,
            OneOf: self._match_one_of,
            Where: self._match_where,
        }

    # ------------------------------------------------------------
    # Public surface
    # ------------------------------------------------------------

    def check(self, value, pattern) -> None:
        """Raise StructuralMismatch unless `value` conforms to `pattern`."""
        compiled = to_pattern(pattern)
        try:
            self.match(value, compiled)
        except StructuralMismatch as err:
            if settings.LOG_MISMATCHES:
                logger.debug(
                    "Match failed: %s", err.message,
                    extra={"reason": err.reason, "path": err.path,
                           "pattern_kind": compiled.kind},
                )
            raise

    def test(self, value, pattern) -> bool:
        """
        True if `value` conforms to `pattern`, False on a structural mismatch.

        Exceptions other than StructuralMismatch (for example one raised by
        a Where predicate, or a PatternError) propagate to the caller.
        """
        try:
            self.match(value, to_pattern(pattern))
        except StructuralMismatch:
            return False
        return True

    def explain(self, value, pattern) -> MatchReport:
        """Run the match and describe the verdict as a MatchReport."""
        try:
            self.match(value, to_pattern(pattern))
        except StructuralMismatch as err:
            return MatchReport(
                ok=False, message=err.message, reason=err.reason, path=err.path,
                core_version=settings.CORE_VERSION,
            )
        return MatchReport(ok=True, core_version=settings.CORE_VERSION)

    # ------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------

    def match(self, value, pattern, path: str = "") -> None:
        """Match one (value, pattern) pair at `path`."""
        pattern = to_pattern(pattern)
        handler = self._handlers.get(type(pattern))
        if handler is None:
            raise PatternError(f"unknown pattern type {type(pattern).__name__}")
        handler(value, pattern, path)

    # --- Leaves ---

    def _match_any(self, value, pattern: Pattern, path: str) -> None:
        return

    def _match_literal(self, value, pattern: Literal, path: str) -> None:
        expected = pattern.value
        if category_of(value) == category_of(expected) and value == expected:
            return
        raise StructuralMismatch(
            f"Expected {render_literal(expected)}, got {render_value(value)}", path,
        )

    def _match_type(self, value, pattern: TypeTag, path: str) -> None:
        actual = category_of(value)
        if actual == pattern.name:
            return
        if pattern.name == "null":
            raise StructuralMismatch(f"Expected null, got {render_value(value)}", path)
        raise StructuralMismatch(f"Expected {pattern.name}, got {actual}", path)

    def _match_integer(self, value, pattern: Pattern, path: str) -> None:
        if category_of(value) != "number":
            raise StructuralMismatch(f"Expected Integer, got {category_of(value)}", path)
        if isinstance(value, int) or (math.isfinite(value) and value.is_integer()):
            return
        raise StructuralMismatch(f"Expected Integer, got {render_value(value)}", path)

    def _match_object_tag(self, value, pattern: Pattern, path: str) -> None:
        actual = category_of(value)
        if actual != "object":
            raise StructuralMismatch(f"Expected object, got {actual}", path)

    def _match_function(self, value, pattern: Pattern, path: str) -> None:
        actual = category_of(value)
        if actual != "function":
            raise StructuralMismatch(f"Expected function, got {actual}", path)

    def _match_builtin_class(self, value, pattern, path: str) -> None:
        self._require_instance(value, pattern.cls, path)

    def _match_class(self, value, pattern: ClassRef, path: str) -> None:
        self._require_instance(value, pattern.cls, path)

    @staticmethod
    def _require_instance(value, cls, path: str) -> None:
        if isinstance(value, cls):
            return
        name = getattr(cls, "__name__", None) or "particular constructor"
        raise StructuralMismatch(f"Expected {name}", path)

    # --- Arrays ---

    def _match_array_tag(self, value, pattern: Pattern, path: str) -> None:
        self._require_array(value, path)

    def _match_array_of(self, value, pattern: ArrayOf, path: str) -> None:
        self._require_array(value, path)
        for index, element in enumerate(value):
            self.match(element, pattern.element, join_path(path, index))

    @staticmethod
    def _require_array(value, path: str) -> None:
        if not is_array_like(value):
            raise StructuralMismatch(f"Expected array, got {render_value(value)}", path)

    # --- Objects ---

    def _match_shape(self, value, pattern: ObjectShape, path: str) -> None:
        self._match_fields(value, pattern.fields, path, allow_unknown=False)

    def _match_including(self, value, pattern: ObjectIncluding, path: str) -> None:
        self._match_fields(value, pattern.fields, path, allow_unknown=True)

    def _match_with_values(self, value, pattern: ObjectWithValues, path: str) -> None:
        self._require_plain(value, path)
        for key, sub_value in value.items():
            self.match(sub_value, pattern.values, join_path(path, key))

    def _match_fields(self, value, fields: tuple, path: str, allow_unknown: bool) -> None:
        """
        Check a plain dict against declared fields.

        Keys are visited in the value's insertion order. A field wrapped in
        Optional or Maybe may be absent, but a present value must match
        the wrapped pattern itself (so a present Undefined or None is not
        excused by the wrapper). Required keys still missing after the walk
        are reported in declaration order.
        """
        self._require_plain(value, path)

        required: dict[str, Pattern] = {}
        optional: dict[str, Pattern] = {}
        for name, sub in fields:
            if isinstance(sub, (Optional, Maybe)):
                optional[name] = sub.inner
            else:
                required[name] = sub

        for key, sub_value in value.items():
            if key in required:
                self.match(sub_value, required.pop(key), join_path(path, key))
            elif key in optional:
                self.match(sub_value, optional[key], join_path(path, key))
            elif not allow_unknown:
                raise StructuralMismatch("Unknown key", join_path(path, key))

        if required:
            missing = next(iter(required))
            raise StructuralMismatch(f"Missing key '{missing}'", path)

    @staticmethod
    def _require_plain(value, path: str) -> None:
        actual = category_of(value)
        # arrays are objects here; they fail as non-plain below
        if actual not in ("object", "array"):
            raise StructuralMismatch(f"Expected object, got {actual}", path)
        if not is_plain_object(value):
            raise StructuralMismatch("Expected plain object", path)

    # --- Combinators ---

    def _match_optional(self, value, pattern: Optional, path: str) -> None:
        if value is Undefined:
            return
        self.match(value, pattern.inner, path)

    def _match_maybe(self, value, pattern: Maybe, path: str) -> None:
        if value is Undefined or value is None:
            return
        self.match(value, pattern.inner, path)

    def _match_one_of(self, value, pattern: OneOf, path: str) -> None:
        for choice in pattern.choices:
            try:
                self.match(value, choice, path)
            except StructuralMismatch:
                continue
            return
        raise StructuralMismatch(ONE_OF_FAILED, path)

    def _match_where(self, value, pattern: Where, path: str) -> None:
        try:
            result = pattern.predicate(value)
        except StructuralMismatch as err:
            raise StructuralMismatch(err.reason, concat_paths(path, err.path)) from err
        if not result:
            raise StructuralMismatch(WHERE_FAILED, path)


# ============================================================
# SINGLETON
# ============================================================

match_engine = MatchEngine()

check = match_engine.check
matches = match_engine.test
explain = match_engine.explain
