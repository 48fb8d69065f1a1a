"""Tests for the recursive schema interpreter."""

from __future__ import annotations

import numbers
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from fractions import Fraction
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

import pytest

from typeshape.domain.errors import InvalidInstance, InvalidSchema
from typeshape.domain.interpreter import Resolution, interpret, resolve_custom
from typeshape.domain.schema import ABSENT, CustomType


def _noop() -> None:
    return None


FIXTURES: list[Any] = [
    ABSENT,
    None,
    "foo",
    42,
    {"x": "foo", "y": 42},
    ["foo", 42, None],
    _noop,
]


def _parse_amount(value: Any) -> Decimal:
    return Decimal(value.strip("$"))


def _parse_amount_badly(value: Any) -> Decimal:
    return float(value)  # type: ignore[return-value]


class Point:
    """Constructible custom type that accepts anything."""

    def __init__(self, value: Any = None) -> None:
        self.value = value


class TestAbsent:
    def test_accepts_absent(self) -> None:
        assert interpret(ABSENT, ABSENT) is ABSENT

    @pytest.mark.parametrize("candidate", [x for x in FIXTURES if x is not ABSENT])
    def test_rejects_anything_else(self, candidate: Any) -> None:
        with pytest.raises(InvalidInstance, match="Expected lack of argument"):
            interpret(ABSENT, candidate)


class TestNull:
    def test_accepts_none(self) -> None:
        assert interpret(None, None) is None

    @pytest.mark.parametrize("candidate", [x for x in FIXTURES if x is not None])
    def test_rejects_anything_else(self, candidate: Any) -> None:
        with pytest.raises(InvalidInstance, match="Expected null"):
            interpret(None, candidate)


class TestString:
    def test_returns_value_unchanged(self) -> None:
        value = "foo"
        assert interpret(str, value) is value

    def test_accepts_str_subclass(self) -> None:
        class Name(str):
            pass

        name = Name("ada")
        assert interpret(str, name) is name

    @pytest.mark.parametrize("candidate", [x for x in FIXTURES if not isinstance(x, str)])
    def test_rejects_anything_else(self, candidate: Any) -> None:
        with pytest.raises(InvalidInstance, match="Expected a string"):
            interpret(str, candidate)


class TestNumber:
    @pytest.mark.parametrize("value", [42, -1, 0.5, Decimal("1.25"), Fraction(1, 3), 2j])
    def test_returns_value_unchanged(self, value: Any) -> None:
        assert interpret(numbers.Number, value) is value

    @pytest.mark.parametrize("candidate", [x for x in FIXTURES if not isinstance(x, int)])
    def test_rejects_anything_else(self, candidate: Any) -> None:
        with pytest.raises(InvalidInstance, match="Expected a number"):
            interpret(numbers.Number, candidate)

    @pytest.mark.parametrize("flag", [True, False])
    def test_rejects_bool(self, flag: bool) -> None:
        with pytest.raises(InvalidInstance, match="Expected a number"):
            interpret(numbers.Number, flag)

    def test_rejects_numeric_string(self) -> None:
        with pytest.raises(InvalidInstance):
            interpret(numbers.Number, "42")


class TestObjectShape:
    SCHEMA = {"x": str, "y": numbers.Number}

    def test_accepts_conformant_object(self) -> None:
        assert interpret(self.SCHEMA, {"x": "foo", "y": 42}) == {"x": "foo", "y": 42}

    def test_drops_undeclared_keys(self) -> None:
        result = interpret(self.SCHEMA, {"x": "foo", "y": 42, "z": "extra"})
        assert result == {"x": "foo", "y": 42}
        assert "z" not in result

    def test_missing_key_is_named(self) -> None:
        with pytest.raises(InvalidInstance, match="Missing properties: 'y'"):
            interpret(self.SCHEMA, {"x": "foo"})

    def test_all_missing_keys_reported_in_declaration_order(self) -> None:
        with pytest.raises(InvalidInstance, match="Missing properties: 'x', 'y'"):
            interpret(self.SCHEMA, {"z": 1})

    def test_missing_check_runs_before_field_checks(self) -> None:
        # 'x' is wrong too, but the missing key is what gets reported.
        with pytest.raises(InvalidInstance, match="Missing properties: 'y'"):
            interpret(self.SCHEMA, {"x": 1})

    def test_field_mismatch(self) -> None:
        with pytest.raises(InvalidInstance, match="Expected a string") as exc_info:
            interpret(self.SCHEMA, {"x": 1, "y": 2})
        assert exc_info.value.value == 1

    def test_result_is_fresh_dict(self) -> None:
        value = {"x": "foo", "y": 42}
        result = interpret(self.SCHEMA, value)
        assert result == value
        assert result is not value

    def test_accepts_any_mapping(self) -> None:
        proxy = MappingProxyType({"x": "foo", "y": 1})
        assert interpret(self.SCHEMA, proxy) == {"x": "foo", "y": 1}
        assert type(interpret(self.SCHEMA, OrderedDict(x="a", y=2))) is dict

    def test_non_string_keys(self) -> None:
        assert interpret({1: str}, {1: "one", 2: "two"}) == {1: "one"}

    def test_empty_shape_accepts_any_mapping(self) -> None:
        assert interpret({}, {"anything": 1}) == {}

    @pytest.mark.parametrize("candidate", [x for x in FIXTURES if not isinstance(x, dict)])
    def test_rejects_non_objects(self, candidate: Any) -> None:
        with pytest.raises(InvalidInstance, match="Expected object"):
            interpret(self.SCHEMA, candidate)

    def test_nested_shapes(self) -> None:
        schema = {"user": {"name": str, "tags": [str]}}
        value = {"user": {"name": "ada", "tags": ["a", "b"], "age": 36}, "other": 1}
        assert interpret(schema, value) == {"user": {"name": "ada", "tags": ["a", "b"]}}


class TestArrayOf:
    def test_accepts_conformant_array(self) -> None:
        assert interpret([numbers.Number], [0, 42, -1, 10]) == [0, 42, -1, 10]

    def test_rejects_nonconformant_elements(self) -> None:
        with pytest.raises(InvalidInstance, match="Expected a number"):
            interpret([numbers.Number], ["foo", "bar"])

    def test_fails_fast_on_first_bad_element(self) -> None:
        with pytest.raises(InvalidInstance) as exc_info:
            interpret([numbers.Number], [1, "a", "b"])
        assert exc_info.value.value == "a"

    def test_empty_array(self) -> None:
        assert interpret([str], []) == []

    def test_tuple_becomes_list(self) -> None:
        assert interpret([str], ("a", "b")) == ["a", "b"]

    def test_result_is_fresh_list(self) -> None:
        value = ["a"]
        assert interpret([str], value) is not value

    @pytest.mark.parametrize("candidate", [x for x in FIXTURES if not isinstance(x, list)])
    def test_rejects_non_arrays(self, candidate: Any) -> None:
        with pytest.raises(InvalidInstance, match="Expected array"):
            interpret([numbers.Number], candidate)

    def test_array_of_objects(self) -> None:
        value = [{"id": 1, "junk": True}, {"id": 2}]
        assert interpret([{"id": numbers.Number}], value) == [{"id": 1}, {"id": 2}]


class TestCustomType:
    def test_existing_instance_returned_unchanged(self) -> None:
        point = Point()
        assert interpret(Point, point) is point

    @pytest.mark.parametrize("candidate", FIXTURES)
    def test_coerces_anything_else_via_constructor(self, candidate: Any) -> None:
        result = interpret(Point, candidate)
        assert isinstance(result, Point)
        assert result.value is candidate

    def test_constructor_failure_carries_message(self) -> None:
        class Strict:
            def __init__(self, value: Any) -> None:
                raise ValueError("not acceptable")

        with pytest.raises(InvalidInstance, match="not acceptable") as exc_info:
            interpret(Strict, "x")
        assert exc_info.value.reason == "not acceptable"
        assert exc_info.value.value == "x"

    def test_builtin_class_coerces(self) -> None:
        assert interpret(int, "42") == 42
        assert interpret([int], ["1", 2]) == [1, 2]

    def test_builtin_class_rejects_uncoercible(self) -> None:
        with pytest.raises(InvalidInstance, match="invalid literal"):
            interpret(int, "forty-two")

    def test_conversion_function(self) -> None:
        assert interpret(date.fromisoformat, "2024-01-02") == date(2024, 1, 2)

    def test_conversion_function_failure_is_unrecognized(self) -> None:
        with pytest.raises(InvalidInstance, match="Unrecognized value"):
            interpret(date.fromisoformat, "not a date")

    def test_conversion_result_must_be_target_instance(self) -> None:
        with pytest.raises(InvalidInstance, match="Unrecognized value"):
            interpret(_parse_amount_badly, "1.50")

    def test_annotated_conversion_function(self) -> None:
        assert interpret(_parse_amount, "$2.25") == Decimal("2.25")

    def test_already_converted_value_passes_through(self) -> None:
        amount = Decimal("4")
        assert interpret(_parse_amount, amount) is amount
        joined = date(2024, 1, 2)
        assert interpret(date.fromisoformat, joined) is joined

    def test_conversion_function_is_not_used_as_constructor(self) -> None:
        with pytest.raises(InvalidInstance, match="Unrecognized value"):
            interpret(date.fromisoformat, 20240102)


class TestResolveCustom:
    @staticmethod
    def _parse_money(value: Any) -> Decimal:
        return Decimal(value.strip("$"))

    def _node(self) -> CustomType:
        return CustomType(target=Decimal, convert=self._parse_money)

    def test_already_conforming(self) -> None:
        amount = Decimal("2")
        assert resolve_custom(self._node(), amount) == (Resolution.ALREADY_CONFORMING, amount)

    def test_converted_via_call(self) -> None:
        resolution, result = resolve_custom(self._node(), "$1.50")
        assert resolution is Resolution.CONVERTED_VIA_CALL
        assert result == Decimal("1.50")

    def test_converted_via_construction_after_failed_call(self) -> None:
        # int has no .strip(), so the conversion fails quietly.
        resolution, result = resolve_custom(self._node(), 3)
        assert resolution is Resolution.CONVERTED_VIA_CONSTRUCTION
        assert result == Decimal(3)

    def test_call_result_of_wrong_type_falls_through(self) -> None:
        node = CustomType(target=Point, convert=lambda v: "not a point")
        resolution, result = resolve_custom(node, 7)
        assert resolution is Resolution.CONVERTED_VIA_CONSTRUCTION
        assert isinstance(result, Point)

    def test_unrecognized(self) -> None:
        node = CustomType(target=Decimal, convert=lambda v: None, construct=False)
        with pytest.raises(InvalidInstance, match="Unrecognized value"):
            resolve_custom(node, "x")

    def test_call_not_retried_after_success(self) -> None:
        calls: list[Any] = []

        def convert(value: Any) -> Point:
            calls.append(value)
            return Point(value)

        resolution, _ = resolve_custom(CustomType(target=Point, convert=convert), 1)
        assert resolution is Resolution.CONVERTED_VIA_CALL
        assert calls == [1]


class TestInvalidSchema:
    class Custom:
        pass

    @pytest.mark.parametrize(
        "schema",
        [Custom(), "foo", 42, [str, str], [], (str,), {"x": Custom()}, [Custom()]],
        ids=["object", "str-literal", "int-literal", "two-element", "empty-list", "tuple",
             "nested-field", "nested-element"],
    )
    def test_raises_invalid_schema(self, schema: Any) -> None:
        with pytest.raises(InvalidSchema, match="Invalid schema"):
            interpret(schema, "anything")

    def test_unannotated_conversion_function(self) -> None:
        with pytest.raises(InvalidSchema, match="has no target type"):
            interpret(lambda v: v, "x")

    def test_parameterized_generic(self) -> None:
        with pytest.raises(InvalidSchema):
            interpret(list[int], [1])

    def test_protocol_without_runtime_check(self) -> None:
        class Sized(Protocol):
            def size(self) -> int: ...

        with pytest.raises(InvalidSchema, match="cannot check instances"):
            interpret(Sized, 1)

    def test_runtime_checkable_protocol_is_fine(self) -> None:
        @runtime_checkable
        class Named(Protocol):
            name: str

        thing = Point()
        thing.name = "p"  # type: ignore[attr-defined]
        assert interpret(Named, thing) is thing

    def test_invalid_schema_is_not_invalid_instance(self) -> None:
        with pytest.raises(InvalidSchema) as exc_info:
            interpret(self.Custom(), None)
        assert not isinstance(exc_info.value, InvalidInstance)


class TestIdempotence:
    @pytest.mark.parametrize(
        "schema,value",
        [
            (ABSENT, ABSENT),
            (None, None),
            (str, "foo"),
            (numbers.Number, 42),
            ({"x": str, "y": numbers.Number}, {"x": "foo", "y": 42, "z": 0}),
            ([numbers.Number], [0, 42, -1, 10]),
            ({"points": [Point]}, {"points": [1, 2]}),
            ({"joined": date.fromisoformat}, {"joined": "2024-01-02"}),
            ([_parse_amount], ["$1.50", "3"]),
        ],
        ids=["absent", "null", "string", "number", "object", "array", "custom", "conversion",
             "annotated-conversion"],
    )
    def test_reinterpreting_is_stable(self, schema: Any, value: Any) -> None:
        once = interpret(schema, value)
        twice = interpret(schema, once)
        if isinstance(once, dict) and "points" in once:
            assert twice["points"][0] is once["points"][0]
        else:
            assert twice == once
