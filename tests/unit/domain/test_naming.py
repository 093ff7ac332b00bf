"""Unit tests for override-slot naming and overload disambiguation."""

from __future__ import annotations

import itertools

import pytest

from mocked.core.models import MethodMember, Parameter, PropertyMember
from mocked.domain.errors import OverrideSlotCollisionError
from mocked.domain.extraction import extract_interface
from mocked.domain.naming import closure_signature, disambiguate, upper_first
from tests.fakes import example_protocol_node, some_parameter_node

pytestmark = pytest.mark.unit


def _method(name: str, *params: Parameter, **kwargs: object) -> MethodMember:
    return MethodMember(name=name, parameters=params, **kwargs)  # type: ignore[arg-type]


class TestSlotIdentifiers:
    """Slot identifier composition."""

    def test_overload_set(self) -> None:
        methods = extract_interface(some_parameter_node()).methods
        slots = disambiguate(methods)

        assert [s.slot_id for s in slots] == [
            "someMethod",
            "someMethodParameter",
            "someMethodWith",
            "someOtherMethodThrows",
            "someOtherMethodAsyncThrows",
            "someAsyncMethodAsync",
            "someOptionalMethod",
        ]

    def test_field_names_insert_override(self) -> None:
        methods = extract_interface(some_parameter_node()).methods
        fields = [s.field_name for s in disambiguate(methods)]

        assert fields[:3] == [
            "someMethodOverride",
            "someMethodOverrideParameter",
            "someMethodOverrideWith",
        ]
        assert fields[4] == "someOtherMethodOverrideAsyncThrows"

    def test_only_first_character_is_upper_cased(self) -> None:
        methods = extract_interface(example_protocol_node()).methods
        slots = {s.method.name: s.slot_id for s in disambiguate(methods)}

        assert slots["fetchItem"] == "fetchItemAsyncThrowsWithID"
        assert slots["saveItem"] == "saveItemThrowsItem"
        assert slots["processAllItems"] == "processAllItemsAsync"

    def test_unlabeled_parameter_uses_binding_name(self) -> None:
        method = _method("save", Parameter(label="_", name="item", type="Item"))
        assert disambiguate([method])[0].slot_id == "saveItem"

    def test_labels_concatenate_in_order(self) -> None:
        method = _method(
            "move",
            Parameter(label="from", name="source", type="Int"),
            Parameter(label="to", name="destination", type="Int"),
        )
        assert disambiguate([method])[0].slot_id == "moveFromTo"

    def test_upper_first(self) -> None:
        assert upper_first("withID") == "WithID"
        assert upper_first("") == ""


class TestOverloadDisambiguation:
    """Distinct overloads always receive distinct slots."""

    def test_every_label_arity_and_effect_combination_is_distinct(self) -> None:
        parameter_lists = [
            (),
            (Parameter(None, "value", "Int"),),
            (Parameter("with", "value", "Int"),),
            (Parameter("_", "value", "Int"),),
            (Parameter(None, "value", "Int"), Parameter(None, "other", "Int")),
        ]
        methods = [
            _method("call", *params, is_async=is_async, can_fail=can_fail)
            for params, is_async, can_fail in itertools.product(
                parameter_lists, (False, True), (False, True)
            )
        ]

        slot_ids = [s.slot_id for s in disambiguate(methods)]

        assert len(set(slot_ids)) == len(methods)

    def test_type_only_overloads_are_qualified(self) -> None:
        methods = [
            _method("process", Parameter(None, "value", "Int")),
            _method("process", Parameter(None, "value", "String")),
            _method("reset"),
        ]

        slot_ids = [s.slot_id for s in disambiguate(methods)]

        assert slot_ids == [
            "processValueIntToVoid",
            "processValueStringToVoid",
            "reset",
        ]

    def test_labeled_and_unlabeled_parameter_of_same_name(self) -> None:
        methods = [
            _method("store", Parameter(None, "value", "Int")),
            _method("store", Parameter("_", "value", "Int")),
        ]
        assert [s.slot_id for s in disambiguate(methods)] == [
            "storeValueIntToVoid",
            "storeValuePositionalIntToVoid",
        ]

    def test_return_only_overloads_are_qualified(self) -> None:
        methods = [
            _method("make", return_type="Int"),
            _method("make", return_type="[String]?"),
        ]
        assert [s.slot_id for s in disambiguate(methods)] == [
            "makeToInt",
            "makeToStringOptional",
        ]

    def test_duplicate_declaration_collides(self) -> None:
        first = _method("greet")
        second = _method("greet")

        with pytest.raises(OverrideSlotCollisionError) as exc:
            disambiguate([first, second])

        assert exc.value.slot_id == "greetToVoid"
        assert exc.value.first is first
        assert exc.value.second is second
        assert "func greet() -> Void" in str(exc.value)

    def test_qualified_slot_colliding_with_other_method(self) -> None:
        methods = [
            _method("f", Parameter(None, "x", "Int")),
            _method("f", Parameter(None, "x", "String")),
            _method("fXIntToVoid"),
        ]
        with pytest.raises(OverrideSlotCollisionError, match="fXIntToVoid"):
            disambiguate(methods)

    def test_no_state_shared_between_calls(self) -> None:
        method = _method("greet")
        assert disambiguate([method])[0].slot_id == "greet"
        assert disambiguate([method])[0].slot_id == "greet"


class TestPropertyNames:
    """Slots never reuse a property name, which is also an initializer parameter."""

    def test_slot_matching_property_is_qualified(self) -> None:
        properties = [PropertyMember("loadAsync", "Int")]
        methods = [_method("load", is_async=True), _method("reset")]

        slots = disambiguate(methods, properties)

        assert [s.slot_id for s in slots] == ["loadAsyncToVoid", "reset"]
        assert slots[0].field_name == "loadOverrideAsyncToVoid"

    def test_field_matching_property_is_qualified(self) -> None:
        properties = [PropertyMember("greetOverride", "String")]
        slots = disambiguate([_method("greet", return_type="String")], properties)

        assert slots[0].slot_id == "greetToString"
        assert slots[0].field_name == "greetOverrideToString"

    def test_only_the_shadowing_overload_is_qualified(self) -> None:
        properties = [PropertyMember("process", "Int")]
        methods = [
            _method("process", Parameter(None, "value", "Int")),
            _method("process"),
        ]

        assert [s.slot_id for s in disambiguate(methods, properties)] == [
            "processValue",
            "processToVoid",
        ]

    def test_unresolvable_collision_names_the_property(self) -> None:
        taken = PropertyMember("loadAsyncToVoid", "Int", mutable=False)
        properties = [PropertyMember("loadAsync", "Int"), taken]
        method = _method("load", is_async=True)

        with pytest.raises(OverrideSlotCollisionError) as exc:
            disambiguate([method], properties)

        assert exc.value.slot_id == "loadAsyncToVoid"
        assert exc.value.first is taken
        assert exc.value.second is method
        assert "var loadAsyncToVoid: Int { get }" in str(exc.value)

    def test_unrelated_properties_change_nothing(self) -> None:
        properties = [PropertyMember("title", "String")]
        assert disambiguate([_method("greet")], properties)[0].slot_id == "greet"


class TestClosureSignature:
    """Closure type strings used in fields and fallback messages."""

    def test_plain(self) -> None:
        assert closure_signature(_method("greet")) == "(() -> Void)?"

    def test_concurrency_safe_with_effects(self) -> None:
        method = _method(
            "fetchItem",
            Parameter("withID", "id", "Int"),
            return_type="ItemType",
            is_async=True,
            can_fail=True,
            concurrency_safe=True,
        )
        assert (
            closure_signature(method)
            == "(@Sendable (_ withID: Int) async throws -> ItemType)?"
        )

    @pytest.mark.parametrize(
        ("is_async", "can_fail", "expected"),
        [
            (False, True, "(() throws -> String)?"),
            (True, False, "(() async -> String)?"),
            (True, True, "(() async throws -> String)?"),
        ],
    )
    def test_effect_spelling(self, is_async: bool, can_fail: bool, expected: str) -> None:
        method = _method("load", return_type="String", is_async=is_async, can_fail=can_fail)
        assert closure_signature(method) == expected

    def test_optional_return(self) -> None:
        method = _method("optionalItem", return_type="ItemType?")
        assert closure_signature(method) == "(() -> ItemType?)?"

    def test_multiple_parameters_are_labelless(self) -> None:
        method = _method(
            "move",
            Parameter("from", "source", "Int"),
            Parameter("_", "count", "Int"),
        )
        assert closure_signature(method) == "((_ from: Int, _ count: Int) -> Void)?"
