from dataclasses import dataclass
from typing import NotRequired, TypedDict

import pytest
from hypothesis import given
from hypothesis import strategies as st

from exhaustive_mapper import MissingContextError, ObjectMapper, OmitProperty, Schema, map_from


_SCALARS = st.none() | st.booleans() | st.integers() | st.text(max_size=20)


class Input(TypedDict):
    in_string: str
    in_string_nullable: str | None
    in_string_optional: NotRequired[str]


class Output(TypedDict):
    out_string: str
    out_string_constant: str
    out_string_nullable: str | None
    out_string_optional: NotRequired[str]


@dataclass
class Capitalize:
    capitalize: bool


def test_concrete_field_reference_drops_unreferenced_fields() -> None:
    mapper = ObjectMapper({"out1": "in1"})
    assert mapper.map({"in1": "hello", "in2": 123}) == {"out1": "hello"}


def test_concrete_transform() -> None:
    mapper = ObjectMapper({"out1": lambda source: source["in1"].upper()})
    assert mapper.map({"in1": "hello"}) == {"out1": "HELLO"}


def test_concrete_omit_leaves_key_out() -> None:
    class Optional1(TypedDict):
        out1: NotRequired[str]

    result = ObjectMapper(Schema({"out1": map_from.omit}, output=Optional1)).map({"in1": "hello"})

    assert result == {}
    assert result is not None
    assert "out1" not in result


def test_concrete_array() -> None:
    mapper = ObjectMapper({"outV": "inV"})
    assert mapper.array([{"inV": 1}, {"inV": 2}]) == [{"outV": 1}, {"outV": 2}]


def test_maps_field_references_including_null_and_missing_values() -> None:
    mapper = ObjectMapper(
        Schema(
            {
                "out_string": "in_string",
                "out_string_constant": map_from.constant("some constant"),
                "out_string_nullable": "in_string_nullable",
                "out_string_optional": "in_string_optional",
            },
            output=Output,
            input=Input,
        )
    )
    source: Input = {"in_string": "a", "in_string_nullable": None}

    result = mapper.map(source)

    assert result == {
        "out_string": "a",
        "out_string_constant": "some constant",
        "out_string_nullable": None,
        "out_string_optional": None,
    }
    assert result is not None
    assert "out_string_optional" in result


def test_reads_attributes_of_plain_objects() -> None:
    @dataclass
    class Person:
        name: str
        age: int

    mapper = ObjectMapper({"label": "name", "years": "age"})

    assert mapper.map(Person(name="alice", age=30)) == {"label": "alice", "years": 30}
    with pytest.raises(AttributeError):
        _ = ObjectMapper({"label": "nickname"}).map(Person(name="alice", age=30))


def test_output_keys_follow_declaration_order() -> None:
    mapper = ObjectMapper({"z": "a", "a": "b", "m": lambda source: source["c"]})

    result = mapper.map({"c": 3, "b": 2, "a": 1})

    assert result is not None
    assert list(result) == ["z", "a", "m"]


def test_transform_receives_input_and_context() -> None:
    seen: list[tuple[object, object]] = []

    def record(source: object, context: object) -> str:
        seen.append((source, context))
        return "ok"

    context = Capitalize(capitalize=True)
    source = {"x": 1}
    mapper = ObjectMapper(Schema({"out": record}, context=Capitalize))

    assert mapper.map(source, context) == {"out": "ok"}
    assert seen == [(source, context)]
    assert seen[0][1] is context


def test_transform_without_context_gets_none() -> None:
    mapper = ObjectMapper({"out": lambda _source, context: context})
    assert mapper.map({}) == {"out": None}


def test_builtin_types_work_as_transforms() -> None:
    assert ObjectMapper({"label": str}).map(5) == {"label": "5"}
    assert ObjectMapper({"n": int}).map("7") == {"n": 7}


def test_default_bound_parameters_survive_a_missing_context() -> None:
    mapper = ObjectMapper({f"f{i}": (lambda source, i=i: source[i]) for i in range(2)})

    assert mapper.map([10, 20]) == {"f0": 10, "f1": 20}


def test_optional_context_parameter_receives_a_given_context() -> None:
    mapper = ObjectMapper({"out": lambda _source, context="default": context})

    assert mapper.map({}) == {"out": "default"}
    assert mapper.map({}, "given") == {"out": "given"}


def test_transforms_are_called_on_every_map() -> None:
    calls: list[int] = []

    def counter() -> int:
        calls.append(1)
        return len(calls)

    mapper = ObjectMapper({"n": counter})

    assert mapper.array([{}, {}, {}]) == [{"n": 1}, {"n": 2}, {"n": 3}]


def test_map_with_context() -> None:
    mapper = ObjectMapper(
        Schema(
            {"out": lambda source, context: source["in"].upper() if context.capitalize else source["in"]},
            context=Capitalize,
        )
    )

    assert mapper.map({"in": "abc"}, Capitalize(capitalize=True)) == {"out": "ABC"}
    assert mapper.map({"in": "abc"}, Capitalize(capitalize=False)) == {"out": "abc"}


def test_missing_context_raises() -> None:
    mapper = ObjectMapper(Schema({"out": lambda _source, context: context.capitalize}, context=Capitalize))

    with pytest.raises(MissingContextError, match="requires a Capitalize context"):
        _ = mapper.map({"in": "abc"})
    with pytest.raises(MissingContextError):
        _ = mapper.map({"in": "abc"}, None)
    with pytest.raises(MissingContextError):
        _ = mapper.array([{"in": "abc"}])
    with pytest.raises(MissingContextError):
        _ = mapper.map(None)

    assert mapper.map({"in": "abc"}, Capitalize(capitalize=True)) == {"out": True}


def test_none_input_passes_through() -> None:
    mapper = ObjectMapper({"out": lambda source: source["in"]})

    assert mapper.map(None) is None
    assert mapper.array(None) is None


def test_array_accepts_any_finite_iterable() -> None:
    mapper = ObjectMapper({"value": lambda source: source * 2})

    assert mapper.array(n for n in range(3)) == [{"value": 0}, {"value": 2}, {"value": 4}]
    assert mapper.array(()) == []


def test_transform_errors_propagate_unchanged() -> None:
    failure = LookupError("boom")

    def explode(_source: object) -> None:
        raise failure

    mapper = ObjectMapper({"ok": "a", "bad": explode})

    with pytest.raises(LookupError) as excinfo:
        _ = mapper.map({"a": 1})
    assert excinfo.value is failure


def test_rejects_coroutine_transforms() -> None:
    async def fetch(_source: object) -> int:
        return 1

    with pytest.raises(TypeError, match="use AsyncObjectMapper"):
        _ = ObjectMapper({"value": fetch})


def test_to_function_exposes_schema_and_maps() -> None:
    schema = Schema({"out": lambda source: source["in"] + 1})
    mapper = ObjectMapper(schema)
    function = mapper.to_function()

    assert function({"in": 1}) == {"out": 2}
    assert function({"in": 1}, None) == {"out": 2}
    assert function(None) is None
    assert function.schema is schema
    assert mapper.schema is schema


def test_to_function_composes_as_a_transform() -> None:
    inner = ObjectMapper({"value": "raw"}).to_function()
    outer = ObjectMapper({"wrapped": inner, "same": "raw"})

    assert outer.map({"raw": 7}) == {"wrapped": {"value": 7}, "same": 7}


def test_repr_names_mapper_and_schema() -> None:
    assert repr(ObjectMapper({"a": "b"})) == "ObjectMapper(Schema(dict: a))"


def test_rejects_non_mapping_schema() -> None:
    with pytest.raises(TypeError, match="expected a Schema or a mapping of rules"):
        _ = ObjectMapper(["a"])  # type: ignore[arg-type]


@given(value=_SCALARS)
def test_field_reference_fidelity_property(value: object) -> None:
    result = ObjectMapper({"out": "in"}).map({"in": value, "other": 1})
    assert result == {"out": value}


@given(omitted=st.lists(st.booleans(), min_size=1, max_size=8))
def test_sentinel_omission_property(omitted: list[bool]) -> None:
    rules = {
        f"f{index}": (map_from.omit if drop else map_from.constant(index)) for index, drop in enumerate(omitted)
    }

    result = ObjectMapper(rules).map({})

    assert result is not None
    assert set(result) == {f"f{index}" for index, drop in enumerate(omitted) if not drop}
    assert OmitProperty not in result.values()


@given(rules=st.dictionaries(st.text(min_size=1, max_size=8), st.text(min_size=1, max_size=8), max_size=6))
def test_pass_through_property(rules: dict[str, str]) -> None:
    mapper = ObjectMapper(rules)
    assert mapper.map(None) is None
    assert mapper.array(None) is None
