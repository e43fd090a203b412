import ctypes
from typing import Any, Generic, Optional, TypeVar

import pytest

from tessera.type_utils import (
    classify,
    declared_interfaces,
    generic_parameter_type,
    interface_closure,
    is_assignable,
    is_boxed,
    is_in_namespaces,
    super_types,
    superclass_of,
    unbox,
)

T = TypeVar("T")


class Animal:
    pass


class Dog(Animal):
    pass


class Swimmer:
    pass


class Walker:
    pass


class Labrador(Dog, Swimmer, Walker):
    pass


class Puppy(Labrador, Walker):
    pass


class Box(Generic[T]):
    pass


class IntBox(Box[int]):
    pass


class LabeledIntBox(IntBox):
    pass


@pytest.mark.parametrize(
    "boxed, primitive",
    [
        (ctypes.c_bool(True), True),
        (ctypes.c_byte(1), 1),
        (ctypes.c_char(b"x"), b"x"),
        (ctypes.c_short(2), 2),
        (ctypes.c_int(3), 3),
        (ctypes.c_long(4), 4),
        (ctypes.c_longlong(5), 5),
        (ctypes.c_float(1.5), 1.5),
        (ctypes.c_double(2.5), 2.5),
    ],
)
def test_boxed_primitive_classifies_as_its_primitive(boxed, primitive):
    assert classify(boxed) is classify(primitive)


def test_unrecognised_wrapper_classifies_as_none_type():
    assert classify(ctypes.c_char_p(b"text")) is type(None)


def test_other_values_classify_as_their_own_type():
    assert classify(Dog()) is Dog
    assert classify("text") is str


def test_classifying_none_raises():
    with pytest.raises(TypeError, match="Cannot classify None"):
        classify(None)


def test_unbox_returns_payload_of_boxed_primitive():
    assert is_boxed(ctypes.c_int(3))
    assert unbox(ctypes.c_int(3)) == 3
    assert unbox("text") == "text"


@pytest.mark.parametrize(
    "formal, actual, expected",
    [
        (Animal, Dog, True),
        (Dog, Animal, False),
        (object, Dog, True),
        (Any, int, True),
        (Optional[Dog], Dog, True),
        (Optional[Dog], type(None), True),
        (Dog | Swimmer, Labrador, True),
        (Dog | Swimmer, Animal, False),
        (list[int], list, True),
        (int, bool, True),
        (float, int, False),
        (T, str, True),
    ],
)
def test_is_assignable(formal, actual, expected):
    assert is_assignable(formal, actual) is expected


def test_superclass_is_primary_base_and_interfaces_are_the_rest():
    assert superclass_of(Labrador) is Dog
    assert declared_interfaces(Labrador) == [Swimmer, Walker]
    assert superclass_of(object) is None


def test_super_types_are_listed_nearest_first():
    assert super_types(Puppy) == [Labrador, Dog, Animal, object]
    assert super_types(object) == []


def test_interface_closure_walks_superclass_chain_without_duplicates():
    assert interface_closure(Puppy) == [Walker, Swimmer]
    assert interface_closure(Dog) == []


def test_namespace_membership_is_matched_by_dotted_prefix():
    class Model:
        pass

    Model.__module__ = "abcorp.models"

    assert is_in_namespaces(Dog, [__name__])
    assert is_in_namespaces(Model, ["abcorp"])
    assert is_in_namespaces(Model, ["abcorp.models"])
    assert not is_in_namespaces(Model, ["abc"])
    assert not is_in_namespaces(Model, ["abcorp.mod"])
    assert not is_in_namespaces(Dog, [__name__[:4]])
    assert not is_in_namespaces(Dog, ["somewhere.else"])
    assert not is_in_namespaces(Dog, [])
    assert not is_in_namespaces(Dog, None)


def test_generic_parameter_type_is_read_from_parameterised_base():
    assert generic_parameter_type(IntBox(), 0) is int
    assert generic_parameter_type(LabeledIntBox(), 0) is int


def test_generic_parameter_type_is_none_when_unbound():
    assert generic_parameter_type(Box(), 0) is None
    assert generic_parameter_type(IntBox(), 1) is None
    assert generic_parameter_type(Dog(), 0) is None
