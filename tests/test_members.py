from typing import overload

import pytest

from tessera.members import CONSTRUCTOR, TypeDescriptor, find_constructor, find_method


class Animal:
    pass


class Dog(Animal):
    pass


class Greeter:
    @overload
    def __init__(self) -> None: ...

    @overload
    def __init__(self, greeting: str) -> None: ...

    @overload
    def __init__(self, greeting: str, times: int) -> None: ...

    def __init__(self, greeting="Hello", times=1):
        self.greeting = greeting
        self.times = times

    def greet(self, name: str) -> str:
        return f"{self.greeting}, {name}" * self.times

    @overload
    def repeat(self, text: str) -> str: ...

    @overload
    def repeat(self, text: str, count: int) -> str: ...

    def repeat(self, text, count=2):
        return text * count

    @staticmethod
    def shout(text: str) -> str:
        return text.upper()

    @classmethod
    def named(cls, greeting: str) -> "Greeter":
        return cls(greeting)

    def _hidden(self) -> None:
        pass


class LoudGreeter(Greeter):
    def whisper(self, text: str) -> str:
        return text.lower()


class Plain:
    pass


class Kennel:
    def __init__(self, animal: Animal):
        self.animal = animal


class Ambiguous:
    @overload
    def __init__(self, animal: Animal) -> None: ...

    @overload
    def __init__(self, dog: Dog) -> None: ...

    def __init__(self, animal):
        self.animal = animal


class Summer:
    def add(self, *values: int) -> int:
        return sum(values)

    def configure(self, *, verbose: bool) -> None:
        pass


def test_constructor_overloads_are_candidates():
    assert find_constructor(Greeter, []).parameter_types == ()
    assert find_constructor(Greeter, [str]).parameter_types == (str,)
    assert find_constructor(Greeter, [str, int]).parameter_types == (str, int)


def test_constructor_descriptor_identity():
    constructor = find_constructor(Greeter, [str])

    assert constructor.owner is Greeter
    assert constructor.name == CONSTRUCTOR
    assert constructor.is_constructor


def test_constructor_not_found_is_none():
    assert find_constructor(Greeter, [int]) is None
    assert find_constructor(Greeter, [str, int, int]) is None


def test_resolution_is_stable_across_calls():
    assert find_constructor(Greeter, [str]) == find_constructor(Greeter, [str])


def test_constructor_accepts_subtypes_of_parameter_types():
    assert find_constructor(Kennel, [Dog]).parameter_types == (Animal,)
    assert find_constructor(Kennel, [int]) is None


def test_first_declared_overload_wins_when_several_match():
    assert find_constructor(Ambiguous, [Dog]).parameter_types == (Animal,)


def test_class_without_initializer_has_zero_argument_constructor():
    assert find_constructor(Plain, []) is not None
    assert find_constructor(Plain, [int]) is None


def test_subclass_is_constructed_with_inherited_initializer():
    assert find_constructor(LoudGreeter, [str]).owner is Greeter


def test_method_overloads_are_candidates():
    assert find_method(Greeter, "repeat", [str]).parameter_types == (str,)
    assert find_method(Greeter, "repeat", [str, int]).parameter_types == (str, int)
    assert find_method(Greeter, "greet", [str]).function is Greeter.greet


def test_static_and_class_methods_are_resolved():
    assert find_method(Greeter, "shout", [str]).parameter_types == (str,)
    assert find_method(Greeter, "named", [str]).parameter_types == (str,)


def test_method_not_found_is_none():
    assert find_method(Greeter, "greet", [int]) is None
    assert find_method(Greeter, "missing", []) is None
    assert find_method(Greeter, "_hidden", []) is None


def test_inherited_methods_are_not_searched_by_default():
    assert find_method(LoudGreeter, "greet", [str]) is None
    assert find_method(LoudGreeter, "whisper", [str]) is not None


def test_inherited_methods_are_searched_on_request():
    method = find_method(LoudGreeter, "greet", [str], inherited=True)

    assert method.owner is Greeter


def test_inherited_method_search_can_be_enabled_by_setting(monkeypatch):
    monkeypatch.setenv("TESSERA_SEARCH_INHERITED_METHODS", "true")

    assert find_method(LoudGreeter, "greet", [str]) is not None


def test_variadic_parameters_accept_any_number_of_matching_arguments():
    assert find_method(Summer, "add", []) is not None
    assert find_method(Summer, "add", [int, int, int]) is not None
    assert find_method(Summer, "add", [int, str]) is None


def test_required_keyword_only_parameters_cannot_be_resolved_positionally():
    assert find_method(Summer, "configure", []) is None


def test_type_descriptor_exposes_hierarchy_and_namespace():
    descriptor = TypeDescriptor(LoudGreeter)

    assert descriptor.superclass is Greeter
    assert descriptor.interfaces == []
    assert descriptor.namespace == __name__
    assert [m.name for m in descriptor.methods("whisper")] == ["whisper"]
    assert descriptor.methods("greet") == []
    assert len(descriptor.constructors()) == 3


@pytest.mark.parametrize("error_kind", [ValueError, KeyError, RuntimeError])
def test_builtin_exception_constructors_accept_a_message(error_kind):
    assert find_constructor(error_kind, [str]) is not None
