import json
from dataclasses import dataclass

import pytest

from tessera.annotations import Annotation, annotate, declared_annotations, find_annotation


@dataclass(frozen=True)
class Route(Annotation):
    path: str


@dataclass(frozen=True)
class Secured(Annotation):
    role: str = "admin"


@Route("/base")
class BaseScreen:
    pass


class HomeScreen(BaseScreen):
    pass


@Route("/settings")
class SettingsScreen(BaseScreen):
    pass


@Secured()
class Auditable:
    pass


class AdminScreen(HomeScreen, Auditable):
    pass


@Route("/multi")
@Secured("editor")
class MultiScreen:
    pass


def test_finds_annotation_declared_on_the_class():
    assert find_annotation(BaseScreen, Route) == Route("/base")


def test_does_not_search_hierarchy_unless_asked():
    assert find_annotation(HomeScreen, Route) is None


def test_finds_annotation_on_superclass():
    assert find_annotation(HomeScreen, Route, True, []) == Route("/base")


def test_own_annotation_takes_precedence_over_superclass():
    assert find_annotation(SettingsScreen, Route, True, []) == Route("/settings")


def test_finds_annotation_on_interface():
    assert find_annotation(AdminScreen, Secured, True, []) == Secured()
    assert find_annotation(AdminScreen, Route, True, []) == Route("/base")


def test_returns_none_when_no_class_in_hierarchy_is_annotated():
    assert find_annotation(HomeScreen, Secured, True, []) is None


@pytest.mark.parametrize("search_hierarchy", [True, False])
def test_classes_in_skipped_namespaces_are_never_examined(search_hierarchy):
    assert find_annotation(BaseScreen, Route, search_hierarchy, [__name__]) is None
    assert find_annotation(HomeScreen, Route, search_hierarchy, [__name__]) is None


def test_default_skipped_namespaces_come_from_settings(monkeypatch):
    assert find_annotation(BaseScreen, Route) == Route("/base")

    monkeypatch.setenv("TESSERA_SKIP_NAMESPACES", json.dumps([__name__]))

    assert find_annotation(BaseScreen, Route) is None


def test_declared_annotations_are_in_attachment_order():
    assert declared_annotations(MultiScreen) == (Secured("editor"), Route("/multi"))


def test_declared_annotations_are_not_inherited():
    assert declared_annotations(HomeScreen) == ()


def test_annotate_attaches_records_explicitly():
    class Screen:
        pass

    annotate(Screen, Route("/explicit"))

    assert find_annotation(Screen, Route) == Route("/explicit")


def test_annotate_rejects_non_annotations():
    class Screen:
        pass

    with pytest.raises(TypeError, match="is not an Annotation"):
        annotate(Screen, "not an annotation")


@Route("/interface")
class Linkable:
    pass


@Route("/root")
class Node:
    pass


class Navigable(Node):
    pass


class LinkedScreen(BaseScreen, Linkable):
    pass


def test_superclass_chain_is_searched_before_interfaces():
    assert find_annotation(LinkedScreen, Route, True, []) == Route("/base")


def test_interfaces_are_checked_without_their_own_hierarchy():
    class Plain:
        pass

    class Screen(Plain, Navigable):
        pass

    assert find_annotation(Screen, Route, True, []) is None


def test_default_skipped_namespaces_do_not_cover_similarly_named_packages():
    @Route("/models")
    class Model:
        pass

    Model.__module__ = "abcorp.models"

    assert find_annotation(Model, Route) == Route("/models")
