"""Constructor and method resolution by assignability.

Members are described by :class:`MemberDescriptor` records, built by
introspection each time a :class:`TypeDescriptor` is queried. A class exposes
several constructors or several overloads of a method by declaring them with
``typing.overload``; each overload becomes one candidate, in declaration order.
Without overloads the implementation's own signature is the only candidate.

Resolution picks the first candidate whose positional parameters accept the
given argument types (see :func:`tessera.type_utils.is_assignable`).
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, get_overloads, get_type_hints

from tessera.settings import get_settings
from tessera.type_utils import declared_interfaces, is_assignable, superclass_of

__all__ = [
    "CONSTRUCTOR",
    "MemberDescriptor",
    "TypeDescriptor",
    "find_constructor",
    "find_method",
]

logger = logging.getLogger(__name__)

CONSTRUCTOR = "__init__"
"""Member name used for constructor descriptors."""


@dataclass(frozen=True)
class MemberDescriptor:
    """Describes one callable signature of a constructor or method.

    Attributes:
        owner: The class declaring the member.
        name: The member name; ``"__init__"`` for constructors.
        parameter_types: Declared types of the positional parameters, in order.
            Unannotated parameters are recorded as ``object``.
        required_count: How many leading positional parameters have no default.
        variadic_type: Element type of ``*args`` if the member declares it, else None.
        function: The underlying function (an overload stub or the implementation).
    """

    owner: type
    name: str
    parameter_types: tuple[Any, ...]
    required_count: int
    variadic_type: Optional[Any]
    function: Callable

    @property
    def is_constructor(self) -> bool:
        return self.name == CONSTRUCTOR

    def accepts(self, argument_types: Sequence[type]) -> bool:
        """Check whether arguments of the given types bind to this member positionally.

        Args:
            argument_types: Classified types of the actual arguments, in order.

        Returns:
            True if the argument count fits the member's positional parameters and
            every parameter type is assignable from the corresponding argument type.
        """
        count = len(argument_types)
        positional_count = len(self.parameter_types)
        if count < self.required_count:
            return False
        if count > positional_count and self.variadic_type is None:
            return False

        formal_types = list(self.parameter_types[:count])
        formal_types += [self.variadic_type] * (count - len(formal_types))
        return all(
            is_assignable(formal, actual)
            for formal, actual in zip(formal_types, argument_types)
        )


@dataclass(frozen=True)
class TypeDescriptor:
    """Read-only view of a class's shape, as seen by the resolver.

    Every query introspects the class afresh; nothing is cached.

    Example:
        >>> descriptor = TypeDescriptor(Greeter)
        >>> [m.parameter_types for m in descriptor.constructors()]
        >>> descriptor.methods("greet")
    """

    type: type

    @property
    def namespace(self) -> str:
        return self.type.__module__

    @property
    def superclass(self) -> Optional[type]:
        return superclass_of(self.type)

    @property
    def interfaces(self) -> list[type]:
        return declared_interfaces(self.type)

    def constructors(self) -> list[MemberDescriptor]:
        """Describe the constructors Python would run to instantiate the class.

        The effective initializer is the first ``__init__`` along the MRO. A class
        that only inherits ``object.__init__`` is described by its custom
        ``__new__`` if it has one, otherwise by a single zero-argument constructor.
        """
        owner, initializer = _effective_member(self.type, "__init__")
        if owner is object:
            owner, initializer = _effective_member(self.type, "__new__")
            if owner is object:
                return [MemberDescriptor(self.type, CONSTRUCTOR, (), 0, None, object.__init__)]
            initializer = _unwrap(initializer)
        return _describe_all(owner, CONSTRUCTOR, initializer, skip_first=True)

    def methods(self, name: str, inherited: bool = False) -> list[MemberDescriptor]:
        """Describe the public methods with the given name.

        Args:
            name: The method name. Names starting with an underscore are never public.
            inherited: If False (the default), only methods declared in the class's
                own namespace are considered. If True, the first declaration found
                along the MRO is used.

        Returns:
            The method's candidate signatures, or an empty list if there is none.
        """
        if name.startswith("_"):
            return []

        if inherited:
            owner, member = _effective_member(self.type, name)
        else:
            owner, member = self.type, vars(self.type).get(name)

        if member is None:
            return []
        if isinstance(member, staticmethod):
            return _describe_all(owner, name, member.__func__, skip_first=False)
        if isinstance(member, classmethod):
            return _describe_all(owner, name, member.__func__, skip_first=True)
        if inspect.isfunction(member):
            return _describe_all(owner, name, member, skip_first=True)
        return []


def find_constructor(
    cls: type, argument_types: Sequence[type]
) -> Optional[MemberDescriptor]:
    """Find the first constructor of a class accepting the given argument types.

    Args:
        cls: The class to construct.
        argument_types: Classified types of the constructor arguments.

    Returns:
        The matching constructor, or None if no candidate accepts the arguments.
    """
    for constructor in TypeDescriptor(cls).constructors():
        if constructor.accepts(argument_types):
            logger.debug("Resolved constructor of %s for %s", cls.__qualname__, argument_types)
            return constructor

    logger.debug("No constructor of %s accepts %s", cls.__qualname__, argument_types)
    return None


def find_method(
    target_type: type,
    name: str,
    argument_types: Sequence[type],
    inherited: Optional[bool] = None,
) -> Optional[MemberDescriptor]:
    """Find the first public method with the given name accepting the argument types.

    Args:
        target_type: The class whose methods are searched.
        name: The method name.
        argument_types: Classified types of the method arguments.
        inherited: Whether methods declared by ancestors are searched. If None,
            the ``search_inherited_methods`` setting decides.

    Returns:
        The matching method, or None if no candidate accepts the arguments.
    """
    if inherited is None:
        inherited = get_settings().search_inherited_methods

    for method in TypeDescriptor(target_type).methods(name, inherited):
        if method.accepts(argument_types):
            logger.debug("Resolved method %s.%s for %s", target_type.__qualname__, name, argument_types)
            return method

    logger.debug("No method %s.%s accepts %s", target_type.__qualname__, name, argument_types)
    return None


def _effective_member(cls: type, name: str) -> tuple[type, Any]:
    for klass in cls.__mro__:
        if name in vars(klass):
            return klass, vars(klass)[name]
    return object, None


def _unwrap(member: Any) -> Any:
    if isinstance(member, (staticmethod, classmethod)):
        return member.__func__
    return member


def _describe_all(
    owner: type, name: str, function: Callable, skip_first: bool
) -> list[MemberDescriptor]:
    """Describe each overload of a function, or the function itself if it has none.

    Signatures that cannot be called positionally (required keyword-only
    parameters) are left out.
    """
    overloads = get_overloads(function) if inspect.isfunction(function) else []
    candidates = list(overloads) or [function]
    descriptors = (_describe(owner, name, candidate, skip_first) for candidate in candidates)
    return [descriptor for descriptor in descriptors if descriptor is not None]


def _describe(
    owner: type, name: str, function: Callable, skip_first: bool
) -> Optional[MemberDescriptor]:
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        # Builtin slots without a text signature accept any positional arguments.
        return MemberDescriptor(owner, name, (), 0, object, function)

    parameters = list(signature.parameters.values())
    if skip_first and parameters and parameters[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        parameters = parameters[1:]

    hints = _type_hints(function, parameters)
    positional: list[inspect.Parameter] = []
    variadic_type = None
    for parameter in parameters:
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional.append(parameter)
        elif parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            variadic_type = hints.get(parameter.name, object)
        elif (
            parameter.kind is inspect.Parameter.KEYWORD_ONLY
            and parameter.default is inspect.Parameter.empty
        ):
            return None

    return MemberDescriptor(
        owner,
        name,
        tuple(hints.get(parameter.name, object) for parameter in positional),
        sum(1 for parameter in positional if parameter.default is inspect.Parameter.empty),
        variadic_type,
        function,
    )


def _type_hints(function: Callable, parameters: list[inspect.Parameter]) -> dict[str, Any]:
    """Resolve parameter annotations, falling back to the raw non-string ones.

    Annotations that cannot be evaluated (forward references to names that do
    not exist in the function's module) are treated as unannotated.
    """
    try:
        return get_type_hints(function)
    except (NameError, TypeError):
        logger.debug("Could not evaluate annotations of %s", function.__qualname__)
        return {
            parameter.name: parameter.annotation
            for parameter in parameters
            if parameter.annotation is not inspect.Parameter.empty
            and not isinstance(parameter.annotation, str)
        }
