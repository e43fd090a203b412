"""Registration of command implementations, and a container that resolves them.

:class:`CommandRegistry` records command classes together with a name and the
profiles under which they are active. :class:`RegistryCommandContainer` takes
the registrations active for a set of profiles and resolves commands either by
contract (the unique registered implementation) or by name.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from tessera.commands import Command, CommandContainer
from tessera.errors import ResolutionError
from tessera.factory import create_object

__all__ = [
    "CommandRegistration",
    "CommandRegistry",
    "RegistryCommandContainer",
]

logger = logging.getLogger(__name__)

P = TypeVar("P")


@dataclass(frozen=True)
class CommandRegistration:
    """A command class registered for resolution.

    Attributes:
        name: Logical name of the command (the class name unless stated in the
            registration decorator).
        command_type: The command class.
        profiles: List of profile names under which the command is active.
            Empty list means active in all profiles.
        args: Constructor arguments used each time the command is built.
    """

    name: str
    command_type: type
    profiles: list[str]
    args: tuple[Any, ...]


class CommandRegistry:
    """Registry for command classes, supporting registration and profile-based filtering."""

    def __init__(self):
        self._registrations: list[CommandRegistration] = []

    def register(self, registration: CommandRegistration):
        """Register a command explicitly.

        Args:
            registration: The CommandRegistration to record.
        """
        self._registrations.append(registration)

    def registered_commands(
        self, profiles: Optional[set[str]] = None
    ) -> list[CommandRegistration]:
        """Retrieve registrations, optionally filtered by active profiles.

        Args:
            profiles: A set of active profile names. If None, returns all registrations.

        Returns:
            A list of registrations whose profiles match the given profile set.
        """
        if profiles is None:
            return list(self._registrations)
        return [r for r in self._registrations if _profiles_match(r.profiles, profiles)]

    def provides(
        self,
        name: Optional[str] = None,
        profiles: Optional[list[str]] = None,
        args: tuple[Any, ...] = (),
    ) -> Callable:
        """Decorator to register a class as a command implementation.

        Args:
            name: Optional logical name to assign; defaults to the class name.
            profiles: Optional list of profiles for which the command is active.
            args: Constructor arguments passed each time the command is built.

        Returns:
            A decorator that registers the class and returns it unchanged.

        Raises:
            ResolutionError: If the decorated object is not a Command subclass.

        Example:
            @registry.provides(name="home", profiles=["!test"])
            class ShowHome(Navigate):
                def execute(self, parameter: str) -> None:
                    ...
        """

        def decorator(cls):
            if not (inspect.isclass(cls) and issubclass(cls, Command)):
                raise ResolutionError(f"{cls} is not a Command class")
            self.register(
                CommandRegistration(name or cls.__name__, cls, profiles or [], tuple(args))
            )
            return cls

        return decorator


class RegistryCommandContainer(CommandContainer):
    """Container resolving commands from the registrations active in a profile set.

    Every resolution builds a new instance through the object factory, using the
    constructor arguments given at registration.
    """

    def __init__(self, registry: CommandRegistry, profiles: Optional[set[str]] = None):
        """
        Raises:
            ResolutionError: If two active registrations share a name.
        """
        self._registrations = _registrations_by_unique_name(
            registry.registered_commands(profiles), profiles
        )

    def resolve(self, contract: type[Command[P]]) -> Command[P]:
        """Build the unique registered implementation of a contract.

        Raises:
            ResolutionError: If no registered command, or more than one, implements it.
        """
        candidates = [
            registration
            for registration in self._registrations.values()
            if issubclass(registration.command_type, contract)
        ]
        if len(candidates) == 0:
            raise ResolutionError(f"No command registered for contract {contract.__qualname__}")
        if len(candidates) > 1:
            raise ResolutionError(
                f"No unique command found for contract {contract.__qualname__}: "
                f"{[c.name for c in candidates]}"
            )
        return self._build(candidates[0])

    def resolve_named(self, contract: type[Command[P]], name: str) -> Command[P]:
        """Build the command registered under ``name``.

        Raises:
            ResolutionError: If no command has that name, or it does not implement
                the contract.
        """
        registration = self._registrations.get(name)
        if registration is None:
            raise ResolutionError(f"No command registered with name '{name}'")
        if not issubclass(registration.command_type, contract):
            raise ResolutionError(
                f"Command '{name}' does not implement contract {contract.__qualname__}"
            )
        return self._build(registration)

    def _build(self, registration: CommandRegistration) -> Command:
        logger.debug("Building command '%s'", registration.name)
        return create_object(registration.command_type, *registration.args)


def _profiles_match(stated: list[str], selected: set[str]) -> bool:
    """Check if a registration's profile requirements match the selected profiles.

    Profile matching supports inclusion and exclusion patterns:
    - Normal profiles ("dev", "prod") must be in the selected set
    - Exclusion profiles ("!test") must NOT be in the selected set
    - Empty stated profiles match all selected profiles

    Example:
        >>> _profiles_match(["dev"], {"dev"})          # True
        >>> _profiles_match(["!test"], {"dev"})        # True
        >>> _profiles_match(["!test"], {"test"})       # False
        >>> _profiles_match(["prod"], {"dev"})         # False
    """
    provided = [p for p in stated if not p.startswith("!")]
    excluded = [p[1:] for p in stated if p.startswith("!")]

    return not any(e in selected for e in excluded) and (
        not provided or any(p in selected for p in provided)
    )


def _registrations_by_unique_name(
    registrations: list[CommandRegistration], profiles: Optional[set[str]]
) -> dict[str, CommandRegistration]:
    registrations_by_name = {}

    for registration in registrations:
        if registration.name in registrations_by_name:
            raise ResolutionError(
                f"Duplicate command name '{registration.name}' "
                f"for commands {[r.command_type.__name__ for r in registrations]} "
                f"in profiles {profiles}"
            )
        registrations_by_name[registration.name] = registration

    return registrations_by_name
