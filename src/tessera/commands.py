"""Commands and the controller that dispatches them.

A :class:`Command` is a unit of work taking one parameter. Callers do not build
commands themselves: they name a contract (a command class, usually abstract)
and an :class:`ApplicationController` asks its :class:`CommandContainer` for an
implementation, then executes it.
"""

import logging
from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from tessera.factory import create_object

__all__ = [
    "Command",
    "CommandContainer",
    "SimpleCommandContainer",
    "ApplicationController",
]

logger = logging.getLogger(__name__)

P = TypeVar("P")


class Command(ABC, Generic[P]):
    """A unit of work executed with a single parameter."""

    @abstractmethod
    def execute(self, parameter: P) -> None:
        pass


class CommandContainer(ABC):
    """Supplies command implementations for contracts."""

    @abstractmethod
    def resolve(self, contract: type[Command[P]]) -> Command[P]:
        """Return an implementation of the contract."""

    @abstractmethod
    def resolve_named(self, contract: type[Command[P]], name: str) -> Command[P]:
        """Return the implementation of the contract registered under ``name``."""


class SimpleCommandContainer(CommandContainer):
    """Container that instantiates the contract class itself.

    Every resolution builds a new instance with no constructor arguments. There
    is no registry of names, so resolving by name is unsupported.
    """

    def resolve(self, contract: type[Command[P]]) -> Command[P]:
        return create_object(contract)

    def resolve_named(self, contract: type[Command[P]], name: str) -> Command[P]:
        raise NotImplementedError(
            "The default command container doesn't support resolving commands by name"
        )


class ApplicationController:
    """Executes commands resolved from a container.

    Example:
        >>> controller = ApplicationController()
        >>> controller.execute(ShowHome, None)
        >>> controller.execute(Navigate, "/home", name="navigate")   # needs a naming container
    """

    def __init__(self, container: Optional[CommandContainer] = None):
        self._container = container or SimpleCommandContainer()

    def execute(
        self, contract: type[Command[P]], parameter: P, name: Optional[str] = None
    ) -> None:
        """Resolve an implementation of ``contract`` and execute it with ``parameter``.

        Args:
            contract: The command class to resolve.
            parameter: The parameter passed to the command.
            name: If given, the implementation registered under this name is used.

        Raises:
            ResolutionError: If the container cannot build the command.
            NotImplementedError: If a name is given and the container does not
                support resolution by name.
        """
        if name is None:
            command = self._container.resolve(contract)
        else:
            command = self._container.resolve_named(contract, name)
        logger.debug("Executing %s for contract %s", type(command).__qualname__, contract.__qualname__)
        self.execute_command(command, parameter)

    def execute_command(self, command: Command[P], parameter: P) -> None:
        """Execute an already built command."""
        command.execute(parameter)
