"""Tessera reflective runtime services.

Tessera lets application code ask for "an instance of contract X" instead of
constructing collaborators itself. Instances are built reflectively: the
constructor is chosen by matching the runtime types of the supplied arguments
against the declared parameter types of the class's constructors, and named
commands are dispatched to the implementations a container resolves.

Key Features:
    - Object construction and method invocation with signature matching by assignability
    - Overloaded constructors and methods declared with ``typing.overload``
    - Boxed primitive (``ctypes``) arguments matched as their primitive types
    - Class annotations looked up through superclasses and interfaces
    - Command dispatch through pluggable containers, with profile-aware registration
    - A keyed collection with insertion-ordered positional access

Basic Usage:
    >>> from tessera.factory import create_object
    >>> from tessera.commands import ApplicationController
    >>>
    >>> greeter = create_object(Greeter, "Hello")
    >>>
    >>> controller = ApplicationController()
    >>> controller.execute(ShowHome, "/home")

The package consists of several modules:
    - type_utils: Type classification and superclass/interface walking
    - members: Constructor and method descriptors and resolution
    - factory: Reflective object construction
    - invoker: Reflective method invocation
    - guard: Precondition checks raising caller-chosen errors
    - annotations: Class annotation records and hierarchy-aware lookup
    - keyed_collection: Collections of values keyed by a derived key
    - commands: Commands, containers and the application controller
    - registry: Command registration and a registry-backed container
    - settings: Environment-driven settings
    - logging_config: structlog output configuration
    - errors: Framework-specific exceptions
"""
