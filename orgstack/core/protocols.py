"""
Protocol Interfaces for Loose Coupling.

Commands and the command stack are generic over the entities they hold.
The only thing they require from an entity is a stable ``id``.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Identifiable(Protocol):
    """
    Protocol for entities that can be held by a CommandStack.

    Any object exposing an ``id`` attribute satisfies it, OrgUnit included.
    """

    @property
    def id(self) -> str:
        """Unique identifier of the entity."""
        ...
