"""
Base Command Module.

Defines the abstract base class for all commands applied by a CommandStack.

Classes:
    Command: Abstract base class implementing the command pattern with
        undo/redo over an ordered collection of entities.
"""

import json
from abc import ABC, abstractmethod
from typing import Generic, Iterable, List, Sequence, Tuple, TypeVar

from orgstack.core.errors import CommandStateError
from orgstack.core.protocols import Identifiable

T = TypeVar("T", bound=Identifiable)


class Command(ABC, Generic[T]):
    """
    Abstract base class for reversible operations over a list of entities.

    Commands never mutate the list they receive. Each operation returns
    a new list, and whatever snapshot a command needs for its own undo
    stays private to it.
    """

    #: Verb used by describe() and error messages
    action: str = "apply"

    def __init__(self, payload: Iterable[T]):
        """
        Initializes the command.

        Args:
            payload (Iterable[T]): Entities the command operates on.
        """
        self._payload: Tuple[T, ...] = tuple(payload)
        self._is_executed = False
        self._has_run = False

    @abstractmethod
    def execute(self, state: Sequence[T]) -> List[T]:
        """
        Performs the action.

        Args:
            state (Sequence[T]): The current state.

        Returns:
            List[T]: The new state.
        """
        pass

    @abstractmethod
    def undo(self, state: Sequence[T]) -> List[T]:
        """
        Reverts the action.

        Args:
            state (Sequence[T]): The current state.

        Returns:
            List[T]: The state as it was before execute.
        """
        pass

    @abstractmethod
    def redo(self, state: Sequence[T]) -> List[T]:
        """
        Re-applies the action after an undo.

        Args:
            state (Sequence[T]): The current state.

        Returns:
            List[T]: The new state.
        """
        pass

    @property
    def payload(self) -> Tuple[T, ...]:
        """The entities this command operates on."""
        return self._payload

    @property
    def is_executed(self) -> bool:
        """
        Checks if the command is currently applied.

        Returns:
            bool: True after execute or redo, False after undo.
        """
        return self._is_executed

    def describe(self) -> str:
        """Short label such as ``Create 2 unit(s)``."""
        return f"{self.action.capitalize()} {len(self._payload)} unit(s)"

    def _mark_executed(self) -> None:
        self._is_executed = True
        self._has_run = True

    def _require_executed(self, operation: str) -> None:
        if not self._is_executed:
            raise CommandStateError(
                f"Cannot {operation} {type(self).__name__} before it is executed"
            )

    def _require_undone(self) -> None:
        if not self._has_run:
            raise CommandStateError(
                f"Cannot redo {type(self).__name__} before it is executed"
            )
        if self._is_executed:
            raise CommandStateError(
                f"Cannot redo {type(self).__name__} that is still applied"
            )

    def __str__(self) -> str:
        summaries = [
            entity.summary() if hasattr(entity, "summary") else {"id": entity.id}
            for entity in self._payload
        ]
        return json.dumps(summaries, indent=3)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()!r}>"
