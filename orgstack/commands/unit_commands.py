"""
Commands for manipulating collections of units.

The four variants form a closed set:

- LoadUnitsCommand: replaces the whole state (cannot be undone).
- CreateUnitsCommand: appends new units.
- UpdateUnitsCommand: replaces existing units in place.
- DeleteUnitsCommand: removes units by id.

Every variant works on any entity type with an ``id``; OrgUnit is the one
the rest of the package uses.
"""

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from orgstack.commands.base_command import Command, T
from orgstack.core.errors import (
    DuplicateUnitError,
    UnitNotFoundError,
    UnsupportedOperationError,
)

logger = logging.getLogger(__name__)


def _index_by_id(state: Sequence[T]) -> Dict[str, int]:
    """Maps each id to the position of its first occurrence."""
    index: Dict[str, int] = {}
    for position, entity in enumerate(state):
        index.setdefault(entity.id, position)
    return index


def _missing_ids(payload: Iterable[T], state: Sequence[T]) -> List[str]:
    present = {entity.id for entity in state}
    return [entity.id for entity in payload if entity.id not in present]


class LoadUnitsCommand(Command[T]):
    """
    Command to replace the entire state with a fixed payload.

    There is no meaningful state before an initial load, so undo and
    redo are not supported.
    """

    action = "load"

    def execute(self, state: Sequence[T]) -> List[T]:
        """
        Discards the current state and returns the payload.

        Args:
            state (Sequence[T]): The current state (ignored).

        Returns:
            List[T]: A new list holding the payload.
        """
        self._mark_executed()
        logger.debug(f"Loaded {len(self._payload)} unit(s), discarded {len(state)}")
        return list(self._payload)

    def undo(self, state: Sequence[T]) -> List[T]:
        raise UnsupportedOperationError("Cannot undo Load")

    def redo(self, state: Sequence[T]) -> List[T]:
        raise UnsupportedOperationError("Cannot redo Load")


class CreateUnitsCommand(Command[T]):
    """
    Command to append new units to the end of the state.
    """

    action = "create"

    def __init__(self, payload: Iterable[T], reject_duplicates: bool = False):
        """
        Initializes the CreateUnitsCommand.

        Args:
            payload (Iterable[T]): Units to append, in order.
            reject_duplicates (bool): If True, execute raises
                DuplicateUnitError when a payload id already exists in the
                state or appears twice in the payload.
        """
        super().__init__(payload)
        self.reject_duplicates = reject_duplicates
        self._original_state: List[T] = []

    def _check_duplicates(self, state: Sequence[T]) -> None:
        seen = {entity.id for entity in state}
        duplicates = []
        for entity in self._payload:
            if entity.id in seen:
                duplicates.append(entity.id)
            seen.add(entity.id)
        if duplicates:
            raise DuplicateUnitError(duplicates)

    def execute(self, state: Sequence[T]) -> List[T]:
        """
        Appends the payload and remembers the state before the append.

        Args:
            state (Sequence[T]): The current state.

        Returns:
            List[T]: The state followed by the payload.

        Raises:
            DuplicateUnitError: If duplicates are rejected and one is found.
        """
        if self.reject_duplicates:
            self._check_duplicates(state)

        self._original_state = list(state)
        self._mark_executed()
        logger.debug(f"Created unit(s): {[e.id for e in self._payload]}")
        return self._original_state + list(self._payload)

    def undo(self, state: Sequence[T]) -> List[T]:
        """
        Returns the state captured before the append.

        Args:
            state (Sequence[T]): The current state (not consulted).

        Returns:
            List[T]: The pre-append state.
        """
        self._require_executed("undo")
        self._is_executed = False
        logger.debug(f"Undid creation of unit(s): {[e.id for e in self._payload]}")
        return list(self._original_state)

    def redo(self, state: Sequence[T]) -> List[T]:
        """
        Appends the payload again onto the captured pre-append state.
        """
        self._require_undone()
        return self.execute(self._original_state)


class UpdateUnitsCommand(Command[T]):
    """
    Command to replace existing units, matched by id, keeping positions.
    """

    action = "update"

    def __init__(self, payload: Iterable[T]):
        """
        Initializes the UpdateUnitsCommand.

        Args:
            payload (Iterable[T]): Replacement units. Each id must already
                exist in the state the command is executed against.
        """
        super().__init__(payload)
        self._original_state: List[T] = []

    def execute(self, state: Sequence[T]) -> List[T]:
        """
        Replaces every unit whose id appears in the payload.

        Args:
            state (Sequence[T]): The current state.

        Returns:
            List[T]: A new list with the replacements applied.

        Raises:
            UnitNotFoundError: If a payload id is not in the state. The
                given state is left untouched.
        """
        missing = _missing_ids(self._payload, state)
        if missing:
            raise UnitNotFoundError("update", missing)

        index = _index_by_id(state)
        new_state = list(state)
        for entity in self._payload:
            new_state[index[entity.id]] = entity

        self._original_state = list(state)
        self._mark_executed()
        logger.debug(f"Updated unit(s): {[e.id for e in self._payload]}")
        return new_state

    def undo(self, state: Sequence[T]) -> List[T]:
        """
        Restores the snapshot taken before the update.

        Args:
            state (Sequence[T]): The current state (not consulted).

        Returns:
            List[T]: The pre-update state.
        """
        self._require_executed("undo")
        self._is_executed = False
        logger.debug(f"Undid update of unit(s): {[e.id for e in self._payload]}")
        return list(self._original_state)

    def redo(self, state: Sequence[T]) -> List[T]:
        """
        Applies the update again to a copy of the pre-update snapshot.
        """
        self._require_undone()
        return self.execute(list(self._original_state))


class DeleteUnitsCommand(Command[T]):
    """
    Command to remove units by id.

    Removed units are remembered with their positions, so undo puts them
    back where they were.
    """

    action = "delete"

    def __init__(self, payload: Iterable[T]):
        """
        Initializes the DeleteUnitsCommand.

        Args:
            payload (Iterable[T]): Units to delete. Only their ids are used.
        """
        super().__init__(payload)
        self._deleted: List[Tuple[int, T]] = []

    @property
    def deleted_units(self) -> List[T]:
        """Units removed by the last execute, in their original order."""
        return [entity for _, entity in self._deleted]

    def execute(self, state: Sequence[T]) -> List[T]:
        """
        Removes every unit whose id matches a payload id.

        Args:
            state (Sequence[T]): The current state.

        Returns:
            List[T]: A new list without the deleted units.

        Raises:
            UnitNotFoundError: If a payload id is not in the state. The
                given state is left untouched.
        """
        missing = _missing_ids(self._payload, state)
        if missing:
            raise UnitNotFoundError("delete", missing)

        doomed = {entity.id for entity in self._payload}
        self._deleted = [
            (position, entity)
            for position, entity in enumerate(state)
            if entity.id in doomed
        ]
        self._mark_executed()
        logger.debug(f"Deleted unit(s): {sorted(doomed)}")
        return [entity for entity in state if entity.id not in doomed]

    def undo(self, state: Sequence[T]) -> List[T]:
        """
        Reinserts the deleted units at their original positions.

        Args:
            state (Sequence[T]): The current state.

        Returns:
            List[T]: The state with the deleted units restored.
        """
        self._require_executed("undo")
        restored = list(state)
        # Ascending positions: each insert lands where it was before delete
        for position, entity in self._deleted:
            restored.insert(position, entity)
        self._is_executed = False
        logger.debug(f"Undid deletion of unit(s): {[e.id for e in self.deleted_units]}")
        return restored

    def redo(self, state: Sequence[T]) -> List[T]:
        """
        Deletes the units again from the current state.
        """
        self._require_undone()
        return self.execute(state)
