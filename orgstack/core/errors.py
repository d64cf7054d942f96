"""
Command Errors Module.

Exception types raised by commands and the command stack.

Classes:
    CommandError: Base class for all command failures.
    UnsupportedOperationError: The command cannot perform the operation.
    UnitNotFoundError: A referenced unit id is not in the current state.
    DuplicateUnitError: A created unit id already exists.
    CommandStateError: undo/redo called on a command that was not executed.
"""

from typing import Iterable, Tuple


class CommandError(Exception):
    """Base class for errors raised while applying commands."""


class UnsupportedOperationError(CommandError):
    """Raised when a command does not support undo or redo."""


class UnitNotFoundError(CommandError, LookupError):
    """
    Raised when a command references ids missing from the current state.

    Attributes:
        missing_ids (Tuple[str, ...]): The ids that could not be found.
    """

    def __init__(self, action: str, missing_ids: Iterable[str]):
        self.missing_ids: Tuple[str, ...] = tuple(missing_ids)
        super().__init__(
            f"Cannot {action} unit(s) that do not exist: "
            f"{', '.join(map(str, self.missing_ids))}"
        )


class DuplicateUnitError(CommandError):
    """
    Raised when a created unit id already exists.

    Attributes:
        duplicate_ids (Tuple[str, ...]): The conflicting ids.
    """

    def __init__(self, duplicate_ids: Iterable[str]):
        self.duplicate_ids: Tuple[str, ...] = tuple(duplicate_ids)
        super().__init__(
            f"Cannot create unit(s) with existing ids: "
            f"{', '.join(map(str, self.duplicate_ids))}"
        )


class CommandStateError(CommandError):
    """Raised when undo or redo is requested before execute."""
