"""
Command Stack.

Owns the current state of a unit collection and the undo/redo history
of the commands applied to it.
"""

import logging
from typing import Generic, Iterable, List, Optional, Tuple

from orgstack.commands.base_command import Command, T
from orgstack.core.stack_config import StackConfig

logger = logging.getLogger(__name__)


class CommandStack(Generic[T]):
    """
    Applies commands to an ordered collection and tracks their history.

    Manages:
    - The authoritative current state
    - Applied commands (undo history, most recent last)
    - Undone commands (redo history, most recent last)

    Example:
        stack = CommandStack([LoadUnitsCommand(units)])
        stack.execute([CreateUnitsCommand([new_unit])])
        stack.undo()
        stack.redo()
    """

    def __init__(
        self,
        commands: Iterable[Command[T]] = (),
        config: Optional[StackConfig] = None,
    ):
        """
        Initialize the command stack.

        Args:
            commands: Commands to execute immediately, in order.
            config: Stack policies. Defaults to StackConfig().
        """
        self.config = config or StackConfig()
        self._state: List[T] = []
        self._applied: List[Command[T]] = []
        self._undone: List[Command[T]] = []

        initial = list(commands)
        if initial:
            self.execute(initial)
        logger.debug(f"CommandStack initialized with {len(self._state)} unit(s)")

    @property
    def state(self) -> List[T]:
        """A copy of the current state."""
        return list(self._state)

    @property
    def history(self) -> Tuple[Command[T], ...]:
        """Applied commands, oldest first."""
        return tuple(self._applied)

    @property
    def undone(self) -> Tuple[Command[T], ...]:
        """Undone commands, oldest undo first."""
        return tuple(self._undone)

    @property
    def can_undo(self) -> bool:
        """Check if undo is available."""
        return bool(self._applied)

    @property
    def can_redo(self) -> bool:
        """Check if redo is available."""
        return bool(self._undone)

    def execute(self, commands: Iterable[Command[T]]) -> None:
        """
        Execute commands in order, recording each in the undo history.

        With ``config.atomic_batches`` a failure restores the state and
        history from before the batch. Otherwise commands that ran before
        the failure stay applied. The error is re-raised in both cases.

        Args:
            commands: The commands to execute.

        Raises:
            CommandError: Whatever the failing command raised.
        """
        batch = list(commands)
        state_before = self._state
        applied_before = len(self._applied)

        for command in batch:
            name = type(command).__name__
            logger.debug(f"Executing command: {name} (state size {len(self._state)})")
            try:
                self._state = command.execute(self._state)
            except Exception as e:
                logger.error(f"Command {name} failed: {e}")
                if self.config.atomic_batches:
                    self._rollback(state_before, applied_before)
                else:
                    self._forget_undone(applied_before)
                raise
            self._applied.append(command)
            logger.debug(f"State after {name}: {len(self._state)} unit(s)")

        self._forget_undone(applied_before)

    def _rollback(self, state: List[T], applied_count: int) -> None:
        rolled_back = len(self._applied) - applied_count
        self._state = state
        del self._applied[applied_count:]
        logger.info(f"Rolled back batch ({rolled_back} command(s) reverted)")

    def _forget_undone(self, applied_before: int) -> None:
        # Only a batch that actually applied something forks the history
        if (
            self.config.clear_redo_on_execute
            and self._undone
            and len(self._applied) > applied_before
        ):
            logger.debug(f"Discarding {len(self._undone)} undone command(s)")
            self._undone.clear()

    def undo(self) -> bool:
        """
        Undo the most recent command.

        If the command refuses (for example a load), it stays in the undo
        history, the state is unchanged and the error propagates.

        Returns:
            True if undo was performed, False if nothing to undo.

        Raises:
            CommandError: If the command cannot be undone.
        """
        if not self._applied:
            return False

        command = self._applied.pop()
        name = type(command).__name__
        logger.debug(f"Undoing command: {name}")
        try:
            self._state = command.undo(self._state)
        except Exception as e:
            self._applied.append(command)
            logger.error(f"Undo of {name} failed: {e}")
            raise
        self._undone.append(command)
        logger.debug(f"State after undo: {len(self._state)} unit(s)")
        return True

    def redo(self) -> bool:
        """
        Redo the most recently undone command.

        Returns:
            True if redo was performed, False if nothing to redo.

        Raises:
            CommandError: If the command cannot be redone.
        """
        if not self._undone:
            return False

        command = self._undone.pop()
        name = type(command).__name__
        logger.debug(f"Redoing command: {name}")
        try:
            self._state = command.redo(self._state)
        except Exception as e:
            self._undone.append(command)
            logger.error(f"Redo of {name} failed: {e}")
            raise
        self._applied.append(command)
        logger.debug(f"State after redo: {len(self._state)} unit(s)")
        return True

    def clear_history(self) -> None:
        """Drop both histories, keeping the current state."""
        self._applied.clear()
        self._undone.clear()

    def __len__(self) -> int:
        return len(self._state)

    def __str__(self) -> str:
        lines = []
        for index, command in enumerate(self._applied, start=1):
            lines.append(f"Command {index} ({type(command).__name__}):")
            lines.append(str(command))
        return "\n".join(lines)
