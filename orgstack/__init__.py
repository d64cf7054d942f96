"""
orgstack.

In-memory undo/redo command stack for flat organizational-unit charts.
"""

from orgstack.app.command_stack import CommandStack
from orgstack.commands.unit_commands import (
    CreateUnitsCommand,
    DeleteUnitsCommand,
    LoadUnitsCommand,
    UpdateUnitsCommand,
)
from orgstack.core.errors import (
    CommandError,
    CommandStateError,
    DuplicateUnitError,
    UnitNotFoundError,
    UnsupportedOperationError,
)
from orgstack.core.stack_config import StackConfig
from orgstack.core.units import OrgUnit, UnitType

__version__ = "0.1.0"

__all__ = [
    "CommandError",
    "CommandStack",
    "CommandStateError",
    "CreateUnitsCommand",
    "DeleteUnitsCommand",
    "DuplicateUnitError",
    "LoadUnitsCommand",
    "OrgUnit",
    "StackConfig",
    "UnitNotFoundError",
    "UnitType",
    "UnsupportedOperationError",
    "UpdateUnitsCommand",
]
