"""
CLI Utilities Module.

Loading and parsing of replay scripts for the CLI tools.

A replay script is a JSON object with a ``steps`` list (a bare list is
accepted too). Each step is one of:

- ``{"op": "load" | "create" | "update" | "delete", "units": [...]}``
- ``{"op": "undo"}`` / ``{"op": "redo"}``
- ``{"op": "batch", "steps": [<unit steps>]}`` to submit several
  commands in one execute call.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from orgstack.commands.base_command import Command
from orgstack.commands.unit_commands import (
    CreateUnitsCommand,
    DeleteUnitsCommand,
    LoadUnitsCommand,
    UpdateUnitsCommand,
)
from orgstack.core.stack_config import StackConfig
from orgstack.core.units import units_from_dicts

logger = logging.getLogger(__name__)

UNIT_OPS = ("load", "create", "update", "delete")
HISTORY_OPS = ("undo", "redo")


class ScriptError(ValueError):
    """Raised when a replay script is malformed."""


@dataclass
class ReplayStep:
    """
    One parsed step of a replay script.

    Attributes:
        op: ``execute``, ``undo`` or ``redo``.
        commands: Commands submitted together when ``op`` is ``execute``.
    """

    op: str
    commands: List[Command] = field(default_factory=list)


def validate_script_path(script_path: str) -> bool:
    """
    Validate that a replay script file exists.

    Args:
        script_path: Path to the script file.

    Returns:
        True if valid, False otherwise.
    """
    path = Path(script_path)

    if not path.is_file():
        logger.error(f"Script file not found: {script_path}")
        return False

    return True


def build_command(step: Any, config: Optional[StackConfig] = None) -> Command:
    """
    Build the command described by a unit step.

    Args:
        step: A step dictionary with ``op`` and ``units``.
        config: Configuration deciding duplicate handling on create.

    Returns:
        Command: The command for the step.

    Raises:
        ScriptError: If the step is not a valid unit step.
    """
    config = config or StackConfig()
    if not isinstance(step, dict):
        raise ScriptError(f"Step must be an object, got {type(step).__name__}")

    op = step.get("op")
    if op not in UNIT_OPS:
        raise ScriptError(f"Unknown unit operation: {op!r}")

    raw_units = step.get("units")
    if not isinstance(raw_units, list):
        raise ScriptError(f"Step {op!r} needs a 'units' list")

    try:
        units = units_from_dicts(raw_units)
    except KeyError as e:
        raise ScriptError(f"Unit in {op!r} step is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise ScriptError(f"Invalid unit in {op!r} step: {e}") from e

    if op == "load":
        return LoadUnitsCommand(units)
    if op == "create":
        return CreateUnitsCommand(units, reject_duplicates=config.reject_duplicate_ids)
    if op == "update":
        return UpdateUnitsCommand(units)
    return DeleteUnitsCommand(units)


def parse_steps(data: Any, config: Optional[StackConfig] = None) -> List[ReplayStep]:
    """
    Parse decoded script JSON into replay steps.

    Args:
        data: The decoded JSON document.
        config: Configuration passed on to build_command.

    Returns:
        List[ReplayStep]: The steps in script order.

    Raises:
        ScriptError: If the document is malformed.
    """
    if isinstance(data, dict):
        data = data.get("steps")
    if not isinstance(data, list):
        raise ScriptError("Script must be a list of steps or an object with 'steps'")

    steps = []
    for position, raw in enumerate(data, start=1):
        op = raw.get("op") if isinstance(raw, dict) else None
        try:
            if op in HISTORY_OPS:
                steps.append(ReplayStep(op=op))
            elif op == "batch":
                inner = raw.get("steps")
                if not isinstance(inner, list) or not inner:
                    raise ScriptError("Batch needs a non-empty 'steps' list")
                commands = [build_command(item, config) for item in inner]
                steps.append(ReplayStep(op="execute", commands=commands))
            else:
                steps.append(
                    ReplayStep(op="execute", commands=[build_command(raw, config)])
                )
        except ScriptError as e:
            raise ScriptError(f"Step {position}: {e}") from e

    return steps


def load_script(
    script_path: str, config: Optional[StackConfig] = None
) -> List[ReplayStep]:
    """
    Read and parse a replay script file.

    Args:
        script_path: Path to the JSON script.
        config: Configuration passed on to build_command.

    Returns:
        List[ReplayStep]: The parsed steps.

    Raises:
        ScriptError: If the file is not valid JSON or not a valid script.
    """
    path = Path(script_path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ScriptError(f"Invalid JSON in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ScriptError(f"Script is not valid UTF-8: {path}: {e}") from e

    steps = parse_steps(data, config)
    logger.debug(f"Parsed {len(steps)} step(s) from {path}")
    return steps
