"""
Unit tests for unit commands.
"""

import json
from dataclasses import dataclass

import pytest

from orgstack.commands.unit_commands import (
    CreateUnitsCommand,
    DeleteUnitsCommand,
    LoadUnitsCommand,
    UpdateUnitsCommand,
)
from orgstack.core.errors import (
    CommandStateError,
    DuplicateUnitError,
    UnitNotFoundError,
    UnsupportedOperationError,
)


def test_load_replaces_state(unit_a, unit_b, unit_c):
    cmd = LoadUnitsCommand([unit_a, unit_b])

    result = cmd.execute([unit_c])

    assert result == [unit_a, unit_b]
    assert cmd.is_executed is True


def test_load_cannot_be_undone_or_redone(unit_a):
    cmd = LoadUnitsCommand([unit_a])
    state = cmd.execute([])

    with pytest.raises(UnsupportedOperationError):
        cmd.undo(state)
    with pytest.raises(UnsupportedOperationError):
        cmd.redo(state)


def test_create_appends_in_order(unit_a, unit_b, unit_c):
    state = [unit_a]
    cmd = CreateUnitsCommand([unit_b, unit_c])

    result = cmd.execute(state)

    assert result == [unit_a, unit_b, unit_c]
    # Input list untouched
    assert state == [unit_a]


def test_create_undo_redo(unit_a, unit_b, unit_c):
    cmd = CreateUnitsCommand([unit_c])
    after = cmd.execute([unit_a, unit_b])

    undone = cmd.undo(after)
    assert undone == [unit_a, unit_b]
    assert cmd.is_executed is False

    redone = cmd.redo(undone)
    assert redone == after
    assert cmd.is_executed is True


def test_create_allows_duplicates_by_default(unit_a):
    cmd = CreateUnitsCommand([unit_a])
    assert cmd.execute([unit_a]) == [unit_a, unit_a]


def test_create_rejects_duplicates_when_enabled(unit_a, unit_b, make_unit):
    clash = make_unit("1", name="Another Root")
    cmd = CreateUnitsCommand([unit_b, clash], reject_duplicates=True)

    with pytest.raises(DuplicateUnitError) as e:
        cmd.execute([unit_a])

    assert e.value.duplicate_ids == ("1",)
    assert cmd.is_executed is False


def test_create_rejects_repeated_payload_ids(unit_b):
    cmd = CreateUnitsCommand([unit_b, unit_b], reject_duplicates=True)

    with pytest.raises(DuplicateUnitError):
        cmd.execute([])


def test_update_replaces_in_place(unit_a, unit_b, unit_c):
    renamed = unit_b.replace(name="Renamed")
    state = [unit_a, unit_b, unit_c]
    cmd = UpdateUnitsCommand([renamed])

    result = cmd.execute(state)

    assert result == [unit_a, renamed, unit_c]
    assert state[1] is unit_b


def test_update_undo_restores_original_values(unit_a, unit_b, unit_c):
    """Undo brings back the values from before the update."""
    cmd = UpdateUnitsCommand([unit_b.replace(name="B2"), unit_c.replace(code="c2")])
    after = cmd.execute([unit_a, unit_b, unit_c])

    undone = cmd.undo(after)

    assert undone == [unit_a, unit_b, unit_c]
    assert undone[1].name == "Sub Root"


def test_update_redo_reapplies(unit_a, unit_b):
    renamed = unit_b.replace(name="B2")
    cmd = UpdateUnitsCommand([renamed])
    after = cmd.execute([unit_a, unit_b])
    undone = cmd.undo(after)

    assert cmd.redo(undone) == [unit_a, renamed]


def test_update_missing_id_raises(unit_a, unit_c):
    state = [unit_a]
    cmd = UpdateUnitsCommand([unit_a.replace(name="A2"), unit_c])

    with pytest.raises(UnitNotFoundError) as e:
        cmd.execute(state)

    assert e.value.missing_ids == ("3",)
    assert state == [unit_a]
    assert cmd.is_executed is False


def test_delete_removes_matching_ids(unit_a, unit_b, unit_c):
    cmd = DeleteUnitsCommand([unit_b])

    result = cmd.execute([unit_a, unit_b, unit_c])

    assert result == [unit_a, unit_c]
    assert cmd.deleted_units == [unit_b]


def test_delete_matches_by_id_only(unit_a, unit_b):
    stale = unit_b.replace(name="Stale Copy")
    cmd = DeleteUnitsCommand([stale])

    assert cmd.execute([unit_a, unit_b]) == [unit_a]
    # The unit from the state is remembered, not the payload copy
    assert cmd.deleted_units == [unit_b]


def test_delete_undo_restores_original_positions(unit_a, unit_b, unit_c, make_unit):
    unit_d = make_unit("4")
    state = [unit_a, unit_b, unit_c, unit_d]
    cmd = DeleteUnitsCommand([unit_a, unit_c])

    after = cmd.execute(state)
    assert after == [unit_b, unit_d]

    assert cmd.undo(after) == state


def test_delete_redo_runs_against_current_state(unit_a, unit_b, unit_c):
    cmd = DeleteUnitsCommand([unit_b])
    after = cmd.execute([unit_a, unit_b, unit_c])
    undone = cmd.undo(after)

    assert cmd.redo(undone) == after


def test_delete_missing_id_raises(unit_a, unit_b):
    state = [unit_a]
    cmd = DeleteUnitsCommand([unit_b])

    with pytest.raises(UnitNotFoundError) as e:
        cmd.execute(state)

    assert "delete" in str(e.value)
    assert state == [unit_a]


def test_undo_before_execute_raises(unit_a):
    cmd = CreateUnitsCommand([unit_a])

    with pytest.raises(CommandStateError):
        cmd.undo([])
    with pytest.raises(CommandStateError):
        cmd.redo([])


def test_redo_while_applied_raises(unit_a):
    cmd = DeleteUnitsCommand([unit_a])
    after = cmd.execute([unit_a])

    with pytest.raises(CommandStateError):
        cmd.redo(after)


def test_command_rendering(unit_a, unit_b):
    cmd = CreateUnitsCommand([unit_a, unit_b])

    assert cmd.describe() == "Create 2 unit(s)"
    assert cmd.payload == (unit_a, unit_b)
    rendered = json.loads(str(cmd))
    assert rendered == [unit_a.summary(), unit_b.summary()]
    assert "CreateUnitsCommand" in repr(cmd)


@dataclass(frozen=True)
class NumberedItem:
    """Entity whose ids are integers."""

    id: int


def test_not_found_message_with_numeric_ids():
    cmd = UpdateUnitsCommand([NumberedItem(2), NumberedItem(3)])

    with pytest.raises(UnitNotFoundError) as e:
        cmd.execute([NumberedItem(1)])

    assert e.value.missing_ids == (2, 3)
    assert "2, 3" in str(e.value)


def test_duplicate_message_with_numeric_ids():
    cmd = CreateUnitsCommand([NumberedItem(1)], reject_duplicates=True)

    with pytest.raises(DuplicateUnitError) as e:
        cmd.execute([NumberedItem(1)])

    assert str(e.value).endswith(": 1")
