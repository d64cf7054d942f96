"""
Tests for the StackConfig dataclass.
"""
import json
import logging

import pytest

from orgstack.core.stack_config import StackConfig, load_config


def test_stack_config_defaults():
    """Test StackConfig with default values."""
    config = StackConfig()

    assert config.clear_redo_on_execute is True
    assert config.atomic_batches is True
    assert config.reject_duplicate_ids is False


def test_stack_config_round_trip():
    config = StackConfig(
        clear_redo_on_execute=False,
        atomic_batches=False,
        reject_duplicate_ids=True,
    )

    assert StackConfig.from_dict(config.to_dict()) == config


def test_stack_config_from_partial_dict():
    """Missing keys fall back to defaults."""
    config = StackConfig.from_dict({"atomic_batches": False})

    assert config.atomic_batches is False
    assert config.clear_redo_on_execute is True
    assert config.reject_duplicate_ids is False


def test_stack_config_ignores_unknown_keys(caplog):
    with caplog.at_level(logging.WARNING):
        config = StackConfig.from_dict({"max_history": 10})

    assert config == StackConfig()
    assert "max_history" in caplog.text


def test_load_config_from_file(tmp_path):
    path = tmp_path / "stack.json"
    path.write_text(json.dumps({"reject_duplicate_ids": True}), encoding="utf-8")

    config = load_config(path)

    assert config.reject_duplicate_ids is True


def test_load_config_rejects_non_object(tmp_path):
    path = tmp_path / "stack.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.json")
