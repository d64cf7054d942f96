"""
Stack Configuration Module.
Defines configuration settings for the command stack and the replay CLI.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


@dataclass
class StackConfig:
    """
    Configuration settings for a CommandStack.

    Attributes:
        clear_redo_on_execute: Whether a new execute discards undone commands.
        atomic_batches: Whether a failing batch is rolled back entirely.
            When False, commands before the failure stay applied.
        reject_duplicate_ids: Whether create commands built from this
            configuration reject ids that already exist.
    """

    clear_redo_on_execute: bool = True
    atomic_batches: bool = True
    reject_duplicate_ids: bool = False

    def to_dict(self) -> dict:
        """
        Converts the config to a dictionary for JSON serialization.

        Returns:
            dict: Dictionary representation of the configuration.
        """
        return {
            "clear_redo_on_execute": self.clear_redo_on_execute,
            "atomic_batches": self.atomic_batches,
            "reject_duplicate_ids": self.reject_duplicate_ids,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StackConfig":
        """
        Creates a StackConfig from a dictionary.

        Missing keys fall back to defaults. Unknown keys are ignored.

        Args:
            data: Dictionary containing configuration values.

        Returns:
            StackConfig: A new StackConfig instance.
        """
        unknown = set(data) - set(cls().to_dict())
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")

        return cls(
            clear_redo_on_execute=bool(data.get("clear_redo_on_execute", True)),
            atomic_batches=bool(data.get("atomic_batches", True)),
            reject_duplicate_ids=bool(data.get("reject_duplicate_ids", False)),
        )


def load_config(path: Union[str, Path]) -> StackConfig:
    """
    Loads a StackConfig from a JSON file.

    Args:
        path: Path to the JSON configuration file.

    Returns:
        StackConfig: The loaded configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a JSON object.
    """
    config_path = Path(path)
    with config_path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {config_path}")

    config = StackConfig.from_dict(data)
    logger.debug(f"Loaded stack config from {config_path}: {config.to_dict()}")
    return config
