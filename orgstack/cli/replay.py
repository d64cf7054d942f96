#!/usr/bin/env python3
"""
Replay CLI.

Drives a CommandStack from a JSON replay script and prints the resulting
chart.

Usage:
    python -m orgstack.cli.replay run script.json
    python -m orgstack.cli.replay run script.json --json
    python -m orgstack.cli.replay --config stack.json run script.json --history
    python -m orgstack.cli.replay validate script.json
"""

import argparse
import json
import logging
import sys

from orgstack.app.command_stack import CommandStack
from orgstack.cli.utils import load_script, validate_script_path
from orgstack.core.errors import CommandError
from orgstack.core.logging_config import setup_logging, shutdown_logging
from orgstack.core.stack_config import StackConfig, load_config

logger = logging.getLogger(__name__)


def _load_config(args) -> StackConfig:
    if args.config:
        return load_config(args.config)
    return StackConfig()


def _print_units(units) -> None:
    if not units:
        print("No units in final state.")
        return

    print(f"\nFinal state ({len(units)} {'unit' if len(units) == 1 else 'units'}):\n")
    for unit in units:
        print(f"ID: {unit.id}")
        print(f"  Name: {unit.name}")
        print(f"  Code: {unit.code}")
        print(f"  Type: {unit.type.value}")
        if unit.pid:
            print(f"  Parent: {unit.pid}")
        if unit.tags:
            print(f"  Tags: {', '.join(tag.value for tag in unit.tags)}")
        print()


def run_script(args) -> int:
    """Replay a script against a fresh command stack."""
    try:
        config = _load_config(args)
        steps = load_script(args.script, config)
    except (ValueError, OSError) as e:
        # Malformed scripts and config JSON both surface as ValueError
        logger.error(f"Failed to load script: {e}")
        print(f"✗ Error: {e}")
        if args.verbose:
            raise
        return 1

    stack = CommandStack(config=config)
    for position, step in enumerate(steps, start=1):
        try:
            if step.op == "undo":
                if not stack.undo():
                    logger.info(f"Step {position}: nothing to undo")
            elif step.op == "redo":
                if not stack.redo():
                    logger.info(f"Step {position}: nothing to redo")
            else:
                stack.execute(step.commands)
        except CommandError as e:
            print(f"✗ Error in step {position}: {e}")
            if args.verbose:
                raise
            return 1

    if args.json:
        print(json.dumps([unit.to_dict() for unit in stack.state], indent=2))
    else:
        _print_units(stack.state)

    if args.history:
        print("History:")
        print(str(stack) if stack.history else "(empty)")

    return 0


def validate_script(args) -> int:
    """Parse a script without executing it."""
    try:
        config = _load_config(args)
    except (ValueError, OSError) as e:
        print(f"✗ Error: invalid config: {e}")
        return 1

    try:
        steps = load_script(args.script, config)
    except (ValueError, OSError) as e:
        print(f"✗ Invalid script: {e}")
        return 1

    command_count = sum(len(step.commands) for step in steps)
    print(f"✓ Script valid: {len(steps)} step(s), {command_count} command(s)")
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Replay org-chart command scripts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    parser.add_argument("--config", "-c", help="Path to a JSON stack config")
    parser.add_argument("--log-file", help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Replay a script")
    run_parser.add_argument("script", help="Path to the JSON replay script")
    run_parser.add_argument("--json", action="store_true", help="Output as JSON")
    run_parser.add_argument(
        "--history", action="store_true", help="Print the applied commands"
    )
    run_parser.set_defaults(func=run_script)

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Check a script")
    validate_parser.add_argument("script", help="Path to the JSON replay script")
    validate_parser.set_defaults(func=validate_script)

    args = parser.parse_args()

    setup_logging(debug_mode=args.verbose, log_file=args.log_file)

    exit_code = 1
    try:
        if hasattr(args, "script") and not validate_script_path(args.script):
            print(f"✗ Script file not found: {args.script}")
        elif hasattr(args, "func"):
            exit_code = args.func(args)
        else:
            parser.print_help()
    finally:
        # Release file handlers before the process exits
        shutdown_logging()

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
