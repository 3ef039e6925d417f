"""
Commands — Registry of (subject, predicate) commands

Each command module:
1. Defines its executor functions
2. Exports COMMANDS, a list of Command records

Registry pattern enables:
- Locality: Flag declarations next to the executor
- Open/Closed: Add an entity = add a module to COMMAND_MODULES
- One lookup: find_command() is the only way the front end gets a Command
"""

import dataclasses
import importlib
import threading
from typing import List, Optional

from rapidfuzz import fuzz, process

from ..errors import AmbiguousCommandError, UnknownCommandError
from .base import Command, Flag, same_command

# Command modules that participate in registration
# Order determines help display order
COMMAND_MODULES = [
    'infrastructure',
    'instance_array',
    'drive_array',
    'template',
    'asset',
    'variable',
]

# Minimum rapidfuzz score for a "did you mean" suggestion
SUGGESTION_CUTOFF = 60

_commands: Optional[List[Command]] = None
_registry_lock = threading.Lock()


def _build_registry() -> List[Command]:
    commands: List[Command] = []

    for module_name in COMMAND_MODULES:
        module = importlib.import_module(f'.{module_name}', __package__)

        for command in getattr(module, 'COMMANDS', []):
            for existing in commands:
                if same_command(existing, command):
                    raise ValueError(f"Command registered twice: {command.name}")
            commands.append(command)

    return commands


def get_commands() -> List[Command]:
    """
    Get all registered commands, building the registry on first use.
    """
    global _commands

    if _commands is None:
        with _registry_lock:
            if _commands is None:
                _commands = _build_registry()

    return _commands


def reset_registry() -> None:
    """Drop the registry; the next get_commands() rebuilds it."""
    global _commands

    with _registry_lock:
        _commands = None


def _suggest(subject: str, predicate: str) -> Optional[str]:
    choices = []
    for command in get_commands():
        choices.append(command.name)
        if command.alt_subject or command.alt_predicate:
            choices.append(f"{command.alt_subject or command.subject} {command.alt_predicate or command.predicate}")

    match = process.extractOne(
        f"{subject} {predicate}",
        choices,
        scorer=fuzz.WRatio,
        score_cutoff=SUGGESTION_CUTOFF,
    )
    return match[0] if match else None


def find_command(subject: str, predicate: str) -> Command:
    """
    Find the command named by subject and predicate.

    Alternate names match as well ("var ls" finds "variable list").

    Returns:
        A fresh copy of the command with empty arguments

    Raises:
        UnknownCommandError: If nothing matches (with a suggestion when close)
        AmbiguousCommandError: If more than one command matches
    """
    matches = [c for c in get_commands() if c.matches(subject, predicate)]

    if not matches:
        raise UnknownCommandError(subject, predicate, _suggest(subject, predicate))

    if len(matches) > 1:
        names = ", ".join(c.name for c in matches)
        raise AmbiguousCommandError(f"Ambiguous command '{subject} {predicate}': {names}")

    return dataclasses.replace(matches[0], arguments={})


def format_help() -> str:
    """List all commands, one per line, with their alternate names."""
    commands = get_commands()
    width = max((len(c.name) for c in commands), default=0)

    lines = ["Usage: metalcloud-cli <subject> <predicate> [--flags]", "", "Commands:"]
    for command in commands:
        alias = f"{command.alt_subject} {command.alt_predicate}"
        line = f"  {command.name.ljust(width)}  {command.description}"
        if alias != command.name:
            line += f" (alias: {alias})"
        lines.append(line)

    lines.extend(["", "Run 'metalcloud-cli <subject> <predicate> --help' for a command's flags."])
    return "\n".join(lines)


__all__ = [
    'Command', 'Flag', 'same_command', 'COMMAND_MODULES',
    'get_commands', 'reset_registry', 'find_command', 'format_help',
]
