#!/usr/bin/env python3
"""
Command endpoints, keyed by the first CLI word.
"""

from typing import Dict, Type

from .base import BaseCommand
from .summary import SummaryCommand

COMMANDS: Dict[str, Type[BaseCommand]] = {
    'summary': SummaryCommand,
}


def get_command(command_name: str, container=None) -> BaseCommand:
    """Instantiate the command registered as ``command_name``."""
    try:
        command_class = COMMANDS[command_name]
    except KeyError:
        raise ValueError(f"Unknown command '{command_name}'. Available: {', '.join(COMMANDS)}") from None
    return command_class(container)
