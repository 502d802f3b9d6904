#!/usr/bin/env python3
"""
Shared plumbing for command endpoints.

Commands are the outermost boundary: this is the only layer that catches
pipeline errors, and it always turns them into a fixed user-facing message
plus an exit code. Internal details go to the log, never to the terminal.
"""

import logging
from abc import ABC, abstractmethod
from argparse import Namespace
from typing import Tuple

from core.container import get_container
from core.exceptions import BenSightError, ValidationError, user_message

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
EXIT_INTERRUPTED = 130


class BaseCommand(ABC):
    """Base class for command endpoints wired through the service container."""

    subcommands: Tuple[str, ...] = ()

    def __init__(self, container=None):
        self.logger = logging.getLogger(self.__class__.__name__)
        self._container = container if container is not None else get_container()

    @property
    def config(self):
        return self._container.get('config')

    @property
    def pipeline(self):
        """A freshly wired pipeline for this invocation."""
        return self._container.get('pipeline')

    @abstractmethod
    def execute(self, subcommand: str, args: Namespace) -> int:
        """
        Run one subcommand.

        Returns:
            Process exit code
        """

    def unknown_subcommand(self, subcommand: str) -> int:
        available = ", ".join(self.subcommands)
        self.logger.error(f"Unknown subcommand '{subcommand}'. Available: {available}")
        return EXIT_FAILURE

    def report(self, message: str) -> None:
        print(message)

    def handle_error(self, error: BaseException, context: str = "") -> int:
        """
        Log an error and show the user its fixed message.

        Args:
            error: The exception that stopped the command
            context: Which command was running

        Returns:
            Exit code for the failure class
        """
        if isinstance(error, KeyboardInterrupt):
            self.logger.info("Interrupted")
            return EXIT_INTERRUPTED

        detail = f"{context}: {error}" if context else str(error)

        if isinstance(error, ValidationError):
            self.logger.warning(detail)
            self.report(user_message(error))
            return EXIT_INVALID_INPUT

        if isinstance(error, BenSightError):
            self.logger.error(detail, extra={'error': error.to_dict()})
        else:
            self.logger.error(detail, exc_info=True)

        self.report(user_message(error))
        return EXIT_FAILURE
