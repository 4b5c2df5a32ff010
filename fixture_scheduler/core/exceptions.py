"""Exceptions raised by the fixture scheduling engine."""

from typing import List


class FixtureSchedulerException(Exception):
    """Base exception for all fixture scheduler errors."""

    pass


class FixtureConfigurationError(FixtureSchedulerException, ValueError):
    """
    Raised when a tournament configuration fails validation.

    The message is the validation errors joined by ", "; the individual
    messages are kept on ``errors``.
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))


class SolverUnavailableError(FixtureSchedulerException):
    """Raised when the configured assignment solver is not known."""

    pass
