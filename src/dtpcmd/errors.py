"""
Error taxonomy for command building and queueing.

All errors are raised synchronously to the caller of
`set_param`, `get_param`, `build` or `CommandQueue.add_command`.
Nothing in the core catches or retries them.
"""

from typing import Iterable, List


class CommandError(Exception):
    """Base class for all command stream errors."""
    pass


class UnknownParameterError(CommandError):
    """Raised when a parameter or component is outside a command's schema."""
    pass


class ValidationError(CommandError):
    """Raised when a command's own check fails at build time."""
    pass


class InvalidAxisError(CommandError):
    """Raised when relative positioning is requested on an axis other than left/top."""
    pass


class UndeclaredVariableError(CommandError):
    """
    Raised when a command references variables not registered in the queue.

    Properties:
        variables: Missing variable names, in reference order
    """

    def __init__(self, variables: Iterable[str]):
        self.variables: List[str] = list(variables)
        super().__init__(
            f"Used variables {', '.join(self.variables)} not defined."
        )
