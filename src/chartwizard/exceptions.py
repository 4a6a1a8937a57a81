"""Custom exceptions for the chartwizard configuration wizard.

This module defines exception types for wizard sessions:
- InputAborted: Raised when the user cancels a prompt
- InputFailed: Raised when reading a prompt answer fails
- MergeFailed: Raised when the values document has an unusable shape
- WriteFailed: Raised when the output values file cannot be created

Every stage of the wizard wraps the underlying error with a stage label
using ``with_stage`` and re-raises it without changing its class.
"""

import copy
from typing import Optional


class WizardError(Exception):
    """Base class for all wizard session failures.

    Args:
        message: Error description
        original_error: Underlying exception (optional)

    Example:
        >>> err = InputFailed("terminal closed")
        >>> str(err.with_stage("branch configuration"))
        'branch configuration failed: terminal closed'
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        """Initialize WizardError with message and optional original error.

        Args:
            message: Human-readable error description
            original_error: Original exception (preserved for debugging)
        """
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)

    def with_stage(self, stage: str) -> "WizardError":
        """Return a copy of this error labelled with the failing stage.

        The copy keeps the concrete class and any extra context, so callers
        can still distinguish a cancel from an I/O failure after wrapping.
        """
        wrapped = copy.copy(self)
        wrapped.message = f"{stage} failed: {self.message}"
        wrapped.original_error = self.original_error or self
        wrapped.args = (wrapped.message,)
        return wrapped

    def __str__(self) -> str:
        return self.message


class InputAborted(WizardError):
    """Raised when the user cancels a prompt (Ctrl+C, Ctrl+D).

    Not a bug: the session ends cleanly without writing anything.
    """


class InputFailed(WizardError):
    """Raised when a prompt cannot be read (closed stdin, terminal I/O error)."""


class MergeFailed(WizardError):
    """Raised when the values document cannot be merged or validated.

    Used for:
    - Existing values file that is not valid YAML or not a mapping
    - Intermediate keys that hold scalars where a mapping is required
    - Required keys missing after the configuration was applied
    """


class WriteFailed(WizardError):
    """Raised when the output values file cannot be created.

    Includes the destination directory when available.

    Args:
        message: Error description
        original_error: Underlying OSError or YAMLError (optional)
        directory: Directory the file was being written to (optional)
    """

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        directory: Optional[str] = None,
    ):
        self.directory = directory
        super().__init__(message, original_error=original_error)

    def __str__(self) -> str:
        """Return message with directory context if available."""
        if self.directory:
            return f"{self.message} (in directory: {self.directory})"
        return self.message
