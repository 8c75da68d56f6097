"""Exceptions surfaced to the host shell."""

from __future__ import annotations


class ActivationError(RuntimeError):
    """A chosen result could not be opened, launched or copied.

    Recoverable: the host reports it and keeps running.
    """

    def __init__(self, action_ref: str, reason: str) -> None:
        super().__init__(f"Failed to activate {action_ref!r}: {reason}")
        self.action_ref = action_ref
        self.reason = reason
