"""Exception types raised by the targeting core.

Two kinds of failure exist and callers are expected to tell them apart:

* ``ProtocolError`` – the input line or event itself is garbled (bad verb,
  wrong arity, coordinate outside the board).
* ``InvariantViolation`` – the event is well-formed but contradicts the
  belief state (shooting a resolved cell, sinking an unknown ship length).
"""


class SalvoError(Exception):
    """Base class for every error raised by the package."""


class ProtocolError(SalvoError, ValueError):
    """Raised when an event cannot be accepted as valid protocol input."""


class InvariantViolation(SalvoError, RuntimeError):
    """Raised when the game stream breaks an assumption of the belief model."""
