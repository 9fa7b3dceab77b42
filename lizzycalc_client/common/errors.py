"""Errors raised while talking to the calculation service."""
from typing import Optional


class CalculatorError(Exception):
    """Base class for every calculator client error."""


class OperandValidationError(CalculatorError):
    """Operand text or operation rejected before any request is sent."""


class TransportError(CalculatorError):
    """The request could not be completed, or its response could not be read."""


class BackendError(CalculatorError):
    """The service answered with a non-success status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message or 'no message'}")
