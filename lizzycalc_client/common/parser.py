"""Parse operand text typed into the calculator form."""
import math
from typing import Dict, Optional

from lizzycalc_client.common.errors import OperandValidationError
from lizzycalc_client.common.models import CalculationRequest

ENTER_NUMBERS = "Enter numbers"
UNKNOWN_OPERATION = "Unknown operation"

# Mapping of operator symbols sent to the service to the symbol shown to the user
OPERATIONS: Dict[str, str] = {
    "+": "+",
    "-": "−",
    "*": "×",
    "/": "/",
}

# Display symbols typed back by the user, mapped to the symbol sent to the service
OPERATION_ALIASES: Dict[str, str] = {display: wire for wire, display in OPERATIONS.items()}


class OperandParser:
    """
    Turn raw operand text into numbers.

    Parsing follows ``float()``: surrounding whitespace, decimals and exponents
    are accepted. NaN and infinities count as "not a number" since they cannot
    travel in a JSON body.
    """

    @staticmethod
    def parse(text: str) -> Optional[float]:
        """
        Parse a single operand.

        :param str text: Raw operand text, possibly empty

        :return: The parsed value, or None when the text is not a finite number
        :rtype: Optional[float]
        """
        try:
            value = float(text)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(value):
            return None
        return value

    @staticmethod
    def normalize_operation(symbol: str) -> str:
        """Map a display symbol such as "×" to its service symbol; other text is returned unchanged."""
        return OPERATION_ALIASES.get(symbol.strip(), symbol.strip())

    @staticmethod
    def is_operation(symbol: str) -> bool:
        """Return True if the symbol is an operation the service understands."""
        return symbol in OPERATIONS

    @staticmethod
    def build_request(number1_text: str, number2_text: str, operation: str) -> CalculationRequest:
        """
        Validate the form input and build the request to send.

        :param str number1_text: Raw text of the first operand
        :param str number2_text: Raw text of the second operand
        :param str operation: Selected operation symbol

        :return: Request ready to send
        :rtype: CalculationRequest
        :raises OperandValidationError: If an operand is not a number or the operation is unknown
        """
        number1 = OperandParser.parse(number1_text)
        number2 = OperandParser.parse(number2_text)
        if number1 is None or number2 is None:
            raise OperandValidationError(ENTER_NUMBERS)
        if not OperandParser.is_operation(operation):
            raise OperandValidationError(UNKNOWN_OPERATION)
        return CalculationRequest(number1=number1, number2=number2, operation=operation)
