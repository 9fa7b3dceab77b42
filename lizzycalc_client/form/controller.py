"""Calculator form controller: validates operands, calls the service, keeps the displayed state."""
from concurrent.futures import Future, ThreadPoolExecutor
import threading
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, PrivateAttr

from lizzycalc_client.client.client import CalculatorClient
from lizzycalc_client.common.errors import (
    BackendError,
    CalculatorError,
    OperandValidationError,
    TransportError,
)
from lizzycalc_client.common.logger import logger
from lizzycalc_client.common.models import FormState, HistoryItem
from lizzycalc_client.common.parser import OperandParser

SERVER_UNAVAILABLE = "Server unavailable"
GENERIC_ERROR = "Error"


class SubmitOutcome(str, Enum):
    """How a submit cycle ended."""

    VALIDATION_FAILED = "validation_failed"
    SUCCESS = "success"
    BACKEND_ERROR = "backend_error"
    TRANSPORT_ERROR = "transport_error"


class CalculatorForm(BaseModel):
    """
    Owner of one calculator form session.

    Lifecycle of a submit:
        - Clear the previous result and error
        - Validate the operand texts, stop on failure without any request
        - Send the calculation with the loading flag raised
        - Show the result or the error, lower the loading flag on every path
        - Schedule a history refresh if auto-refresh is on and the call succeeded

    History refreshes run on a single background worker so submit never waits
    for them. Calculation and history write disjoint state fields. Every write
    goes through one lock since a validated assignment replaces the whole field
    dict of the state.
    """

    client: CalculatorClient = Field(default_factory=CalculatorClient, description="Service client")
    state: FormState = Field(default_factory=FormState, description="Displayed form state")

    _executor: ThreadPoolExecutor = PrivateAttr(
        default_factory=lambda: ThreadPoolExecutor(max_workers=1, thread_name_prefix="history")
    )
    _history_refresh: Optional[Future] = PrivateAttr(default=None)
    _state_lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    @property
    def history_refresh(self) -> Optional[Future]:
        """Future of the last automatic history refresh, None if none was scheduled."""
        return self._history_refresh

    def _update(self, **changes) -> None:
        """Apply field changes to the form state under the state lock."""
        with self._state_lock:
            for name, value in changes.items():
                setattr(self.state, name, value)

    def set_auto_refresh(self, enabled: bool) -> None:
        """Turn automatic history refresh after successful calculations on or off."""
        self._update(auto_refresh=enabled)

    def submit(self, number1_text: str, number2_text: str, operation: str) -> SubmitOutcome:
        """
        Run one submit cycle.

        :param str number1_text: Raw text of the first operand
        :param str number2_text: Raw text of the second operand
        :param str operation: One of "+", "-", "*", "/"

        :return: How the cycle ended
        :rtype: SubmitOutcome
        """
        self._update(
            number1=number1_text,
            number2=number2_text,
            operation=operation,
            error=None,
            result=None,
        )

        try:
            request = OperandParser.build_request(number1_text, number2_text, operation)
        except OperandValidationError as exc:
            logger.info(f"✏️❌ Rejected input {number1_text!r} {operation!r} {number2_text!r}: {exc}")
            self._update(error=str(exc))
            return SubmitOutcome.VALIDATION_FAILED

        self._update(loading=True)
        try:
            response = self.client.calculate(request)
        except TransportError:
            self._update(error=SERVER_UNAVAILABLE)
            return SubmitOutcome.TRANSPORT_ERROR
        except BackendError as exc:
            self._update(error=exc.message or GENERIC_ERROR)
            return SubmitOutcome.BACKEND_ERROR
        finally:
            self._update(loading=False)

        self._update(result=response.result)
        if self.state.auto_refresh:
            self._history_refresh = self._executor.submit(self.fetch_history)
        return SubmitOutcome.SUCCESS

    def fetch_history(self) -> List[HistoryItem]:
        """
        Replace the history list with the service's current history.

        Failures are logged and leave an empty list; they never touch the calculation error.

        :return: The new history list
        :rtype: List[HistoryItem]
        """
        self._update(history_loading=True)
        try:
            try:
                history = self.client.history()
            except CalculatorError as exc:
                logger.warning(f"📜❌ History unavailable: {exc}")
                history = []
            self._update(history=history)
        finally:
            self._update(history_loading=False)
        return history

    def close(self) -> None:
        """Wait for a pending history refresh and release resources."""
        self._executor.shutdown(wait=True)
        self.client.close()

    def __enter__(self) -> "CalculatorForm":
        return self

    def __exit__(self, *args) -> None:
        self.close()
