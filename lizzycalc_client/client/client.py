"""HTTP client for the calculation service."""
import threading
from typing import Any, List, Optional

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, PrivateAttr, ValidationError
import requests

from lizzycalc_client.common.errors import BackendError, TransportError
from lizzycalc_client.common.logger import logger
from lizzycalc_client.common.models import (
    CalculationRequest,
    CalculationResponse,
    HistoryItem,
    HistoryResponse,
)

CALCULATE_PATH = "/api/v1/calculate"
HISTORY_PATH = "/api/v1/history"


class CalculatorClient(BaseModel):
    """
    HTTP client responsible for sending calculations to the service and reading its history.

    The HTTP client:
    - posts a calculation as a JSON body and returns the parsed response
    - reads the list of past calculations
    - turns connection failures into TransportError and non-2xx answers into BackendError
    """

    # Make the Pydantic instance immutable (read-only), so the target service
    # cannot change while requests are in flight.
    model_config = ConfigDict(frozen=True)

    base_url: AnyHttpUrl = Field(default="http://127.0.0.1:8080", description="Service base URL")
    timeout: Optional[float] = Field(default=None, gt=0, description="Request timeout in seconds, None waits forever")

    # One session per thread: requests does not guarantee a Session is thread-safe
    _local: threading.local = PrivateAttr(default_factory=threading.local)
    _sessions: List[requests.Session] = PrivateAttr(default_factory=list)
    _sessions_lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    def _session(self) -> requests.Session:
        """Return the session of the calling thread, creating it on first use."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._sessions_lock:
                self._sessions.append(session)
        return session

    def _url(self, path: str) -> str:
        """Join the base URL and an endpoint path."""
        return str(self.base_url).rstrip("/") + path

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        """
        Send a request, turning transport failures into TransportError.

        :param str method: HTTP method
        :param str path: Endpoint path

        :return: The response, whatever its status
        :rtype: requests.Response
        :raises TransportError: If the request could not be completed
        """
        url = self._url(path)
        try:
            return self._session().request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error(f"🔌❌ {method} {url} failed: {exc}")
            raise TransportError(str(exc)) from exc

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        """Return the JSON body, or None if the body is not JSON."""
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _check_status(response: requests.Response, payload: Any) -> None:
        """
        Raise BackendError if the response status is not 2xx.

        :raises BackendError: On any non-success status
        """
        if 200 <= response.status_code < 300:
            return
        message = None
        if isinstance(payload, dict) and payload.get("message"):
            message = str(payload["message"])
        logger.warning(f"🧮❌ Service answered {response.status_code}: {message!r}")
        raise BackendError(response.status_code, message)

    def calculate(self, request: CalculationRequest) -> CalculationResponse:
        """
        Post a calculation to the service.

        :param CalculationRequest request: Operands and operation

        :return: Parsed success body
        :rtype: CalculationResponse
        :raises TransportError: If the service is unreachable or its success body is unreadable
        :raises BackendError: If the service answers with a non-2xx status
        """
        logger.info(f"🧮 Sending {request.number1} {request.operation} {request.number2}")
        response = self._send("POST", CALCULATE_PATH, json=request.model_dump())
        payload = self._decode(response)
        self._check_status(response, payload)

        try:
            result = CalculationResponse.model_validate(payload)
        except ValidationError as exc:
            raise TransportError(f"Malformed calculate response: {exc}") from exc
        if result.result is None:
            raise TransportError("Calculate response has no result")

        logger.info(f"🧮✅ Result: {result.result}")
        return result

    def history(self) -> List[HistoryItem]:
        """
        Read past calculations, in the order the service returns them.

        :return: History items, empty when the service has none
        :rtype: List[HistoryItem]
        :raises TransportError: If the service is unreachable or its body is unreadable
        :raises BackendError: If the service answers with a non-2xx status
        """
        response = self._send("GET", HISTORY_PATH)
        payload = self._decode(response)
        self._check_status(response, payload)

        try:
            body = HistoryResponse.model_validate(payload)
        except ValidationError as exc:
            raise TransportError(f"Malformed history response: {exc}") from exc

        items = body.items or []
        logger.info(f"📜 Loaded {len(items)} history items")
        return items

    def close(self) -> None:
        """Release the pooled connections of every thread's session."""
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
