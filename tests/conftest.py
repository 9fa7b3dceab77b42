"""Shared fixtures standing in for the calculation service."""
from typing import Any, Callable, Tuple

import pytest
import requests

from fakes import FakeSession
from lizzycalc_client.client.client import CalculatorClient


@pytest.fixture
def make_client(monkeypatch) -> Callable[..., Tuple[CalculatorClient, FakeSession]]:
    """Build a CalculatorClient whose sessions, in every thread, are one shared FakeSession."""

    def _make(*answers: Any, **client_kwargs: Any) -> Tuple[CalculatorClient, FakeSession]:
        session = FakeSession(*answers)
        monkeypatch.setattr(requests, "Session", lambda: session)
        return CalculatorClient(**client_kwargs), session

    return _make
