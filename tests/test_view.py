"""Test the text rendering of the form state."""
import pytest

from lizzycalc_client.common.models import FormState, HistoryItem
from lizzycalc_client.form.view import (
    BUSY,
    EMPTY_HISTORY_HINT,
    format_number,
    render_form,
    render_history,
    render_history_item,
)


@pytest.mark.parametrize("value,expected", [
    (5.0, "5"),
    (-3.0, "-3"),
    (0.0, "0"),
    (2.5, "2.5"),
    (0.1 + 0.2, "0.30000000000000004"),
    (1e16, "10000000000000000"),
    (1e20, "100000000000000000000"),
    (1e21, "1e+21"),
    (-1e22, "-1e+22"),
])
def test_format_number(value, expected):
    """Integral values drop the trailing '.0'; others keep full precision."""
    assert format_number(value) == expected


def test_render_form_result():
    """A result shows as '= 5' under the operands line."""
    state = FormState(number1="2", number2="3", operation="*", result=5.0)
    assert render_form(state) == ["2 × 3 [=]", "= 5"]


def test_render_form_error():
    """An error shows verbatim; no result line without a result."""
    state = FormState(number1="1", number2="0", operation="/", error="division by zero")
    assert render_form(state) == ["1 / 0 [=]", "division by zero"]


def test_render_form_busy():
    """While loading, the button shows the busy marker."""
    state = FormState(number1="1", number2="2", loading=True)
    assert render_form(state)[0] == f"1 + 2 [{BUSY}]"


def test_render_history_item():
    """A history entry renders as '2 + 3 = 5'."""
    item = HistoryItem(id=1, number1=2, number2=3, operation="+", result=5, timestamp="2024-01-01T00:00:00Z")
    assert render_history_item(item) == "2 + 3 = 5"


def test_render_history_entries():
    """History entries keep the order they were received in."""
    items = [
        HistoryItem(id=2, number1=4, number2=2, operation="/", result=2, timestamp="t2"),
        HistoryItem(id=1, number1=2, number2=3, operation="+", result=5, timestamp="t1"),
    ]
    state = FormState(history=items, auto_refresh=True)
    assert render_history(state) == ["History (auto-refresh on)", "  4 / 2 = 2", "  2 + 3 = 5"]


def test_render_history_empty_hint():
    """An empty history shows the hint, with the busy marker while loading."""
    state = FormState(history_loading=True)
    assert render_history(state) == [f"History (auto-refresh off) {BUSY}", EMPTY_HISTORY_HINT]
