"""Render the calculator form state as text."""
from typing import List

from lizzycalc_client.common.models import FormState, HistoryItem
from lizzycalc_client.common.parser import OPERATIONS

BUSY = "…"
EMPTY_HISTORY_HINT = "Press 'load history' or enable auto-refresh and calculate"


def format_number(value: float) -> str:
    """
    Format a number the way the form displays it: ``5`` rather than ``5.0``.

    :param float value: Number to format

    :return: Display text
    :rtype: str
    """
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def render_history_item(item: HistoryItem) -> str:
    """Render one history entry as ``2 + 3 = 5``."""
    return (
        f"{format_number(item.number1)} {item.operation} "
        f"{format_number(item.number2)} = {format_number(item.result)}"
    )


def render_form(state: FormState) -> List[str]:
    """Render the operands line, then the error and result lines when set."""
    symbol = OPERATIONS.get(state.operation, state.operation)
    button = BUSY if state.loading else "="
    lines = [f"{state.number1} {symbol} {state.number2} [{button}]"]
    if state.error:
        lines.append(state.error)
    if state.result is not None:
        lines.append(f"= {format_number(state.result)}")
    return lines


def render_history(state: FormState) -> List[str]:
    """Render the history section: a busy marker, the entries, or the empty hint."""
    auto = "on" if state.auto_refresh else "off"
    header = f"History (auto-refresh {auto})"
    if state.history_loading:
        header += f" {BUSY}"
    if not state.history:
        return [header, EMPTY_HISTORY_HINT]
    return [header] + [f"  {render_history_item(item)}" for item in state.history]
