"""Pydantic models for calculation requests, responses and history items."""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Operation = Literal["+", "-", "*", "/"]


class CalculationRequest(BaseModel):
    """Represents a single calculation sent to the service. Built fresh per submit."""

    model_config = ConfigDict(frozen=True)

    number1: float = Field(..., allow_inf_nan=False, description="First operand")
    number2: float = Field(..., allow_inf_nan=False, description="Second operand")
    operation: Operation = Field(..., description="Arithmetic operator")


class CalculationResponse(BaseModel):
    """Body returned by the calculate endpoint, on success or failure."""

    result: Optional[float] = Field(default=None, description="Computed value on success")
    message: Optional[str] = Field(default=None, description="Backend message, mostly on failure")


class HistoryItem(BaseModel):
    """A past calculation recorded by the service."""

    id: int = Field(..., description="Identifier assigned by the service")
    number1: float
    number2: float
    operation: str
    result: float
    # Reserved by the service; kept as-is and never displayed
    message: str = ""
    timestamp: str = Field(..., description="ISO-8601 timestamp, kept unparsed")


class HistoryResponse(BaseModel):
    """Body returned by the history endpoint."""

    items: Optional[List[HistoryItem]] = None


class FormState(BaseModel):
    """
    Mutable UI state of one calculator form session.

    Result and error are cleared independently; nothing forces them to be exclusive.
    """

    model_config = ConfigDict(validate_assignment=True)

    number1: str = ""
    number2: str = ""
    operation: str = "+"
    result: Optional[float] = None
    error: Optional[str] = None
    history: List[HistoryItem] = Field(default_factory=list)
    loading: bool = False
    history_loading: bool = False
    auto_refresh: bool = False
