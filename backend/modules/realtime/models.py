"""
Realtime module data models.
"""

from enum import Enum
from pydantic import BaseModel, Field


class ChangeOperation(str, Enum):
    """Row operation reported by the change transport."""

    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: object) -> "ChangeOperation":
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.UNKNOWN


class ChangeEvent(BaseModel):
    """One row-level change; carries no row payload."""

    table: str
    operation: ChangeOperation = ChangeOperation.UNKNOWN

    model_config = {"frozen": True}


class ChangeSignal(BaseModel):
    """
    Coalesced "something changed" tick.

    ``changed_at`` strictly increases from one signal to the next.
    """

    changed_at: float = Field(..., description="Epoch seconds of the change tick")
    sequence: int = Field(..., ge=1, description="Signal counter")
    event_count: int = Field(default=1, ge=1, description="Events folded into this tick")

    model_config = {"frozen": True}


class AggregatorStatus(BaseModel):
    """Subscription health reported to stream consumers."""

    tables: list[str]
    failed_tables: dict[str, str] = Field(default_factory=dict)
    degraded: bool = False
