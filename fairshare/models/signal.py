"""
Signal models - aggregated inputs and generated insights.

Signals never consume raw rows: builders only see DailyCategorySpend series
produced by the aggregation helpers.
"""

from typing import Any, Dict, Optional, Union
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, Field, PrivateAttr


class SignalType(str, Enum):
    TREND = "TREND"
    ANOMALY = "ANOMALY"
    VOLATILITY = "VOLATILITY"
    BUDGET_PRESSURE = "BUDGET_PRESSURE"
    BEHAVIOR_PATTERN = "BEHAVIOR_PATTERN"
    GROUP_IMBALANCE = "GROUP_IMBALANCE"
    FORECAST_RISK = "FORECAST_RISK"


class SignalSeverity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


SEVERITY_RANK = {
    SignalSeverity.HIGH: 0,
    SignalSeverity.MEDIUM: 1,
    SignalSeverity.LOW: 2,
}


class DailyCategorySpend(BaseModel):
    """One category, one calendar day (YYYY-MM-DD), in currency units."""
    date: str
    category: str
    total: float
    count: int = 0


class EWMAPoint(BaseModel):
    date: str
    actual: float
    ewma: float
    is_anomaly: bool = False

    # unrounded running average; ewma holds the 2 dp display value
    _smoothed: Optional[float] = PrivateAttr(default=None)

    @property
    def smoothed(self) -> float:
        return self.ewma if self._smoothed is None else self._smoothed


class Signal(BaseModel):
    type: SignalType
    user_id: str
    category: Optional[str] = None
    group_id: Optional[str] = None

    value: Union[float, str]
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    severity: SignalSeverity

    title: str
    message: str
    date_range: Optional[str] = None

    metadata: Dict[str, Any] = {}
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SignalSummary(BaseModel):
    total: int = 0
    by_type: Dict[str, int] = {}
    by_severity: Dict[str, int] = {}
    high_priority: int = 0
