from pydantic import BaseModel
from datetime import datetime
from typing import Dict, List

from fairshare.models.signal import EWMAPoint, Signal, SignalSummary


class AnalyzeResponse(BaseModel):
    success: bool = True
    user_id: str
    generated_at: datetime
    summary: SignalSummary
    signals: List[Signal]
    chart_data: Dict[str, List[EWMAPoint]]
