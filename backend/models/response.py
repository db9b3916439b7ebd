"""
Response models for the analysis API.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


class AnalysisResponse(BaseModel):
    """Complete analysis response (mirrors compute_analysis)."""
    ok: bool
    results: Optional[Dict[str, Any]] = Field(None, description="Pole, attach, span, clearances, make-ready, guy")
    warnings: List[str] = []
    notes: List[str] = []
    cost: Optional[float] = Field(None, description="Scenario/condition adders plus make-ready total, USD")
    errors: Dict[str, str] = {}


class CableTypeResponse(BaseModel):
    """Cable catalog entry."""
    key: str
    label: str
    weight: float
    tension: float
    diameter: float
