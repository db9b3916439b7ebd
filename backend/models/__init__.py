"""
Backend models package.
"""

from backend.models.request import AnalysisRequest, ExistingLineModel
from backend.models.response import AnalysisResponse, CableTypeResponse

__all__ = [
    "AnalysisRequest",
    "ExistingLineModel",
    "AnalysisResponse",
    "CableTypeResponse",
]
