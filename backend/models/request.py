"""
Request models for the analysis API.

Height fields accept either a number of decimal feet or any height string
the engine understands ("35'6\"", "35ft 6in", "15.5").
"""

from pydantic import BaseModel, Field
from typing import Literal, Optional, List, Dict, Any, Union

Height = Optional[Union[float, str]]


class ExistingLineModel(BaseModel):
    """Existing attachment on the pole."""
    type: str = Field("", description="Line type, e.g. 'communication', 'neutral', 'drop'")
    height: Height = Field("", description="Height as found")
    company_name: str = Field("", description="Owning company")
    make_ready: bool = Field(False, description="Line will be moved")
    make_ready_height: Height = Field("", description="Height after make-ready")


class AnalysisRequest(BaseModel):
    """Request model for the analysis endpoint."""
    pole_height: Height = Field(None, description="Overall pole length")
    pole_class: str = ""
    pole_latitude: Optional[float] = None
    pole_longitude: Optional[float] = None
    adjacent_pole_height: Height = None
    adjacent_pole_latitude: Optional[float] = None
    adjacent_pole_longitude: Optional[float] = None
    adjacent_existing_power_height: Height = None
    adjacent_proposed_attach_ft: Height = None
    existing_power_height: Height = Field(None, description="Lowest power conductor height")
    existing_power_voltage: Literal["communication", "distribution", "transmission"] = "distribution"
    span_distance: Height = Field(None, description="Span to the adjacent pole, ft")
    is_new_construction: bool = False
    attachment_type: str = Field("communication", description="Cable catalog key")
    cable_diameter: Optional[float] = Field(None, description="Overrides the catalog diameter, in")
    wind_speed: Optional[float] = Field(None, description="Wind speed, mph (default 90)")
    ice_thickness_in: Optional[float] = None
    span_environment: str = "road"
    drip_loop_height: Height = None
    street_light_height: Height = None
    street_light_drip_loop_height: Height = None
    transformer_bottom_height: Height = None
    has_transformer: bool = False
    existing_lines: List[ExistingLineModel] = []
    preset_profile: Optional[str] = Field(None, description="Named utility preset key")
    submission_profile: Optional[Dict[str, Any]] = Field(None, description="Per-job clearance targets")
    custom_min_top_space: Height = None
    custom_road_clearance: Height = None
    custom_comm_to_power: Height = None
    power_reference: Literal["auto", "power", "dripLoop", "neutral", "secondary"] = "auto"
    job_owner: str = ""
    pull_direction_deg: Optional[float] = None
    incoming_bearing_deg: Optional[float] = None
    outgoing_bearing_deg: Optional[float] = None
