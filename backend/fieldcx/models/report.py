"""
Pydantic models for commissioning report generation.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from fieldcx.models.results import WeatherContext
from fieldcx.models.session import HvacUnitInfo, ResultRecord


class SessionReportInput(BaseModel):
    """Everything needed to render the PDF report for one test session."""

    title: str = "HVAC Commissioning Report"

    organization: str
    project: str
    project_address: Optional[str] = None
    area: str
    area_sqft: Optional[int] = None

    session_title: Optional[str] = None
    engineer: str
    engineer_email: Optional[str] = None
    started_at: datetime
    status: str = "COMPLETED"
    weather: WeatherContext = Field(default_factory=WeatherContext)

    units: list[HvacUnitInfo] = Field(default_factory=list)
    tests: list[ResultRecord] = Field(default_factory=list)

    notes: Optional[str] = Field(
        None, description="Session notes printed under Notes & Recommendations"
    )
    recommendations: list[str] = Field(default_factory=list)
