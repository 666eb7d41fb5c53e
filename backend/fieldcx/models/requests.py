"""
Pydantic models for the test computation API.

The test type is accepted as a plain string so that an unrecognised value
reaches the engine and is reported as an unknown test type rather than a
generic enum validation error.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fieldcx.models.results import ComputedResult, WeatherContext


class ComputeRequest(BaseModel):
    """Input for a one-off computation of a test reading."""

    test_type: str
    reading: dict
    weather: Optional[WeatherContext] = None


class ResultCreate(BaseModel):
    """Input for recording a test result against a session."""

    session_id: Optional[str] = None
    unit_label: Optional[str] = None
    test_type: str
    reading: dict
    weather: Optional[WeatherContext] = Field(
        None, description="Outdoor conditions recorded on the parent session"
    )
    notes: Optional[str] = None


class ResultResponse(BaseModel):
    """A recorded test result; computed and pass stay empty when computation failed."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = None
    unit_label: Optional[str] = None
    test_type: str
    reading: dict
    computed: Optional[ComputedResult] = None
    passed: Optional[bool] = Field(None, alias="pass")
    notes: Optional[str] = None
