"""
Pydantic models for the computed result of a commissioning test.

`pass` is a Python keyword, so the verdict lives on the `passed` attribute
and is serialized under the "pass" key.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class WeatherContext(BaseModel):
    """Outdoor conditions recorded on the parent session."""

    outdoorTemp: Optional[float] = None  # °F dry bulb
    outdoorRH: Optional[float] = None    # %


class CheckResult(BaseModel):
    """Pass/fail judgment of one measured or derived quantity."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    passed: bool = Field(alias="pass")
    value: Union[float, str]
    target: str     # human-readable acceptable range
    message: str    # explanation of the pass or the specific failure mode


class ComputedResult(BaseModel):
    """Derived quantities, named checks, and the overall verdict of one test."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    calculations: dict[str, float] = Field(default_factory=dict)
    checks: dict[str, CheckResult] = Field(default_factory=dict)
    passed: bool = Field(alias="pass")
    summary: str
