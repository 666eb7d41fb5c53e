"""
Pydantic models for stored test results and session-level statistics.

These mirror what the persistence layer hands back: a raw reading, the
computed result when computation succeeded, and the verdict.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fieldcx.models.readings import TestType
from fieldcx.models.results import ComputedResult


class HvacUnitInfo(BaseModel):
    label: str
    make: Optional[str] = None
    model: Optional[str] = None
    tons: Optional[float] = None
    refrigerant: Optional[str] = None


class ResultRecord(BaseModel):
    """One test result as stored against a session."""

    model_config = ConfigDict(populate_by_name=True)

    test_type: TestType
    unit_label: Optional[str] = None
    reading: dict = Field(default_factory=dict)
    computed: Optional[ComputedResult] = None
    passed: Optional[bool] = Field(None, alias="pass")  # None = pending
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    def verdict(self) -> Optional[bool]:
        """Stored verdict, falling back to the computed one."""
        if self.passed is not None:
            return self.passed
        if self.computed is not None:
            return self.computed.passed
        return None


class SessionStatistics(BaseModel):
    tests_by_type: dict[str, int] = Field(default_factory=dict)
    passed: int = 0
    failed: int = 0
    pending: int = 0
    completion_rate: int = 0          # % of tests with a verdict
    attention_items: list[str] = Field(default_factory=list)
