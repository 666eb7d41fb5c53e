"""
Abstract base class for per-test-type computation routines.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from fieldcx.models.readings import TestType
from fieldcx.models.results import CheckResult, ComputedResult, WeatherContext


class ComputationRoutine(ABC):
    """Base class for all test routines: typed reading in, computed result out."""

    test_type: TestType
    reading_model: type[BaseModel]

    @abstractmethod
    def compute(self, reading, weather: WeatherContext) -> ComputedResult:
        """Derive calculations and checks from a reading."""
        ...


def build_result(
    calculations: dict[str, float],
    checks: dict[str, CheckResult],
    summary: str,
) -> ComputedResult:
    """Assemble a ComputedResult whose verdict is the AND of every check."""
    return ComputedResult(
        calculations=calculations,
        checks=checks,
        passed=all(check.passed for check in checks.values()),
        summary=summary,
    )
