"""
Test result computation engine entry point.

Maps (test type, reading, weather) to a ComputedResult. Deterministic and
side-effect free: no I/O, no clock, no shared mutable state, so calls may
run concurrently without coordination.
"""

import logging
from collections.abc import Mapping
from typing import Optional, Union

from fieldcx.engine.routines.base import ComputationRoutine
from fieldcx.engine.routines.envelope import (
    BuildingPressureRoutine,
    PressureDecayRoutine,
    ReturnCurbLeakageRoutine,
    SlabWallMoistureRoutine,
)
from fieldcx.engine.routines.hvac import (
    AirflowStaticRoutine,
    CoilPerformanceRoutine,
    DistributionMixingRoutine,
    EconomizerSealRoutine,
    FanEvapRecheckRoutine,
    RefrigerantCircuitRoutine,
)
from fieldcx.errors import ReadingMismatchError
from fieldcx.models.readings import Reading, TestType, coerce_test_type
from fieldcx.models.results import ComputedResult, WeatherContext

logger = logging.getLogger(__name__)

# Routine dispatch table, one routine per test type
_ROUTINES: dict[TestType, ComputationRoutine] = {
    routine.test_type: routine
    for routine in (
        BuildingPressureRoutine(),
        PressureDecayRoutine(),
        ReturnCurbLeakageRoutine(),
        SlabWallMoistureRoutine(),
        AirflowStaticRoutine(),
        RefrigerantCircuitRoutine(),
        CoilPerformanceRoutine(),
        FanEvapRecheckRoutine(),
        EconomizerSealRoutine(),
        DistributionMixingRoutine(),
    )
}

_unrouted = set(TestType) - set(_ROUTINES)
if _unrouted:
    raise RuntimeError(
        "No computation routine for test types: "
        + ", ".join(sorted(t.value for t in _unrouted))
    )


def get_routine(test_type) -> ComputationRoutine:
    """Return the routine for a test type; UnknownTestTypeError if there is none."""
    return _ROUTINES[coerce_test_type(test_type)]


def compute_test_result(
    test_type: Union[TestType, str],
    reading: Union[Reading, Mapping],
    weather: Optional[Union[WeatherContext, Mapping]] = None,
) -> ComputedResult:
    """
    Compute calculations, checks, verdict, and summary for one test reading.

    Args:
        test_type: TestType or its string value.
        reading: The typed reading for that test type. A raw mapping is
            validated against the test type's schema first.
        weather: Outdoor conditions from the session, if recorded.

    Raises:
        UnknownTestTypeError: test_type is not a recognised value.
        ReadingMismatchError: a typed reading belongs to another test type.
        pydantic.ValidationError: a raw mapping fails schema validation.
    """
    routine = get_routine(test_type)

    if isinstance(reading, Mapping):
        reading = routine.reading_model.model_validate(reading)
    elif not isinstance(reading, routine.reading_model):
        raise ReadingMismatchError(
            f"{type(reading).__name__} is not a reading for {routine.test_type.value}"
        )

    if weather is None:
        weather = WeatherContext()
    elif isinstance(weather, Mapping):
        weather = WeatherContext.model_validate(weather)

    result = routine.compute(reading, weather)
    logger.debug(
        "Computed %s: pass=%s, %d check(s)",
        routine.test_type.value, result.passed, len(result.checks),
    )
    return result
