"""
Threshold checks for commissioning tests.

Every CheckResult in a computed result is built here. The generic
primitives (check_range, check_maximum, check_condition) back the
one-off checks inside the test routines; the named checks wrap a
calculation primitive's output against a fixed or outdoor-adjusted band.
Failure messages always distinguish "too low" from "too high".
"""

from typing import Union

from fieldcx.config import (
    BUILDING_PRESSURE_RANGE,
    CFM_PER_TON_RANGE,
    DEFAULT_OUTDOOR_TEMP_F,
    NORMAL_OUTDOOR_RANGE_F,
    SUBCOOLING_RANGES,
    SUPERHEAT_RANGES,
    SUPPLY_DEW_POINT_RANGE,
)
from fieldcx.models.results import CheckResult


def format_number(value: float) -> str:
    """Shortest plain rendering: 0.02 stays 0.02, 8.0 becomes 8."""
    return f"{value:g}"


def range_target(minimum: float, maximum: float, unit: str) -> str:
    return f"{format_number(minimum)} - {format_number(maximum)}{unit}"


# ---------------------------------------------------------------------------
# Generic primitives
# ---------------------------------------------------------------------------

def check_range(
    value: float,
    minimum: float,
    maximum: float,
    unit: str,
    pass_message: str,
    low_message: str,
    high_message: str,
) -> CheckResult:
    """Pass when minimum <= value <= maximum (inclusive on both ends)."""
    passed = minimum <= value <= maximum
    if passed:
        message = pass_message
    elif value < minimum:
        message = low_message
    else:
        message = high_message

    return CheckResult(
        passed=passed,
        value=value,
        target=range_target(minimum, maximum, unit),
        message=message,
    )


def check_maximum(
    value: float,
    limit: float,
    target: str,
    pass_message: str,
    fail_message: str,
) -> CheckResult:
    """Pass when value <= limit."""
    passed = value <= limit
    return CheckResult(
        passed=passed,
        value=value,
        target=target,
        message=pass_message if passed else fail_message,
    )


def check_condition(
    passed: bool,
    value: Union[float, str],
    target: str,
    pass_message: str,
    fail_message: str,
) -> CheckResult:
    """Wrap an already-evaluated boolean observation (leak found, DRY, ...)."""
    return CheckResult(
        passed=passed,
        value=value,
        target=target,
        message=pass_message if passed else fail_message,
    )


# ---------------------------------------------------------------------------
# Named checks
# ---------------------------------------------------------------------------

def check_building_pressure(delta_p: float) -> CheckResult:
    """Building should be slightly positive relative to outdoors."""
    low, high = BUILDING_PRESSURE_RANGE
    return check_range(
        delta_p, low, high, " in. w.c.",
        pass_message="Building pressure within acceptable range",
        low_message="Building pressure too low - insufficient pressurization",
        high_message="Building pressure too high - over pressurized",
    )


def check_cfm_per_ton(cfm_per_ton: float) -> CheckResult:
    """Airflow per ton suitable for dehumidification."""
    low, high = CFM_PER_TON_RANGE
    return check_range(
        cfm_per_ton, low, high, " CFM/ton",
        pass_message="CFM/ton within acceptable range for dehumidification",
        low_message="CFM/ton too low - may indicate airflow restriction",
        high_message="CFM/ton too high - poor dehumidification performance",
    )


def check_supply_dew_point(supply_dp: float) -> CheckResult:
    low, high = SUPPLY_DEW_POINT_RANGE
    return check_range(
        supply_dp, low, high, "°F",
        pass_message="Supply dew point within acceptable range",
        low_message="Supply dew point too low - over-dehumidification",
        high_message="Supply dew point too high - insufficient dehumidification",
    )


def outdoor_condition(outdoor_temp: float) -> str:
    """Bucket the outdoor dry bulb: 'hot' above 100°F, 'cold' below 80°F."""
    cold_below, hot_above = NORMAL_OUTDOOR_RANGE_F
    if outdoor_temp > hot_above:
        return "hot"
    if outdoor_temp < cold_below:
        return "cold"
    return "normal"


def superheat_range(outdoor_temp: float = DEFAULT_OUTDOOR_TEMP_F) -> tuple[float, float]:
    return SUPERHEAT_RANGES[outdoor_condition(outdoor_temp)]


def subcooling_range(outdoor_temp: float = DEFAULT_OUTDOOR_TEMP_F) -> tuple[float, float]:
    return SUBCOOLING_RANGES[outdoor_condition(outdoor_temp)]


def check_superheat(superheat: float, outdoor_temp: float = DEFAULT_OUTDOOR_TEMP_F) -> CheckResult:
    """
    Superheat against a band that narrows and drops in hot weather and
    widens upward in cold weather. The three-step band is a coarse stand-in
    for a manufacturer charging curve.
    """
    low, high = superheat_range(outdoor_temp)
    return check_range(
        superheat, low, high, "°F",
        pass_message="Superheat within acceptable range",
        low_message="Superheat too low - possible refrigerant overcharge or TXV issues",
        high_message="Superheat too high - possible refrigerant undercharge or restriction",
    )


def check_subcooling(subcooling: float, outdoor_temp: float = DEFAULT_OUTDOOR_TEMP_F) -> CheckResult:
    """Subcooling against a band that rises in hot weather and drops in cold."""
    low, high = subcooling_range(outdoor_temp)
    return check_range(
        subcooling, low, high, "°F",
        pass_message="Subcooling within acceptable range",
        low_message="Subcooling too low - possible refrigerant undercharge",
        high_message="Subcooling too high - possible refrigerant overcharge or restriction",
    )
