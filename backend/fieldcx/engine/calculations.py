"""
HVAC calculation primitives for commissioning tests.

Pure numeric functions: no pass/fail judgment, no exceptions. Each
degenerate input (zero tons, zero elapsed time, empty sample set, 0% RH,
equal return/outside temperatures) maps to a defined value instead.

Psychrometrics here use the Magnus approximation rather than full
ASHRAE formulations; results are field estimates.
"""

import math

import numpy as np

from fieldcx.config import DEFAULT_REFRIGERANT
from fieldcx.engine.refrigerant import get_saturation_temp

# Magnus coefficients (Alduchov & Eskridge), valid roughly -40..50 °C
_MAGNUS_A = 17.625
_MAGNUS_B = 243.04      # °C
_MAGNUS_C = 0.61094     # kPa

_KPA_TO_PSI = 0.1450377
_ATM_PSIA = 14.696
_MIN_RH_PCT = 0.01      # log(0) guard for dew point


def _f_to_c(temp_f: float) -> float:
    return (temp_f - 32.0) * 5.0 / 9.0


def _c_to_f(temp_c: float) -> float:
    return temp_c * 9.0 / 5.0 + 32.0


def calculate_dew_point(temp_f: float, rh: float) -> float:
    """
    Dew point (°F) from dry bulb (°F) and relative humidity (%).

    RH is clamped to [0.01, 100] so that 0% does not hit log(0).
    """
    rh = min(max(rh, _MIN_RH_PCT), 100.0)
    temp_c = _f_to_c(temp_f)

    gamma = math.log(rh / 100.0) + (_MAGNUS_A * temp_c) / (_MAGNUS_B + temp_c)
    dew_point_c = (_MAGNUS_B * gamma) / (_MAGNUS_A - gamma)

    return _c_to_f(dew_point_c)


def calculate_cfm_per_ton(cfm: float, tons: float) -> float:
    """Airflow per ton of capacity; 0 when tons is 0."""
    if tons == 0:
        return 0.0
    return cfm / tons


def calculate_superheat(
    suction_line_temp: float,
    suction_pressure: float,
    refrigerant: str = DEFAULT_REFRIGERANT,
) -> float:
    """Superheat (°F): suction line temperature above saturation."""
    return suction_line_temp - get_saturation_temp(suction_pressure, refrigerant)


def calculate_subcooling(
    liquid_line_temp: float,
    liquid_pressure: float,
    refrigerant: str = DEFAULT_REFRIGERANT,
) -> float:
    """Subcooling (°F): saturation temperature above the liquid line."""
    return get_saturation_temp(liquid_pressure, refrigerant) - liquid_line_temp


def calculate_pressure_decay_rate(
    start_pressure: float,
    end_pressure: float,
    time_seconds: float,
) -> float:
    """Decay rate in in. w.c. per minute; 0 when no time elapsed."""
    if time_seconds == 0:
        return 0.0
    return (start_pressure - end_pressure) / time_seconds * 60.0


def calculate_stats(values: list[float]) -> dict:
    """
    Min, max, mean and population standard deviation of a sample set.

    An empty set returns all zeros.
    """
    if len(values) == 0:
        return {"min": 0.0, "max": 0.0, "avg": 0.0, "std_dev": 0.0}

    arr = np.asarray(values, dtype=float)
    return {
        "min": float(arr.min()),
        "max": float(arr.max()),
        "avg": float(arr.mean()),
        "std_dev": float(arr.std()),  # ddof=0
    }


def calculate_economizer_effectiveness(
    mixed_air_temp: float,
    return_air_temp: float,
    outside_air_temp: float,
) -> float:
    """
    Outside-air fraction implied by the mixed-air temperature, as a
    percentage clamped to [0, 100].

    Equal return and outside temperatures give 100.
    """
    if return_air_temp == outside_air_temp:
        return 100.0

    effectiveness = (return_air_temp - mixed_air_temp) / (return_air_temp - outside_air_temp) * 100.0
    return max(0.0, min(100.0, effectiveness))


def get_saturation_pressure(temp_f: float) -> float:
    """Water vapor saturation pressure (psia) over liquid water, Magnus form."""
    temp_c = _f_to_c(temp_f)
    pws_kpa = _MAGNUS_C * math.exp(_MAGNUS_A * temp_c / (_MAGNUS_B + temp_c))
    return pws_kpa * _KPA_TO_PSI


def calculate_enthalpy(temp_f: float, rh: float) -> float:
    """
    Moist air enthalpy (BTU/lb dry air) at sea-level pressure.

    Vapor pressure is taken as the saturation pressure at the dew point;
    good to a few tenths of a BTU/lb over the comfort range.
    """
    pv = get_saturation_pressure(calculate_dew_point(temp_f, rh))
    humidity_ratio = 0.622 * pv / (_ATM_PSIA - pv)

    return 0.24 * temp_f + humidity_ratio * (1061.0 + 0.444 * temp_f)
