"""
Refrigerant saturation temperature lookup.

These are engineering approximations, not refrigerant property tables:
R-410A uses a four-segment piecewise-linear fit in PSIG and any other
refrigerant falls back to a single generic line. Field commissioning
tolerances absorb the error; certification-grade diagnostics would need
real tables, which can be plugged in through register_curve() without
touching the test routines.
"""

from abc import ABC, abstractmethod

from fieldcx.config import DEFAULT_REFRIGERANT


class SaturationCurve(ABC):
    """Maps a gauge pressure (PSIG) to a saturation temperature (°F)."""

    @abstractmethod
    def saturation_temp(self, pressure_psig: float) -> float:
        ...


class LinearCurve(SaturationCurve):
    """Tsat = intercept + slope × P."""

    def __init__(self, intercept: float, slope: float):
        self.intercept = intercept
        self.slope = slope

    def saturation_temp(self, pressure_psig: float) -> float:
        return self.intercept + self.slope * pressure_psig


class PiecewiseLinearCurve(SaturationCurve):
    """
    Piecewise-linear curve defined by segments of
    (upper_pressure, base_temp, base_pressure, slope).

    A pressure falls in the first segment whose upper bound it does not
    exceed; the last segment should use float("inf") as its upper bound.
    """

    def __init__(self, segments: list[tuple[float, float, float, float]]):
        if not segments:
            raise ValueError("PiecewiseLinearCurve needs at least one segment")
        self.segments = segments

    def saturation_temp(self, pressure_psig: float) -> float:
        for upper, base_temp, base_pressure, slope in self.segments:
            if pressure_psig <= upper:
                return base_temp + (pressure_psig - base_pressure) * slope
        _, base_temp, base_pressure, slope = self.segments[-1]
        return base_temp + (pressure_psig - base_pressure) * slope


R410A_CURVE = PiecewiseLinearCurve([
    (50.0, -20.0, 0.0, 1.6),
    (100.0, 60.0, 50.0, 1.2),
    (200.0, 120.0, 100.0, 0.8),
    (float("inf"), 200.0, 200.0, 0.4),
])

GENERIC_CURVE = LinearCurve(intercept=32.0, slope=0.5)

_CURVES: dict[str, SaturationCurve] = {
    "R-410A": R410A_CURVE,
}


def _normalize_name(refrigerant: str) -> str:
    """'r410a', 'R410A' and ' R-410A ' all become 'R-410A'."""
    name = refrigerant.strip().upper()
    if name.startswith("R") and not name.startswith("R-"):
        name = "R-" + name[1:]
    return name


def register_curve(refrigerant: str, curve: SaturationCurve) -> None:
    """Register (or replace) the saturation curve for a refrigerant."""
    _CURVES[_normalize_name(refrigerant)] = curve


def get_saturation_curve(refrigerant: str = DEFAULT_REFRIGERANT) -> SaturationCurve:
    """Return the curve for a refrigerant, or the generic curve if unknown."""
    return _CURVES.get(_normalize_name(refrigerant), GENERIC_CURVE)


def get_saturation_temp(pressure_psig: float, refrigerant: str = DEFAULT_REFRIGERANT) -> float:
    """Saturation temperature (°F) at a gauge pressure (PSIG)."""
    return get_saturation_curve(refrigerant).saturation_temp(pressure_psig)
