"""
Building envelope test routines.

Building pressure, pressure decay, return/curb leakage, and slab/wall
moisture. None of these depend on outdoor conditions.
"""

from fieldcx.config import MAX_DECAY_RATE_INWC_PER_MIN, MAX_RETURN_SUPPLY_DIFF_INWC
from fieldcx.engine.calculations import calculate_pressure_decay_rate
from fieldcx.engine.checks import (
    check_building_pressure,
    check_condition,
    check_maximum,
    format_number,
)
from fieldcx.engine.routines.base import ComputationRoutine, build_result
from fieldcx.models.readings import (
    BuildingPressureReading,
    PlasticTestResult,
    PressureDecayReading,
    ReturnCurbLeakageReading,
    SlabWallMoistureReading,
    TestType,
)
from fieldcx.models.results import ComputedResult, WeatherContext


class BuildingPressureRoutine(ComputationRoutine):
    test_type = TestType.BUILDING_PRESSURE
    reading_model = BuildingPressureReading

    def compute(self, reading: BuildingPressureReading, weather: WeatherContext) -> ComputedResult:
        check = check_building_pressure(reading.deltaP_inwc)

        return build_result(
            calculations={"pressure_inwc": reading.deltaP_inwc},
            checks={"building_pressure": check},
            summary=check.message,
        )


class PressureDecayRoutine(ComputationRoutine):
    test_type = TestType.PRESSURE_DECAY
    reading_model = PressureDecayReading

    def compute(self, reading: PressureDecayReading, weather: WeatherContext) -> ComputedResult:
        decay_rate = calculate_pressure_decay_rate(
            reading.startDeltaP, reading.endDeltaP, reading.decaySeconds
        )
        total_decay = reading.startDeltaP - reading.endDeltaP
        decay_pct = total_decay / reading.startDeltaP * 100.0 if reading.startDeltaP != 0 else 0.0

        limit = MAX_DECAY_RATE_INWC_PER_MIN
        check = check_maximum(
            decay_rate, limit,
            target=f"≤ {format_number(limit)} in. w.c./min",
            pass_message="Pressure decay within acceptable limits",
            fail_message="Excessive pressure decay - check for envelope leaks",
        )

        verdict = "is acceptable" if check.passed else "exceeds limit"
        return build_result(
            calculations={
                "decay_rate_per_min": decay_rate,
                "total_decay_inwc": total_decay,
                "decay_percentage": decay_pct,
            },
            checks={"decay_rate": check},
            summary=f"Pressure decay rate of {decay_rate:.4f} in. w.c./min {verdict}",
        )


class ReturnCurbLeakageRoutine(ComputationRoutine):
    test_type = TestType.RETURN_CURB_LEAKAGE
    reading_model = ReturnCurbLeakageReading

    def compute(self, reading: ReturnCurbLeakageReading, weather: WeatherContext) -> ComputedResult:
        pressure_diff = abs(reading.returnStatic_inwc - reading.supplyStatic_inwc)

        limit = MAX_RETURN_SUPPLY_DIFF_INWC
        balance_check = check_maximum(
            pressure_diff, limit,
            target=f"≤ {format_number(limit)} in. w.c.",
            pass_message="Return/supply pressure difference within limits",
            fail_message="Excessive pressure imbalance detected",
        )

        locations = ", ".join(reading.leakLocations or []) or "unspecified locations"
        leak_check = check_condition(
            not reading.smokeLeaksFound,
            "FOUND" if reading.smokeLeaksFound else "NONE",
            target="NONE",
            pass_message="No smoke leaks detected",
            fail_message=f"Smoke leaks found at: {locations}",
        )

        passed = balance_check.passed and leak_check.passed
        return build_result(
            calculations={
                "return_static_inwc": reading.returnStatic_inwc,
                "supply_static_inwc": reading.supplyStatic_inwc,
                "pressure_difference_inwc": pressure_diff,
            },
            checks={"pressure_balance": balance_check, "smoke_leaks": leak_check},
            summary=(
                "Return/curb leakage test passed" if passed
                else "Return/curb leakage issues detected"
            ),
        )


class SlabWallMoistureRoutine(ComputationRoutine):
    test_type = TestType.SLAB_WALL_MOISTURE
    reading_model = SlabWallMoistureReading

    def compute(self, reading: SlabWallMoistureReading, weather: WeatherContext) -> ComputedResult:
        observed = reading.plasticTest.value.lower()
        check = check_condition(
            reading.plasticTest == PlasticTestResult.DRY,
            reading.plasticTest.value,
            target=PlasticTestResult.DRY.value,
            pass_message="No moisture issues detected under plastic test",
            fail_message=f"Moisture detected: {observed}",
        )

        return build_result(
            calculations={},
            checks={"plastic_test": check},
            summary=(
                "No moisture issues detected" if check.passed
                else f"Moisture issues detected: {observed}"
            ),
        )
