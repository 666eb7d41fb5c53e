"""
HVAC equipment test routines.

Airflow & static, refrigerant circuit, coil performance, fan/evap recheck,
economizer seal, and distribution & mixing. The refrigerant circuit is the
only routine whose acceptance bands depend on outdoor conditions.
"""

from typing import Optional

from fieldcx.config import (
    DEFAULT_OUTDOOR_TEMP_F,
    MAX_DAMPER_POSITION_PCT,
    MAX_MIXING_RH_VARIATION_PCT,
    MAX_MIXING_TEMP_VARIATION_F,
    STATIC_PRESSURE_RANGE,
    TEMPERATURE_DROP_RANGE,
)
from fieldcx.engine.calculations import (
    calculate_cfm_per_ton,
    calculate_dew_point,
    calculate_economizer_effectiveness,
    calculate_enthalpy,
    calculate_stats,
    calculate_subcooling,
    calculate_superheat,
)
from fieldcx.engine.checks import (
    check_cfm_per_ton,
    check_condition,
    check_maximum,
    check_range,
    check_subcooling,
    check_superheat,
    check_supply_dew_point,
    format_number,
)
from fieldcx.engine.routines.base import ComputationRoutine, build_result
from fieldcx.models.readings import (
    AirflowStaticReading,
    CoilPerformanceReading,
    DistributionMixingReading,
    EconomizerSealReading,
    FanEvapRecheckReading,
    RefrigerantCircuitReading,
    TestType,
)
from fieldcx.models.results import CheckResult, ComputedResult, WeatherContext


def _static_check(static_inwc: float, high_message: str) -> CheckResult:
    low, high = STATIC_PRESSURE_RANGE
    return check_range(
        static_inwc, low, high, " in. w.c.",
        pass_message="Static pressure within normal range",
        low_message="Static pressure too low",
        high_message=high_message,
    )


class AirflowStaticRoutine(ComputationRoutine):
    test_type = TestType.AIRFLOW_STATIC
    reading_model = AirflowStaticReading

    def compute(self, reading: AirflowStaticReading, weather: WeatherContext) -> ComputedResult:
        cfm_per_ton = calculate_cfm_per_ton(reading.supplyCFM, reading.tons)

        calculations = {
            "cfm_per_ton": cfm_per_ton,
            "supply_cfm": reading.supplyCFM,
            "return_cfm": reading.returnCFM or 0.0,
        }
        checks = {"cfm_per_ton": check_cfm_per_ton(cfm_per_ton)}

        if reading.extStatic_inwc is not None:
            calculations["external_static_inwc"] = reading.extStatic_inwc
            checks["external_static"] = _static_check(
                reading.extStatic_inwc,
                high_message="External static pressure too high - check for restrictions",
            )
            static_label = f'{format_number(reading.extStatic_inwc)}" w.c.'
        else:
            static_label = "not measured"

        return build_result(
            calculations=calculations,
            checks=checks,
            summary=f"CFM/ton: {cfm_per_ton:.0f}, Static: {static_label}",
        )


class RefrigerantCircuitRoutine(ComputationRoutine):
    """
    Superheat and subcooling against outdoor-adjusted bands.

    Outdoor temperature comes from the session weather if recorded, else
    from the reading itself, else from default_outdoor_temp_F.
    """

    test_type = TestType.REFRIGERANT_CIRCUIT
    reading_model = RefrigerantCircuitReading

    def __init__(self, default_outdoor_temp_F: float = DEFAULT_OUTDOOR_TEMP_F):
        self.default_outdoor_temp_F = default_outdoor_temp_F

    def resolve_outdoor_temp(
        self, reading: RefrigerantCircuitReading, weather: WeatherContext
    ) -> float:
        if weather.outdoorTemp is not None:
            return weather.outdoorTemp
        if reading.outdoorDB_F is not None:
            return reading.outdoorDB_F
        return self.default_outdoor_temp_F

    def compute(self, reading: RefrigerantCircuitReading, weather: WeatherContext) -> ComputedResult:
        superheat = calculate_superheat(
            reading.suctionLineTemp_F, reading.suctionPSI, reading.refrigerant
        )
        subcooling = calculate_subcooling(
            reading.liquidLineTemp_F, reading.liquidPSI, reading.refrigerant
        )
        outdoor_temp = self.resolve_outdoor_temp(reading, weather)

        return build_result(
            calculations={
                "superheat_F": superheat,
                "subcooling_F": subcooling,
                "suction_psi": reading.suctionPSI,
                "liquid_psi": reading.liquidPSI,
                "suction_temp_F": reading.suctionLineTemp_F,
                "liquid_temp_F": reading.liquidLineTemp_F,
                "outdoor_temp_F": outdoor_temp,
            },
            checks={
                "superheat": check_superheat(superheat, outdoor_temp),
                "subcooling": check_subcooling(subcooling, outdoor_temp),
            },
            summary=f"SH: {superheat:.1f}°F, SC: {subcooling:.1f}°F",
        )


class CoilPerformanceRoutine(ComputationRoutine):
    test_type = TestType.COIL_PERFORMANCE
    reading_model = CoilPerformanceReading

    def compute(self, reading: CoilPerformanceReading, weather: WeatherContext) -> ComputedResult:
        return_dp = calculate_dew_point(reading.returnDB_F, reading.returnRH_pct)
        supply_dp = calculate_dew_point(reading.supplyDB_F, reading.supplyRH_pct)
        temp_drop = reading.returnDB_F - reading.supplyDB_F

        return_h = calculate_enthalpy(reading.returnDB_F, reading.returnRH_pct)
        supply_h = calculate_enthalpy(reading.supplyDB_F, reading.supplyRH_pct)

        low, high = TEMPERATURE_DROP_RANGE
        temp_drop_check = check_range(
            temp_drop, low, high, "°F",
            pass_message="Temperature drop within normal range",
            low_message="Insufficient cooling - check refrigerant charge",
            high_message="Excessive temperature drop - check airflow",
        )

        return build_result(
            calculations={
                "return_dew_point_F": return_dp,
                "supply_dew_point_F": supply_dp,
                "dew_point_drop_F": return_dp - supply_dp,
                "temperature_drop_F": temp_drop,
                # Informational only; not an acceptance criterion
                "humidity_rise_pct": reading.supplyRH_pct - reading.returnRH_pct,
                "return_enthalpy_btu_lb": return_h,
                "supply_enthalpy_btu_lb": supply_h,
                "enthalpy_drop_btu_lb": return_h - supply_h,
                "condensate_oz_per_30min": reading.condensateVolume_oz_per_30min or 0.0,
            },
            checks={
                "supply_dew_point": check_supply_dew_point(supply_dp),
                "temperature_drop": temp_drop_check,
            },
            summary=f"Supply DP: {supply_dp:.1f}°F, ΔT: {temp_drop:.1f}°F",
        )


class FanEvapRecheckRoutine(ComputationRoutine):
    test_type = TestType.FAN_EVAP_RECHECK
    reading_model = FanEvapRecheckReading

    def compute(self, reading: FanEvapRecheckReading, weather: WeatherContext) -> ComputedResult:
        return_dp = calculate_dew_point(reading.returnDB_F, reading.returnRH_pct)
        supply_dp = calculate_dew_point(reading.supplyDB_F, reading.supplyRH_pct)

        calculations = {
            "return_dew_point_F": return_dp,
            "supply_dew_point_F": supply_dp,
            "airflow_cfm": reading.airflowCFM,
        }
        checks = {"supply_dew_point": check_supply_dew_point(supply_dp)}

        if reading.staticPressure_inwc is not None:
            calculations["static_pressure_inwc"] = reading.staticPressure_inwc
            checks["static_pressure"] = _static_check(
                reading.staticPressure_inwc,
                high_message="Static pressure too high - check filters and coil",
            )

        return build_result(
            calculations=calculations,
            checks=checks,
            summary=f"Fan/evap recheck - Supply DP: {supply_dp:.1f}°F",
        )


class EconomizerSealRoutine(ComputationRoutine):
    test_type = TestType.ECONOMIZER_SEAL
    reading_model = EconomizerSealReading

    def compute(self, reading: EconomizerSealReading, weather: WeatherContext) -> ComputedResult:
        method = reading.method.value
        calculations = {"commanded_position_pct": reading.commandedPct}

        effectiveness = _economizer_effectiveness(reading)
        if effectiveness is not None:
            calculations["economizer_effectiveness_pct"] = effectiveness

        limit = MAX_DAMPER_POSITION_PCT
        position_check = check_maximum(
            reading.commandedPct, limit,
            target=f"0% (≤ {format_number(limit)}% tolerance)",
            pass_message="Economizer damper properly closed",
            fail_message="Economizer damper not fully closed",
        )
        leak_check = check_condition(
            not reading.leakageObserved,
            "OBSERVED" if reading.leakageObserved else "NONE",
            target="NONE",
            pass_message=f"No leakage observed ({method} test)",
            fail_message=f"Leakage observed during {method} test",
        )

        if not leak_check.passed:
            summary = "Economizer leakage detected"
        elif not position_check.passed:
            summary = "Economizer damper not fully closed"
        else:
            summary = "Economizer seal test passed"

        return build_result(
            calculations=calculations,
            checks={"damper_position": position_check, "leakage_test": leak_check},
            summary=summary,
        )


def _economizer_effectiveness(reading: EconomizerSealReading) -> Optional[float]:
    temps = (reading.mixedAir_F, reading.returnAir_F, reading.outsideAir_F)
    if any(t is None for t in temps):
        return None
    return calculate_economizer_effectiveness(*temps)


class DistributionMixingRoutine(ComputationRoutine):
    """Spatial uniformity of temperature and humidity across a sample grid."""

    test_type = TestType.DISTRIBUTION_MIXING
    reading_model = DistributionMixingReading

    def compute(self, reading: DistributionMixingReading, weather: WeatherContext) -> ComputedResult:
        samples = reading.gridSamples
        temp_stats = calculate_stats([s.db_F for s in samples])
        rh_stats = calculate_stats([s.rh_pct for s in samples])
        dp_stats = calculate_stats([calculate_dew_point(s.db_F, s.rh_pct) for s in samples])

        temp_variation = temp_stats["max"] - temp_stats["min"]
        rh_variation = rh_stats["max"] - rh_stats["min"]

        calculations = {
            "temp_min_F": temp_stats["min"],
            "temp_max_F": temp_stats["max"],
            "temp_avg_F": temp_stats["avg"],
            "temp_variation_F": temp_variation,
            "temp_std_dev_F": temp_stats["std_dev"],
            "rh_min_pct": rh_stats["min"],
            "rh_max_pct": rh_stats["max"],
            "rh_avg_pct": rh_stats["avg"],
            "rh_variation_pct": rh_variation,
            "rh_std_dev_pct": rh_stats["std_dev"],
            "dp_min_F": dp_stats["min"],
            "dp_max_F": dp_stats["max"],
            "dp_avg_F": dp_stats["avg"],
            "dp_variation_F": dp_stats["max"] - dp_stats["min"],
        }
        if reading.returnDewPoint_F is not None:
            calculations["return_dp_F"] = reading.returnDewPoint_F

        temp_limit = MAX_MIXING_TEMP_VARIATION_F
        rh_limit = MAX_MIXING_RH_VARIATION_PCT
        checks = {
            "temperature_mixing": check_maximum(
                temp_variation, temp_limit,
                target=f"≤ {format_number(temp_limit)}°F variation",
                pass_message="Good temperature mixing achieved",
                fail_message="Poor temperature mixing - check airflow distribution",
            ),
            "humidity_mixing": check_maximum(
                rh_variation, rh_limit,
                target=f"≤ {format_number(rh_limit)}% RH variation",
                pass_message="Good humidity mixing achieved",
                fail_message="Poor humidity mixing - check airflow distribution",
            ),
        }

        return build_result(
            calculations=calculations,
            checks=checks,
            summary=f"Zone mixing - ΔT: {temp_variation:.1f}°F, ΔRH: {rh_variation:.1f}%",
        )
