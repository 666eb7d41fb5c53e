"""
Pydantic models for the field readings of each commissioning test type.

Field names follow the wire format submitted by the field forms, so the
camelCase/unit-suffixed keys are kept as-is. Every numeric field is bounded
to a physically plausible range; the computation engine only ever sees
readings that passed through these models.
"""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from fieldcx.config import (
    CFM_RANGE,
    DECAY_SECONDS_RANGE,
    DEFAULT_REFRIGERANT,
    PRESSURE_RANGE_INWC,
    PSI_RANGE,
    RH_RANGE_PCT,
    TEMP_RANGE_F,
    TONS_RANGE,
)
from fieldcx.errors import UnknownTestTypeError


class TestType(str, Enum):
    __test__ = False  # keep pytest from collecting the enum

    # Envelope tests
    BUILDING_PRESSURE = "BUILDING_PRESSURE"
    PRESSURE_DECAY = "PRESSURE_DECAY"
    RETURN_CURB_LEAKAGE = "RETURN_CURB_LEAKAGE"
    SLAB_WALL_MOISTURE = "SLAB_WALL_MOISTURE"
    # HVAC tests
    AIRFLOW_STATIC = "AIRFLOW_STATIC"
    REFRIGERANT_CIRCUIT = "REFRIGERANT_CIRCUIT"
    COIL_PERFORMANCE = "COIL_PERFORMANCE"
    FAN_EVAP_RECHECK = "FAN_EVAP_RECHECK"
    ECONOMIZER_SEAL = "ECONOMIZER_SEAL"
    DISTRIBUTION_MIXING = "DISTRIBUTION_MIXING"


class TestCategory(str, Enum):
    __test__ = False

    ENVELOPE = "envelope"
    HVAC = "hvac"


TEST_TYPE_NAMES: dict[TestType, str] = {
    TestType.BUILDING_PRESSURE: "Building Pressure",
    TestType.PRESSURE_DECAY: "Pressure Decay",
    TestType.RETURN_CURB_LEAKAGE: "Return/Curb Leakage",
    TestType.SLAB_WALL_MOISTURE: "Slab/Wall Moisture",
    TestType.AIRFLOW_STATIC: "Airflow & Static",
    TestType.REFRIGERANT_CIRCUIT: "Refrigerant Circuit",
    TestType.COIL_PERFORMANCE: "Coil Performance",
    TestType.FAN_EVAP_RECHECK: "Fan/Evap Recheck",
    TestType.ECONOMIZER_SEAL: "Economizer Seal",
    TestType.DISTRIBUTION_MIXING: "Distribution & Mixing",
}

_ENVELOPE_TESTS = {
    TestType.BUILDING_PRESSURE,
    TestType.PRESSURE_DECAY,
    TestType.RETURN_CURB_LEAKAGE,
    TestType.SLAB_WALL_MOISTURE,
}


def category_for(test_type: TestType) -> TestCategory:
    """Envelope tests cover the building shell; everything else is HVAC."""
    if test_type in _ENVELOPE_TESTS:
        return TestCategory.ENVELOPE
    return TestCategory.HVAC


def coerce_test_type(test_type) -> TestType:
    """Turn a TestType or its string value into a TestType."""
    if isinstance(test_type, TestType):
        return test_type
    try:
        return TestType(test_type)
    except ValueError:
        raise UnknownTestTypeError(test_type) from None


# Physical bounds for reading fields
_TEMP_MIN, _TEMP_MAX = TEMP_RANGE_F                  # °F
_RH_MIN, _RH_MAX = RH_RANGE_PCT                      # %RH
_PRESSURE_MIN, _PRESSURE_MAX = PRESSURE_RANGE_INWC   # in. w.c.
_CFM_MIN, _CFM_MAX = CFM_RANGE
_PSI_MIN, _PSI_MAX = PSI_RANGE


class PlasticTestResult(str, Enum):
    DRY = "DRY"
    CONDENSATION = "CONDENSATION"
    DARKENING = "DARKENING"


class AirflowMode(str, Enum):
    COOL = "COOL"
    DEHUM = "DEHUM"


class LeakTestMethod(str, Enum):
    SMOKE = "SMOKE"
    VISUAL = "VISUAL"


# --- Envelope readings ---


class BuildingPressureReading(BaseModel):
    """Indoor minus outdoor pressure differential."""

    location: str = Field(min_length=1)
    deltaP_inwc: float = Field(ge=_PRESSURE_MIN, le=_PRESSURE_MAX)
    targetMin: Literal[0.02] = 0.02
    targetMax: Literal[0.05] = 0.05
    exhaustOn: Optional[bool] = None
    notes: Optional[str] = None


class PressureDecayReading(BaseModel):
    """Pressure held then released, timed until decay."""

    startDeltaP: float = Field(ge=_PRESSURE_MIN, le=_PRESSURE_MAX)
    endDeltaP: float = Field(ge=_PRESSURE_MIN, le=_PRESSURE_MAX)
    decaySeconds: float = Field(ge=DECAY_SECONDS_RANGE[0], le=DECAY_SECONDS_RANGE[1])
    notes: Optional[str] = None


class ReturnCurbLeakageReading(BaseModel):
    returnStatic_inwc: float = Field(ge=_PRESSURE_MIN, le=_PRESSURE_MAX)
    supplyStatic_inwc: float = Field(ge=_PRESSURE_MIN, le=_PRESSURE_MAX)
    smokeLeaksFound: bool
    leakLocations: Optional[list[str]] = None
    notes: Optional[str] = None


class SlabWallMoistureReading(BaseModel):
    plasticTest: PlasticTestResult
    irFindings: Optional[str] = None
    notes: Optional[str] = None


# --- HVAC readings ---


class AirflowStaticReading(BaseModel):
    unitLabel: str = Field(min_length=1)
    tons: float = Field(ge=TONS_RANGE[0], le=TONS_RANGE[1])
    supplyCFM: float = Field(ge=_CFM_MIN, le=_CFM_MAX)
    returnCFM: Optional[float] = Field(None, ge=_CFM_MIN, le=_CFM_MAX)
    extStatic_inwc: Optional[float] = Field(None, ge=_PRESSURE_MIN, le=_PRESSURE_MAX)
    mode: AirflowMode = AirflowMode.COOL
    notes: Optional[str] = None


class RefrigerantCircuitReading(BaseModel):
    unitLabel: str = Field(min_length=1)
    outdoorDB_F: Optional[float] = Field(None, ge=_TEMP_MIN, le=_TEMP_MAX)
    suctionPSI: float = Field(ge=_PSI_MIN, le=_PSI_MAX)
    liquidPSI: float = Field(ge=_PSI_MIN, le=_PSI_MAX)
    suctionLineTemp_F: float = Field(ge=_TEMP_MIN, le=_TEMP_MAX)
    liquidLineTemp_F: float = Field(ge=_TEMP_MIN, le=_TEMP_MAX)
    txvPresent: Optional[bool] = None
    refrigerant: str = DEFAULT_REFRIGERANT
    notes: Optional[str] = None


class CoilPerformanceReading(BaseModel):
    unitLabel: str = Field(min_length=1)
    returnDB_F: float = Field(ge=_TEMP_MIN, le=_TEMP_MAX)
    returnRH_pct: float = Field(ge=_RH_MIN, le=_RH_MAX)
    supplyDB_F: float = Field(ge=_TEMP_MIN, le=_TEMP_MAX)
    supplyRH_pct: float = Field(ge=_RH_MIN, le=_RH_MAX)
    condensateVolume_oz_per_30min: Optional[float] = Field(None, ge=0, le=1000)
    notes: Optional[str] = None


class FanEvapRecheckReading(BaseModel):
    """Same measurements as coil performance, taken after fan/evaporator service."""

    unitLabel: str = Field(min_length=1)
    returnDB_F: float = Field(ge=_TEMP_MIN, le=_TEMP_MAX)
    returnRH_pct: float = Field(ge=_RH_MIN, le=_RH_MAX)
    supplyDB_F: float = Field(ge=_TEMP_MIN, le=_TEMP_MAX)
    supplyRH_pct: float = Field(ge=_RH_MIN, le=_RH_MAX)
    airflowCFM: float = Field(ge=_CFM_MIN, le=_CFM_MAX)
    staticPressure_inwc: Optional[float] = Field(None, ge=_PRESSURE_MIN, le=_PRESSURE_MAX)
    notes: Optional[str] = None


class EconomizerSealReading(BaseModel):
    commandedPct: float = Field(ge=0, le=100)  # expect 0 for fully closed
    leakageObserved: bool
    method: LeakTestMethod
    mixedAir_F: Optional[float] = Field(None, ge=_TEMP_MIN, le=_TEMP_MAX)
    returnAir_F: Optional[float] = Field(None, ge=_TEMP_MIN, le=_TEMP_MAX)
    outsideAir_F: Optional[float] = Field(None, ge=_TEMP_MIN, le=_TEMP_MAX)
    notes: Optional[str] = None


class GridSample(BaseModel):
    point: str = Field(min_length=1)
    db_F: float = Field(ge=_TEMP_MIN, le=_TEMP_MAX)
    rh_pct: float = Field(ge=_RH_MIN, le=_RH_MAX)


class DistributionMixingReading(BaseModel):
    zone: str = Field(min_length=1)
    gridSamples: list[GridSample] = Field(min_length=1)
    returnDewPoint_F: Optional[float] = Field(None, ge=_TEMP_MIN, le=_TEMP_MAX)
    notes: Optional[str] = None


Reading = Union[
    BuildingPressureReading,
    PressureDecayReading,
    ReturnCurbLeakageReading,
    SlabWallMoistureReading,
    AirflowStaticReading,
    RefrigerantCircuitReading,
    CoilPerformanceReading,
    FanEvapRecheckReading,
    EconomizerSealReading,
    DistributionMixingReading,
]

READING_MODELS: dict[TestType, type[BaseModel]] = {
    TestType.BUILDING_PRESSURE: BuildingPressureReading,
    TestType.PRESSURE_DECAY: PressureDecayReading,
    TestType.RETURN_CURB_LEAKAGE: ReturnCurbLeakageReading,
    TestType.SLAB_WALL_MOISTURE: SlabWallMoistureReading,
    TestType.AIRFLOW_STATIC: AirflowStaticReading,
    TestType.REFRIGERANT_CIRCUIT: RefrigerantCircuitReading,
    TestType.COIL_PERFORMANCE: CoilPerformanceReading,
    TestType.FAN_EVAP_RECHECK: FanEvapRecheckReading,
    TestType.ECONOMIZER_SEAL: EconomizerSealReading,
    TestType.DISTRIBUTION_MIXING: DistributionMixingReading,
}


def parse_reading(test_type, payload: dict) -> Reading:
    """
    Validate a raw reading payload against the schema for its test type.

    Raises UnknownTestTypeError for an unrecognised test type and
    pydantic.ValidationError (a ValueError) for missing or out-of-range fields.
    """
    model = READING_MODELS[coerce_test_type(test_type)]
    return model.model_validate(payload)
