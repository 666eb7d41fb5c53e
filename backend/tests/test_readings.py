"""
Tests for reading validation: field bounds, defaults, and test type helpers.
"""

import pytest
from pydantic import ValidationError

from fieldcx.errors import UnknownTestTypeError
from fieldcx.models.readings import (
    READING_MODELS,
    TEST_TYPE_NAMES,
    AirflowMode,
    AirflowStaticReading,
    BuildingPressureReading,
    DistributionMixingReading,
    RefrigerantCircuitReading,
    TestCategory,
    TestType,
    category_for,
    coerce_test_type,
    parse_reading,
)


class TestTestTypes:

    def test_ten_test_types(self):
        assert len(TestType) == 10
        assert set(READING_MODELS) == set(TestType)
        assert set(TEST_TYPE_NAMES) == set(TestType)

    @pytest.mark.parametrize("test_type,category", [
        (TestType.BUILDING_PRESSURE, TestCategory.ENVELOPE),
        (TestType.PRESSURE_DECAY, TestCategory.ENVELOPE),
        (TestType.RETURN_CURB_LEAKAGE, TestCategory.ENVELOPE),
        (TestType.SLAB_WALL_MOISTURE, TestCategory.ENVELOPE),
        (TestType.AIRFLOW_STATIC, TestCategory.HVAC),
        (TestType.DISTRIBUTION_MIXING, TestCategory.HVAC),
    ])
    def test_category(self, test_type, category):
        assert category_for(test_type) is category

    def test_coerce(self):
        assert coerce_test_type("COIL_PERFORMANCE") is TestType.COIL_PERFORMANCE
        assert coerce_test_type(TestType.COIL_PERFORMANCE) is TestType.COIL_PERFORMANCE

    def test_coerce_unknown(self):
        with pytest.raises(UnknownTestTypeError):
            coerce_test_type("coil_performance")


class TestReadingBounds:

    def test_parse_reading(self, sample_readings):
        reading = parse_reading("BUILDING_PRESSURE", sample_readings[TestType.BUILDING_PRESSURE])
        assert isinstance(reading, BuildingPressureReading)
        assert reading.targetMin == 0.02
        assert reading.targetMax == 0.05

    def test_fixed_targets_cannot_change(self):
        with pytest.raises(ValidationError):
            BuildingPressureReading(location="Lobby", deltaP_inwc=0.03, targetMax=0.1)

    @pytest.mark.parametrize("field,value", [
        ("suctionPSI", -1),
        ("suctionPSI", 1001),
        ("suctionLineTemp_F", -41),
        ("liquidLineTemp_F", 151),
    ])
    def test_refrigerant_bounds(self, sample_readings, field, value):
        payload = dict(sample_readings[TestType.REFRIGERANT_CIRCUIT], **{field: value})
        with pytest.raises(ValidationError):
            RefrigerantCircuitReading.model_validate(payload)

    def test_tons_minimum(self):
        with pytest.raises(ValidationError):
            AirflowStaticReading(unitLabel="RTU-1", tons=0.25, supplyCFM=100)

    def test_empty_label_rejected(self):
        with pytest.raises(ValidationError):
            AirflowStaticReading(unitLabel="", tons=3, supplyCFM=1125)

    def test_decay_seconds_bounds(self):
        with pytest.raises(ValidationError):
            parse_reading(
                TestType.PRESSURE_DECAY,
                {"startDeltaP": 0.05, "endDeltaP": 0.04, "decaySeconds": 3601},
            )

    def test_grid_needs_a_sample(self):
        with pytest.raises(ValidationError):
            DistributionMixingReading(zone="Office", gridSamples=[])

    def test_unknown_enum_value(self):
        with pytest.raises(ValidationError):
            parse_reading(TestType.SLAB_WALL_MOISTURE, {"plasticTest": "WET"})

    def test_missing_required_field(self):
        with pytest.raises(ValidationError):
            parse_reading(TestType.ECONOMIZER_SEAL, {"commandedPct": 0, "method": "SMOKE"})


class TestReadingDefaults:

    def test_refrigerant_defaults(self, sample_readings):
        reading = RefrigerantCircuitReading.model_validate(
            sample_readings[TestType.REFRIGERANT_CIRCUIT]
        )
        assert reading.refrigerant == "R-410A"
        assert reading.outdoorDB_F is None

    def test_airflow_defaults(self):
        reading = AirflowStaticReading(unitLabel="RTU-1", tons=3, supplyCFM=1125)
        assert reading.mode is AirflowMode.COOL
        assert reading.returnCFM is None
        assert reading.extStatic_inwc is None
