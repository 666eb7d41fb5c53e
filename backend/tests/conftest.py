"""
Shared sample readings, one passing reading per test type.
"""

import pytest

from fieldcx.models.readings import TestType


_SAMPLE_READINGS = {
    TestType.BUILDING_PRESSURE: {
        "location": "North entry",
        "deltaP_inwc": 0.035,
    },
    TestType.PRESSURE_DECAY: {
        "startDeltaP": 0.05,
        "endDeltaP": 0.045,
        "decaySeconds": 120,
    },
    TestType.RETURN_CURB_LEAKAGE: {
        "returnStatic_inwc": 0.45,
        "supplyStatic_inwc": 0.5,
        "smokeLeaksFound": False,
    },
    TestType.SLAB_WALL_MOISTURE: {
        "plasticTest": "DRY",
    },
    TestType.AIRFLOW_STATIC: {
        "unitLabel": "RTU-1",
        "tons": 3,
        "supplyCFM": 1125,
        "returnCFM": 1050,
        "extStatic_inwc": 0.6,
        "mode": "DEHUM",
    },
    TestType.REFRIGERANT_CIRCUIT: {
        "unitLabel": "RTU-1",
        "suctionPSI": 60,
        "liquidPSI": 137.5,
        "suctionLineTemp_F": 82,
        "liquidLineTemp_F": 140,
    },
    TestType.COIL_PERFORMANCE: {
        "unitLabel": "RTU-1",
        "returnDB_F": 75,
        "returnRH_pct": 55,
        "supplyDB_F": 58,
        "supplyRH_pct": 85,
    },
    TestType.FAN_EVAP_RECHECK: {
        "unitLabel": "RTU-1",
        "returnDB_F": 75,
        "returnRH_pct": 55,
        "supplyDB_F": 58,
        "supplyRH_pct": 85,
        "airflowCFM": 1200,
        "staticPressure_inwc": 0.8,
    },
    TestType.ECONOMIZER_SEAL: {
        "commandedPct": 0,
        "leakageObserved": False,
        "method": "SMOKE",
    },
    TestType.DISTRIBUTION_MIXING: {
        "zone": "Open office",
        "gridSamples": [
            {"point": "A1", "db_F": 72, "rh_pct": 50},
            {"point": "A2", "db_F": 73, "rh_pct": 52},
            {"point": "B1", "db_F": 74, "rh_pct": 54},
            {"point": "B2", "db_F": 75, "rh_pct": 55},
        ],
        "returnDewPoint_F": 55,
    },
}


@pytest.fixture
def sample_readings() -> dict:
    """Fresh copies of a passing raw reading for every test type."""
    return {
        test_type: {
            key: [dict(v) for v in value] if isinstance(value, list) else value
            for key, value in reading.items()
        }
        for test_type, reading in _SAMPLE_READINGS.items()
    }
