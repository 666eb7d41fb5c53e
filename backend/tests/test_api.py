"""
Tests for the test computation API endpoints.
"""

from fastapi.testclient import TestClient

from fieldcx.api import results
from fieldcx.main import app
from fieldcx.models.readings import TestType


client = TestClient(app)


class TestHealth:

    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "service": "fieldcx"}


class TestComputeEndpoint:

    def test_compute(self, sample_readings):
        resp = client.post("/api/v1/tests/compute", json={
            "test_type": "COIL_PERFORMANCE",
            "reading": sample_readings[TestType.COIL_PERFORMANCE],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["pass"] is True
        assert data["checks"]["supply_dew_point"]["pass"] is True
        assert abs(data["calculations"]["temperature_drop_F"] - 17.0) < 1e-9
        assert data["summary"] == "Supply DP: 53.5°F, ΔT: 17.0°F"

    def test_compute_with_weather(self, sample_readings):
        resp = client.post("/api/v1/tests/compute", json={
            "test_type": "REFRIGERANT_CIRCUIT",
            "reading": sample_readings[TestType.REFRIGERANT_CIRCUIT],
            "weather": {"outdoorTemp": 105, "outdoorRH": 35},
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["calculations"]["outdoor_temp_F"] == 105
        assert data["checks"]["superheat"]["target"] == "6 - 12°F"

    def test_unknown_test_type(self):
        resp = client.post("/api/v1/tests/compute", json={
            "test_type": "HUMIDITY_SOAK",
            "reading": {},
        })
        assert resp.status_code == 422
        assert "Unknown test type" in resp.json()["detail"]

    def test_invalid_reading(self):
        resp = client.post("/api/v1/tests/compute", json={
            "test_type": "BUILDING_PRESSURE",
            "reading": {"location": "Lobby", "deltaP_inwc": 25},
        })
        assert resp.status_code == 422

    def test_missing_reading(self):
        resp = client.post("/api/v1/tests/compute", json={"test_type": "BUILDING_PRESSURE"})
        assert resp.status_code == 422


class TestRecordEndpoint:

    def test_record_attaches_computed(self, sample_readings):
        resp = client.post("/api/v1/tests", json={
            "session_id": "s-1",
            "unit_label": "RTU-1",
            "test_type": "AIRFLOW_STATIC",
            "reading": sample_readings[TestType.AIRFLOW_STATIC],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["pass"] is True
        assert data["computed"]["summary"] == 'CFM/ton: 375, Static: 0.6" w.c.'
        assert data["reading"]["mode"] == "DEHUM"

    def test_record_rejects_invalid_reading(self):
        resp = client.post("/api/v1/tests", json={
            "test_type": "PRESSURE_DECAY",
            "reading": {"startDeltaP": 0.05},
        })
        assert resp.status_code == 422

    def test_unknown_type_stored_uncomputed(self):
        resp = client.post("/api/v1/tests", json={
            "test_type": "LEGACY_TEST",
            "reading": {"value": 1},
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["computed"] is None
        assert data["pass"] is None
        assert data["reading"] == {"value": 1}

    def test_computation_failure_stored_uncomputed(self, sample_readings, monkeypatch):
        def _boom(*args, **kwargs):
            raise RuntimeError("curve table unavailable")

        monkeypatch.setattr(results, "compute_test_result", _boom)
        resp = client.post("/api/v1/tests", json={
            "test_type": "REFRIGERANT_CIRCUIT",
            "reading": sample_readings[TestType.REFRIGERANT_CIRCUIT],
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["computed"] is None
        assert data["pass"] is None

    def test_compute_endpoint_reports_calculation_error(self, sample_readings, monkeypatch):
        def _boom(*args, **kwargs):
            raise RuntimeError("curve table unavailable")

        monkeypatch.setattr(results, "compute_test_result", _boom)
        resp = client.post("/api/v1/tests/compute", json={
            "test_type": "REFRIGERANT_CIRCUIT",
            "reading": sample_readings[TestType.REFRIGERANT_CIRCUIT],
        })
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Calculation error: curve table unavailable"
