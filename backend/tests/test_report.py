"""
Tests for the PDF report generator engine and API route.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from fieldcx.api.report import report_filename
from fieldcx.engine.dispatcher import compute_test_result
from fieldcx.engine.report_generator import _txt, format_test_reading, generate_report
from fieldcx.main import app
from fieldcx.models.readings import TestType
from fieldcx.models.report import SessionReportInput


client = TestClient(app)


def _sample_record(test_type, reading, unit_label=None) -> dict:
    computed = compute_test_result(test_type, reading)
    return {
        "test_type": test_type.value,
        "unit_label": unit_label,
        "reading": reading,
        "computed": computed.model_dump(by_alias=True),
        "pass": computed.passed,
    }


def _sample_report(tests=None) -> dict:
    return {
        "organization": "Gulf Coast Mechanical",
        "project": "Bayview Clinic",
        "project_address": "12 Harbor Rd",
        "area": "Level 2 East",
        "area_sqft": 12500,
        "session_title": "Cooling season start-up",
        "engineer": "J. Rivera",
        "engineer_email": "jrivera@example.com",
        "started_at": "2026-06-14T09:30:00",
        "weather": {"outdoorTemp": 94, "outdoorRH": 62},
        "units": [
            {"label": "RTU-1", "make": "Carrier", "model": "48FC", "tons": 3, "refrigerant": "R-410A"},
        ],
        "tests": tests if tests is not None else [],
        "notes": "Ceiling tiles missing above corridor.",
        "recommendations": ["Replace RTU-1 filters", "Re-test economizer after repair"],
    }


@pytest.fixture
def session_tests(sample_readings):
    return [
        _sample_record(TestType.AIRFLOW_STATIC, sample_readings[TestType.AIRFLOW_STATIC], "RTU-1"),
        _sample_record(
            TestType.REFRIGERANT_CIRCUIT, sample_readings[TestType.REFRIGERANT_CIRCUIT], "RTU-1"
        ),
        _sample_record(TestType.COIL_PERFORMANCE, sample_readings[TestType.COIL_PERFORMANCE], "RTU-1"),
        _sample_record(
            TestType.ECONOMIZER_SEAL,
            {"commandedPct": 20, "leakageObserved": True, "method": "SMOKE"},
            "RTU-1",
        ),
        _sample_record(
            TestType.DISTRIBUTION_MIXING, sample_readings[TestType.DISTRIBUTION_MIXING]
        ),
        _sample_record(TestType.BUILDING_PRESSURE, sample_readings[TestType.BUILDING_PRESSURE]),
        _sample_record(TestType.PRESSURE_DECAY, sample_readings[TestType.PRESSURE_DECAY]),
        {"test_type": "SLAB_WALL_MOISTURE", "reading": {"plasticTest": "DRY"}},
    ]


# ---------------------------------------------------------------------------
# Engine tests
# ---------------------------------------------------------------------------

class TestReportEngine:

    def test_generates_pdf(self, session_tests):
        inp = SessionReportInput.model_validate(_sample_report(session_tests))
        pdf_bytes = generate_report(inp)
        assert pdf_bytes[:5] == b"%PDF-"
        assert len(pdf_bytes) > 1000

    def test_empty_session(self):
        inp = SessionReportInput.model_validate(_sample_report())
        pdf_bytes = generate_report(inp)
        assert pdf_bytes[:5] == b"%PDF-"

    def test_minimal_input(self):
        inp = SessionReportInput(
            organization="Org",
            project="Project",
            area="Area",
            engineer="Engineer",
            started_at=datetime(2026, 1, 5, 8, 0),
        )
        assert generate_report(inp)[:5] == b"%PDF-"

    def test_non_latin_text(self, session_tests):
        data = _sample_report(session_tests)
        data["notes"] = "ΔP ≤ 0.05 — checked “twice” ✓"
        data["units"][0]["label"] = "RTU–1’s"
        inp = SessionReportInput.model_validate(data)
        assert generate_report(inp)[:5] == b"%PDF-"


class TestReportFormatting:

    def test_txt_folds_to_latin1(self):
        assert _txt("ΔT ≤ 5°F — ok") == "dT <= 5°F - ok"
        assert _txt("✓").encode("latin-1") == b"?"

    def test_building_pressure_digest(self):
        text = format_test_reading(TestType.BUILDING_PRESSURE, {"deltaP_inwc": 0.035}, None)
        assert text == '0.035" w.c. (Target: 0.02-0.05)'

    def test_refrigerant_digest(self, sample_readings):
        reading = sample_readings[TestType.REFRIGERANT_CIRCUIT]
        computed = compute_test_result(TestType.REFRIGERANT_CIRCUIT, reading)
        text = format_test_reading(TestType.REFRIGERANT_CIRCUIT, reading, computed)
        assert text == "SH: 10.0°F, SC: 10.0°F"

    def test_airflow_digest(self, sample_readings):
        reading = sample_readings[TestType.AIRFLOW_STATIC]
        computed = compute_test_result(TestType.AIRFLOW_STATIC, reading)
        text = format_test_reading(TestType.AIRFLOW_STATIC, reading, computed)
        assert text == "1125 CFM, 375 CFM/ton"

    def test_digest_without_computed(self):
        text = format_test_reading(TestType.COIL_PERFORMANCE, {}, None)
        assert text == "Supply DP: N/A°F, ΔT: N/A°F"

    def test_other_types_use_summary(self, sample_readings):
        reading = sample_readings[TestType.ECONOMIZER_SEAL]
        computed = compute_test_result(TestType.ECONOMIZER_SEAL, reading)
        assert format_test_reading(TestType.ECONOMIZER_SEAL, reading, computed) == (
            "Economizer seal test passed"
        )
        assert format_test_reading(TestType.ECONOMIZER_SEAL, reading, None) == (
            "See detailed results"
        )

    def test_filename(self):
        inp = SessionReportInput.model_validate(_sample_report())
        assert report_filename(inp) == "Cooling-season-start-up-2026-06-14.pdf"

    def test_filename_default_title(self):
        data = _sample_report()
        data["session_title"] = None
        inp = SessionReportInput.model_validate(data)
        assert report_filename(inp) == "Session-2026-06-14.pdf"


# ---------------------------------------------------------------------------
# API tests
# ---------------------------------------------------------------------------

class TestReportAPI:

    def test_generate_endpoint(self, session_tests):
        resp = client.post("/api/v1/report/generate", json=_sample_report(session_tests))
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/pdf"
        assert "Cooling-season-start-up-2026-06-14.pdf" in resp.headers["content-disposition"]
        assert resp.content[:5] == b"%PDF-"

    def test_missing_required_field(self):
        data = _sample_report()
        del data["engineer"]
        resp = client.post("/api/v1/report/generate", json=data)
        assert resp.status_code == 422

    def test_unknown_test_type_rejected(self):
        data = _sample_report([{"test_type": "HUMIDITY_SOAK", "reading": {}}])
        resp = client.post("/api/v1/report/generate", json=data)
        assert resp.status_code == 422
