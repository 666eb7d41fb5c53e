"""
PDF commissioning report generator using fpdf2.

Produces a multi-page PDF report containing:
  - Cover page with project/session info and executive summary
  - HVAC system tests (equipment table, results table, check details)
  - Envelope tests (results table, check details)
  - Notes and recommendations
  - Sign-off page
"""

from datetime import datetime
from typing import Optional

from fpdf import FPDF

from fieldcx.engine.session_summary import summarize_session
from fieldcx.models.readings import TEST_TYPE_NAMES, TestCategory, TestType, category_for
from fieldcx.models.report import SessionReportInput
from fieldcx.models.results import ComputedResult
from fieldcx.models.session import ResultRecord, SessionStatistics


# Equipment summary columns
_UNIT_COLS = [
    ("Unit", 40),
    ("Make/Model", 70),
    ("Capacity", 40),
    ("Refrigerant", 40),
]

# Results table columns
_RESULT_COLS = [
    ("Test Type", 45),
    ("Unit", 30),
    ("Results", 95),
    ("Status", 20),
]

# Check detail columns
_CHECK_COLS = [
    ("Check", 35),
    ("Value", 25),
    ("Target", 40),
    ("Status", 15),
    ("Message", 75),
]

# Core PDF fonts are latin-1 only
_TEXT_REPLACEMENTS = {
    "Δ": "d",
    "≤": "<=",
    "≥": ">=",
    "—": "-",
    "–": "-",
    "’": "'",
}


class CommissioningReport(FPDF):
    """Custom FPDF subclass with header/footer."""

    def __init__(self, title: str):
        super().__init__(orientation="P", unit="mm", format="A4")
        self._report_title = title
        self.set_auto_page_break(auto=True, margin=15)

    def header(self):
        self.set_font("Helvetica", "B", 9)
        self.set_text_color(100, 100, 100)
        self.cell(0, 6, _txt(self._report_title), align="L")
        self.cell(0, 6, datetime.now().strftime("%Y-%m-%d %H:%M"), align="R", new_x="LMARGIN", new_y="NEXT")
        self.set_draw_color(200, 200, 200)
        self.line(10, self.get_y(), self.w - 10, self.get_y())
        self.ln(3)

    def footer(self):
        self.set_y(-12)
        self.set_font("Helvetica", "I", 7)
        self.set_text_color(150, 150, 150)
        self.cell(0, 8, f"Page {self.page_no()}/{{nb}}", align="C")


def generate_report(inp: SessionReportInput) -> bytes:
    """Generate the session PDF report and return the bytes."""
    pdf = CommissioningReport(inp.title)
    pdf.alias_nb_pages()

    stats = summarize_session(inp.tests)
    hvac_tests = [t for t in inp.tests if category_for(t.test_type) == TestCategory.HVAC]
    envelope_tests = [t for t in inp.tests if category_for(t.test_type) == TestCategory.ENVELOPE]

    # --- Cover page ---
    pdf.add_page()
    pdf.set_font("Helvetica", "B", 18)
    pdf.cell(0, 12, _txt(inp.title), align="C", new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 12)
    pdf.set_text_color(60, 60, 60)
    pdf.cell(0, 7, _txt(inp.project), align="C", new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 7, _txt(inp.area), align="C", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    _add_section_heading(pdf, "Project Information")
    _add_info_lines(pdf, [
        ("Organization", inp.organization),
        ("Project", inp.project),
        ("Area", inp.area),
        ("Size", f"{inp.area_sqft:,} sq ft" if inp.area_sqft else None),
        ("Address", inp.project_address),
    ])

    _add_section_heading(pdf, "Session Details")
    _add_info_lines(pdf, [
        ("Session", inp.session_title or f"Session {inp.started_at:%Y-%m-%d}"),
        ("Engineer", inp.engineer),
        ("Date", inp.started_at.strftime("%B %d, %Y")),
        ("Time", inp.started_at.strftime("%I:%M %p").lstrip("0")),
        ("Outdoor Conditions", _format_weather(inp)),
        ("Status", inp.status),
    ])

    _add_section_heading(pdf, "Executive Summary")
    _add_info_lines(pdf, [
        ("Total Tests", str(len(inp.tests))),
        ("Passed", str(stats.passed)),
        ("Failed", str(stats.failed)),
        ("Pending", str(stats.pending)),
        ("Completion", f"{stats.completion_rate}%"),
    ])
    if stats.attention_items:
        pdf.ln(2)
        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(0, 6, "Items Requiring Attention:", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", "", 9)
        for item in stats.attention_items:
            pdf.multi_cell(0, 5, _txt(f"- {item}"), new_x="LMARGIN", new_y="NEXT")

    # --- HVAC tests ---
    if hvac_tests:
        pdf.add_page()
        _add_page_title(pdf, "HVAC System Tests")
        if inp.units:
            _add_section_heading(pdf, "Equipment Summary")
            _add_units_table(pdf, inp)
            pdf.ln(4)
        _add_section_heading(pdf, "HVAC Test Results")
        _add_results_table(pdf, hvac_tests)
        _add_check_details(pdf, hvac_tests)

    # --- Envelope tests ---
    if envelope_tests:
        pdf.add_page()
        _add_page_title(pdf, "Envelope Tests")
        _add_section_heading(pdf, "Envelope Test Results")
        _add_results_table(pdf, envelope_tests)
        _add_check_details(pdf, envelope_tests)

    # --- Notes & recommendations ---
    if inp.notes or inp.recommendations:
        pdf.add_page()
        _add_section_heading(pdf, "Notes & Recommendations")
        pdf.set_font("Helvetica", "", 10)
        pdf.set_text_color(40, 40, 40)
        if inp.notes:
            pdf.multi_cell(0, 5, _txt(inp.notes), new_x="LMARGIN", new_y="NEXT")
            pdf.ln(3)
        if inp.recommendations:
            pdf.set_font("Helvetica", "B", 10)
            pdf.cell(0, 6, "Recommended Actions:", new_x="LMARGIN", new_y="NEXT")
            pdf.set_font("Helvetica", "", 10)
            for i, rec in enumerate(inp.recommendations, start=1):
                pdf.multi_cell(0, 5, _txt(f"{i}. {rec}"), new_x="LMARGIN", new_y="NEXT")

    # --- Sign-off ---
    pdf.add_page()
    _add_page_title(pdf, "Report Sign-off")
    _add_signoff(pdf, inp, stats)

    return bytes(pdf.output())


def format_test_reading(
    test_type: TestType,
    reading: dict,
    computed: Optional[ComputedResult],
) -> str:
    """One-line digest of a test for the results tables."""
    calcs = computed.calculations if computed is not None else {}

    if test_type == TestType.BUILDING_PRESSURE:
        return f'{_fv(reading.get("deltaP_inwc"), 3)}" w.c. (Target: 0.02-0.05)'
    if test_type == TestType.AIRFLOW_STATIC:
        return f'{_fv(reading.get("supplyCFM"), 0)} CFM, {_fv(calcs.get("cfm_per_ton"), 0)} CFM/ton'
    if test_type == TestType.REFRIGERANT_CIRCUIT:
        return f'SH: {_fv(calcs.get("superheat_F"), 1)}°F, SC: {_fv(calcs.get("subcooling_F"), 1)}°F'
    if test_type == TestType.COIL_PERFORMANCE:
        return (
            f'Supply DP: {_fv(calcs.get("supply_dew_point_F"), 1)}°F, '
            f'ΔT: {_fv(calcs.get("temperature_drop_F"), 1)}°F'
        )
    if computed is not None:
        return computed.summary
    return "See detailed results"


def _format_weather(inp: SessionReportInput) -> Optional[str]:
    parts = []
    if inp.weather.outdoorTemp is not None:
        parts.append(f"{inp.weather.outdoorTemp:.0f}°F DB")
    if inp.weather.outdoorRH is not None:
        parts.append(f"{inp.weather.outdoorRH:.0f}% RH")
    return ", ".join(parts) or None


def _add_page_title(pdf: FPDF, text: str) -> None:
    pdf.set_font("Helvetica", "B", 16)
    pdf.set_text_color(30, 30, 30)
    pdf.cell(0, 10, _txt(text), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(2)


def _add_section_heading(pdf: FPDF, text: str) -> None:
    """Add a section heading."""
    pdf.set_font("Helvetica", "B", 13)
    pdf.set_text_color(30, 30, 30)
    pdf.cell(0, 9, _txt(text), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(1)


def _add_info_lines(pdf: FPDF, rows: list[tuple[str, Optional[str]]]) -> None:
    """Label/value pairs; rows with no value are left out."""
    for label, value in rows:
        if value is None:
            continue
        pdf.set_font("Helvetica", "B", 10)
        pdf.set_text_color(60, 60, 60)
        pdf.cell(45, 6, _txt(label))
        pdf.set_font("Helvetica", "", 10)
        pdf.set_text_color(30, 30, 30)
        pdf.cell(0, 6, _txt(value), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(3)


def _add_table_header(pdf: FPDF, cols: list[tuple[str, int]]) -> None:
    pdf.set_font("Helvetica", "B", 8)
    pdf.set_fill_color(230, 230, 230)
    pdf.set_text_color(30, 30, 30)
    for label, width in cols:
        pdf.cell(width, 6, label, border=1, fill=True, align="C")
    pdf.ln()
    pdf.set_font("Helvetica", "", 8)
    pdf.set_text_color(40, 40, 40)


def _add_units_table(pdf: FPDF, inp: SessionReportInput) -> None:
    """Render the equipment summary table."""
    _add_table_header(pdf, _UNIT_COLS)
    for unit in inp.units:
        make_model = " ".join(p for p in (unit.make, unit.model) if p) or "N/A"
        vals = [
            unit.label,
            make_model,
            f"{_fv(unit.tons, 1)} tons" if unit.tons is not None else "N/A",
            unit.refrigerant or "N/A",
        ]
        for (_, width), val in zip(_UNIT_COLS, vals):
            pdf.cell(width, 5, _txt(val)[:40], border=1)
        pdf.ln()


def _add_results_table(pdf: FPDF, tests: list[ResultRecord]) -> None:
    """Render one row per test: type, unit, digest, verdict."""
    _add_table_header(pdf, _RESULT_COLS)
    for record in tests:
        vals = [
            TEST_TYPE_NAMES[record.test_type],
            record.unit_label or "N/A",
            format_test_reading(record.test_type, record.reading, record.computed),
            _status(record.verdict()),
        ]
        for i, ((_, width), val) in enumerate(zip(_RESULT_COLS, vals)):
            align = "C" if i == len(vals) - 1 else "L"
            pdf.cell(width, 5, _txt(val)[:70], border=1, align=align)
        pdf.ln()
    pdf.ln(4)


def _add_check_details(pdf: FPDF, tests: list[ResultRecord]) -> None:
    """Render every check of every computed test."""
    computed_tests = [t for t in tests if t.computed is not None]
    if not computed_tests:
        return

    _add_section_heading(pdf, "Check Details")
    for record in computed_tests:
        title = TEST_TYPE_NAMES[record.test_type]
        if record.unit_label:
            title = f"{title} - {record.unit_label}"
        pdf.set_font("Helvetica", "B", 9)
        pdf.set_text_color(30, 30, 30)
        pdf.cell(0, 6, _txt(title), new_x="LMARGIN", new_y="NEXT")

        _add_table_header(pdf, _CHECK_COLS)
        for name, check in record.computed.checks.items():
            vals = [
                name.replace("_", " "),
                _fv(check.value),
                check.target,
                _status(check.passed),
                check.message,
            ]
            for (_, width), val in zip(_CHECK_COLS, vals):
                pdf.cell(width, 5, _txt(val)[:55], border=1)
            pdf.ln()
        pdf.ln(3)


def _add_signoff(pdf: FPDF, inp: SessionReportInput, stats: SessionStatistics) -> None:
    _add_section_heading(pdf, "Report Summary")
    pdf.set_font("Helvetica", "", 10)
    pdf.set_text_color(40, 40, 40)

    date = inp.started_at.strftime("%B %d, %Y")
    lines = [
        f"This report documents the commissioning activities performed on {date} "
        f"for {inp.project} - {inp.area}.",
        f"A total of {len(inp.tests)} tests were conducted with {stats.passed} passing, "
        f"{stats.failed} failing, and {stats.pending} pending completion.",
    ]
    if stats.failed == 0:
        lines.append("All systems tested are performing within acceptable parameters.")
    else:
        lines.append(f"{stats.failed} item(s) require attention as noted in this report.")
    for line in lines:
        pdf.multi_cell(0, 5, _txt(line), new_x="LMARGIN", new_y="NEXT")
        pdf.ln(1)

    pdf.ln(4)
    _add_section_heading(pdf, "Signatures")
    signers = [
        ("Commissioning Engineer", inp.engineer, inp.engineer_email, date),
        ("Reviewer", None, None, "_________________"),
    ]
    for role, name, email, signed_on in signers:
        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(0, 6, f"{role}:", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", "", 10)
        for line in (name, email):
            if line:
                pdf.cell(0, 5, _txt(line), new_x="LMARGIN", new_y="NEXT")
        pdf.ln(10)
        pdf.line(pdf.l_margin, pdf.get_y(), pdf.l_margin + 90, pdf.get_y())
        pdf.set_font("Helvetica", "", 7)
        pdf.cell(0, 4, "Signature", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", "", 10)
        pdf.cell(0, 6, f"Date: {signed_on}", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(8)


def _status(verdict: Optional[bool]) -> str:
    if verdict is True:
        return "PASS"
    if verdict is False:
        return "FAIL"
    return "PENDING"


def _txt(text: str) -> str:
    """Fold text into latin-1 for the core Helvetica font."""
    for src, dst in _TEXT_REPLACEMENTS.items():
        text = text.replace(src, dst)
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _fv(val, decimals: int = 2) -> str:
    """Format a value for display, handling None gracefully."""
    if val is None:
        return "N/A"
    if isinstance(val, float):
        return f"{val:.{decimals}f}"
    return str(val)
