"""
API route for PDF commissioning report generation.
"""

import re

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from fieldcx.models.report import SessionReportInput
from fieldcx.engine.report_generator import generate_report

router = APIRouter(prefix="/api/v1", tags=["report"])


@router.post("/report/generate")
async def create_report(body: SessionReportInput) -> Response:
    """Generate a session PDF report and return it as a downloadable file."""
    try:
        pdf_bytes = generate_report(body)
        return Response(
            content=pdf_bytes,
            media_type="application/pdf",
            headers={
                "Content-Disposition": f'attachment; filename="{report_filename(body)}"',
            },
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))


def report_filename(body: SessionReportInput) -> str:
    """<session-title>-<YYYY-MM-DD>.pdf with unsafe characters replaced."""
    title = body.session_title or "Session"
    safe_title = re.sub(r"[^a-zA-Z0-9_-]", "-", title)
    return f"{safe_title}-{body.started_at:%Y-%m-%d}.pdf"
