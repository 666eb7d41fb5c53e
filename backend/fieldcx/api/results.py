"""
API routes for computing test results.
"""

import logging

from fastapi import APIRouter, HTTPException

from fieldcx.engine.dispatcher import compute_test_result
from fieldcx.errors import UnknownTestTypeError
from fieldcx.models.readings import parse_reading
from fieldcx.models.requests import ComputeRequest, ResultCreate, ResultResponse
from fieldcx.models.results import ComputedResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["tests"])


@router.post("/tests/compute", response_model=ComputedResult)
async def compute_test(data: ComputeRequest) -> ComputedResult:
    """
    Compute derived values and pass/fail checks for one reading.

    The reading is validated against the schema for its test type first.
    """
    try:
        return compute_test_result(data.test_type, data.reading, data.weather)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.post("/tests", response_model=ResultResponse)
async def record_test(data: ResultCreate) -> ResultResponse:
    """
    Validate a reading and attach its computed result.

    A reading that fails schema validation is rejected. A computation
    failure is not: the result comes back with computed/pass left empty so
    the raw reading can still be stored.
    """
    result = ResultResponse(
        session_id=data.session_id,
        unit_label=data.unit_label,
        test_type=data.test_type,
        reading=data.reading,
        notes=data.notes,
    )

    try:
        reading = parse_reading(data.test_type, data.reading)
    except UnknownTestTypeError as e:
        logger.warning("Recording reading without computation: %s", e)
        return result
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        computed = compute_test_result(data.test_type, reading, data.weather)
    except Exception:
        logger.exception("Computation failed for %s reading", data.test_type)
        return result

    return result.model_copy(update={
        "reading": reading.model_dump(mode="json", exclude_none=True),
        "computed": computed,
        "passed": computed.passed,
    })
