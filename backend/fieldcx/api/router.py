"""
Top-level API router that aggregates all sub-routers.
"""

from fastapi import APIRouter

from fieldcx.api.results import router as results_router
from fieldcx.api.report import router as report_router

router = APIRouter()
router.include_router(results_router)
router.include_router(report_router)
