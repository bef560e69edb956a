"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from .funds import router as funds_router
from .insights import router as insights_router
from .recommendations import router as recommendations_router
from .sip import router as sip_router
from .stocks import router as stocks_router

api_router = APIRouter()
api_router.include_router(stocks_router, prefix="/stocks", tags=["stocks"])
api_router.include_router(funds_router, prefix="/funds", tags=["funds"])
api_router.include_router(sip_router, prefix="/sip", tags=["sip"])
api_router.include_router(insights_router, prefix="/insights", tags=["insights"])
api_router.include_router(recommendations_router, prefix="/recommendations", tags=["recommendations"])

__all__ = ["api_router"]
