"""GET /v1/analytics - Health score and income/expense trend"""

import time
from typing import Tuple
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from household_ledger.api.dependencies import get_request_id, get_target_month
from household_ledger.api.v1.schemas import AnalyticsResponse
from household_ledger.config import settings
from household_ledger.domain.ledger import build_health_report, monthly_trend
from household_ledger.infrastructure.database.repositories import HouseholdRepository, TransactionRepository
from household_ledger.infrastructure.database.session import get_db
from household_ledger.infrastructure.observability.logging import log_aggregation
from household_ledger.infrastructure.observability.metrics import record_aggregation

router = APIRouter()


@router.get("/analytics", response_model=AnalyticsResponse)
def get_analytics(
    request: Request,
    target: Tuple[int, int] = Depends(get_target_month),
    months: int = Query(settings.trend_months, ge=1, le=24, description="Trend length in months"),
    db: Session = Depends(get_db),
):
    """Health report for the target month plus the trailing trend ending on it"""
    start_time = time.time()
    year, month = target

    snapshot = TransactionRepository(db).list_all()
    base_income = HouseholdRepository(db).base_income()
    report = build_health_report(snapshot, base_income, year, month)
    trend = monthly_trend(snapshot, base_income, year, month, months=months)

    duration_ms = (time.time() - start_time) * 1000
    record_aggregation("analytics", report.status)
    log_aggregation(get_request_id(request), "analytics", report.month_key, len(snapshot), duration_ms)

    return AnalyticsResponse.from_domain(report, trend)
