"""GET /v1/home - Headline figures for the home screen"""

import time
from typing import Tuple
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from household_ledger.api.dependencies import get_request_id, get_target_month
from household_ledger.api.v1.schemas import HomeResponse
from household_ledger.config import settings
from household_ledger.domain.ledger import home_summary
from household_ledger.infrastructure.database.repositories import HouseholdRepository, TransactionRepository
from household_ledger.infrastructure.database.session import get_db
from household_ledger.infrastructure.observability.logging import log_aggregation
from household_ledger.infrastructure.observability.metrics import record_aggregation

router = APIRouter()


@router.get("/home", response_model=HomeResponse)
def get_home(
    request: Request,
    target: Tuple[int, int] = Depends(get_target_month),
    db: Session = Depends(get_db),
):
    start_time = time.time()
    year, month = target

    snapshot = TransactionRepository(db).list_all()
    summary = home_summary(
        snapshot,
        HouseholdRepository(db).base_income(),
        year,
        month,
        recent_limit=settings.recent_transactions_limit,
    )

    duration_ms = (time.time() - start_time) * 1000
    record_aggregation("home")
    log_aggregation(get_request_id(request), "home", summary.month_key, len(snapshot), duration_ms)

    return HomeResponse.from_domain(summary)
